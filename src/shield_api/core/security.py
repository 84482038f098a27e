"""客户端口令解码与进程级私钥。"""

import base64
import binascii
import logging
from functools import lru_cache
from pathlib import Path

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from shield_api.core.config import get_settings

logger = logging.getLogger(__name__)


class CredentialError(ValueError):
    """客户端提交的口令无法还原为明文。"""


class MalformedCredential(CredentialError):
    """口令不是合法的 base64 文本。"""


class DecryptionFailed(CredentialError):
    """口令密文无法用服务端私钥解密。"""


@lru_cache
def get_private_key() -> RSAPrivateKey:
    """读取并缓存 RSA 私钥。

    私钥只在首次调用时加载，之后整个进程共享同一只读对象；
    应用启动时会主动调用一次，加载失败直接中断启动。
    """
    path = Path(get_settings().private_key_path)
    key = serialization.load_pem_private_key(path.read_bytes(), password=None)
    if not isinstance(key, RSAPrivateKey):
        raise TypeError(f"private key at {path} is not an RSA key")
    logger.info("loaded session private key path=%s key_size=%s", path, key.key_size)
    return key


def _b64decode(payload: str) -> bytes:
    try:
        return base64.b64decode(payload.encode("ascii"), validate=True)
    except (UnicodeEncodeError, binascii.Error) as exc:
        raise MalformedCredential("password is not valid base64") from exc


def decode_password(payload: str, is_crypto: bool) -> str:
    """将客户端提交的口令还原为明文。

    解码后的字节按 UTF-8 解释；非法 UTF-8 返回空串，空口令不会匹配任何已存储哈希。
    """
    raw = _b64decode(payload)
    if is_crypto:
        try:
            raw = get_private_key().decrypt(raw, padding.PKCS1v15())
        except ValueError as exc:
            raise DecryptionFailed("password ciphertext rejected") from exc

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return ""
