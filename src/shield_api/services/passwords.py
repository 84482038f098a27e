"""账号口令哈希与校验。"""

from __future__ import annotations

import bcrypt

from shield_api.core.config import get_settings

# bcrypt 只使用前 72 字节。
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """使用 bcrypt 生成带随机盐的口令哈希。"""
    settings = get_settings()
    salt = bcrypt.gensalt(rounds=settings.password_hash_rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """校验口令是否匹配，任何内部错误均视为不匹配。"""
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("ascii"))
    except (ValueError, TypeError, UnicodeEncodeError):
        return False
