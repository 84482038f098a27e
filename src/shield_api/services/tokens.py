"""随机令牌生成。"""

import secrets
import string

TOKEN_LENGTH = 32
_ALPHABET = string.ascii_letters + string.digits


def random_token(length: int = TOKEN_LENGTH) -> str:
    """生成定长字母数字随机串，用于登录令牌、授权票据与复活票据。"""
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))
