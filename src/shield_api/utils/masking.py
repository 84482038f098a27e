"""敏感字段脱敏展示。"""

MASK = "****"


def mask_string(value: str | None) -> str:
    """按固定模式脱敏姓名、邮箱、手机号。

    长度不足 4 个字符时整体替换为等长星号；否则保留 1~2 个字符的前缀与后缀，
    中间固定替换为 4 个星号，不暴露原始长度。长度按字符计算。
    """
    if not value:
        return ""
    length = len(value)
    if length < 4:
        return "*" * length

    prefix = 2 if length >= 10 else 1
    suffix = 2 if length > 5 else 1
    return f"{value[:prefix]}{MASK}{value[-suffix:]}"
