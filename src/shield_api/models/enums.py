"""领域枚举定义。"""

from enum import IntEnum


class AccountState(IntEnum):
    """账号生命周期状态，持久化为小整数。"""

    DELETED = 0  # 已注销，不允许登录。
    ACTIVE = 1  # 正常可用。
    PENDING_DELETE = 2  # 注销冷静期，登录时需签发复活票据。
    LEGAL_HOLD = 3  # 法务冻结，不允许登录。

    @classmethod
    def from_code(cls, code: int | None) -> "AccountState | None":
        """将库内整数转换为状态枚举，未知取值返回 None。"""
        if code is None:
            return None
        try:
            return cls(code)
        except ValueError:
            return None

    @property
    def can_login(self) -> bool:
        """仅正常与注销冷静期账号可完成登录。"""
        return self in (AccountState.ACTIVE, AccountState.PENDING_DELETE)
