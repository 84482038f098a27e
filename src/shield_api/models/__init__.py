"""ORM 模型导出集合。"""

from shield_api.models.account import Account, Device
from shield_api.models.enums import AccountState
from shield_api.models.session import GrantTicket, LoginToken, ReactivateTicket

__all__ = [
    "Account",
    "AccountState",
    "Device",
    "GrantTicket",
    "LoginToken",
    "ReactivateTicket",
]
