"""服务层能力导出集合。"""

from shield_api.services.accounts import RegistrationRejected, account_exists, create_account, sdk_redirect_url
from shield_api.services.authentication import find_account, login, verify
from shield_api.services.devices import needs_grant, touch_device
from shield_api.services.geo import ip_to_country
from shield_api.services.passwords import hash_password, verify_password
from shield_api.services.sessions import issue_session
from shield_api.services.tokens import random_token

__all__ = [
    "RegistrationRejected",
    "account_exists",
    "create_account",
    "sdk_redirect_url",
    "find_account",
    "login",
    "verify",
    "needs_grant",
    "touch_device",
    "ip_to_country",
    "hash_password",
    "verify_password",
    "issue_session",
    "random_token",
]
