"""网页注册账号。"""

import logging
from urllib.parse import quote

from sqlalchemy.orm import Session

from shield_api.models.account import Account
from shield_api.models.enums import AccountState
from shield_api.schemas.account import RegisterForm
from shield_api.services.authentication import find_account
from shield_api.services.passwords import hash_password
from shield_api.utils.clock import current_time

logger = logging.getLogger(__name__)

WEBVIEW_REQUEST_TYPE_SDK = "sdk"
WEBVIEW_URL_REGISTER = "register"


class RegistrationRejected(ValueError):
    """注册请求不满足条件，message 可直接展示给用户。"""


def account_exists(db: Session, username: str, email: str) -> bool:
    """用户名或邮箱是否已被占用。"""
    return find_account(db, username) is not None or find_account(db, email) is not None


def create_account(db: Session, form: RegisterForm) -> Account:
    """校验两次口令一致后创建账号。"""
    password = form.passwordv1.strip()
    if password != form.passwordv2:
        raise RegistrationRejected("The passwords do not match.")

    account = Account(
        name=form.username,
        email=form.email,
        password=hash_password(password),
        state=int(AccountState.ACTIVE),
        created_at=current_time(),
    )
    db.add(account)
    db.commit()
    logger.info("account registered uid=%s", account.uid)
    return account


def sdk_redirect_url(username: str, password: str) -> str:
    """构造游戏内嵌网页回跳地址，客户端据此自动填充登录表单。"""
    params = f"username={quote(username, safe='')}&password={quote(password, safe='')}"
    return f"uniwebview://{WEBVIEW_URL_REGISTER}?{params}"
