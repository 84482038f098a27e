"""登录与令牌校验入口。

两条入口仅在“如何确认账号身份”上不同，确认后统一交给会话签发。
认证路径上的失败对外一律表现为同一种拒绝，不区分账号不存在与口令错误。
"""

import logging

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shield_api.core.security import CredentialError, decode_password
from shield_api.exceptions import BadToken, DeviceMismatch, InvalidCredential, StorageUnavailable
from shield_api.models.account import Account
from shield_api.models.enums import AccountState
from shield_api.models.session import LoginToken
from shield_api.schemas.shield import LoginResult
from shield_api.services.passwords import verify_password
from shield_api.services.sessions import issue_session

logger = logging.getLogger(__name__)


def _login_state(account: Account) -> AccountState:
    """返回允许登录的账号状态，否则拒绝。"""
    state = AccountState.from_code(account.state)
    if state is None or not state.can_login:
        raise InvalidCredential(f"account uid={account.uid} state={account.state} cannot login")
    return state


def find_account(db: Session, username_or_email: str) -> Account | None:
    """按用户名或邮箱查询账号。"""
    return db.execute(
        select(Account)
        .where(or_(Account.name == username_or_email, Account.email == username_or_email))
        .order_by(Account.uid)
        .limit(1)
    ).scalar_one_or_none()


def login(db: Session, account_name: str, password: str, is_crypto: bool, device: str, ip: str) -> LoginResult:
    """账号口令登录。

    口令无法解码、账号不存在、状态不允许登录或口令不匹配均抛出 InvalidCredential；
    查询账号时数据库不可用抛出 StorageUnavailable。
    """
    # 口令解码先于任何数据库访问，畸形输入直接拒绝。
    try:
        plain = decode_password(password, is_crypto)
    except CredentialError as exc:
        raise InvalidCredential(str(exc)) from exc

    try:
        account = find_account(db, account_name)
    except SQLAlchemyError as exc:
        logger.error("account lookup failed error=%s", exc)
        raise StorageUnavailable("account lookup failed") from exc
    if account is None:
        raise InvalidCredential("no such account")

    state = _login_state(account)

    # 未设置口令的历史/第三方账号跳过口令校验。
    if account.password is not None and not verify_password(plain, account.password):
        raise InvalidCredential(f"password mismatch uid={account.uid}")

    return issue_session(db, account, state, device, ip)


def verify(db: Session, uid: int, token: str, device: str, ip: str) -> LoginResult:
    """使用已签发的登录令牌重新建立会话。

    令牌未知返回 BadToken，设备不符返回 DeviceMismatch，账号状态不允许登录返回 InvalidCredential。
    """
    try:
        entry = db.execute(
            select(LoginToken).where(LoginToken.uid == uid).where(LoginToken.token == token).limit(1)
        ).scalar_one_or_none()
        if entry is None:
            raise BadToken(f"unknown token uid={uid}")
        if entry.device != device:
            raise DeviceMismatch(f"token issued to another device uid={uid}")

        account = db.get(Account, uid)
    except SQLAlchemyError as exc:
        logger.error("token lookup failed uid=%s error=%s", uid, exc)
        raise StorageUnavailable("token lookup failed") from exc
    if account is None:
        raise BadToken(f"token owner missing uid={uid}")

    state = _login_state(account)
    return issue_session(db, account, state, device, ip)
