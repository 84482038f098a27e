"""登录会话签发。

账号已通过认证（口令校验或令牌校验）后，由本模块统一完成:
1) 注销冷静期账号签发复活票据
2) 判定设备信任，签发新设备授权票据或登记设备
3) 复用或签发 (uid, device) 登录令牌
4) 脱敏账号信息并解析国家代码，组装返回结构

第 1~3 步的写库均为尽力而为：失败只记录日志并回滚该步，不影响本次登录结果。
"""

import logging
from collections.abc import Callable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shield_api.db.upsert import upsert
from shield_api.models.account import Account
from shield_api.models.enums import AccountState
from shield_api.models.session import GrantTicket, LoginToken, ReactivateTicket
from shield_api.schemas.shield import AccountData, LoginResult
from shield_api.services.devices import needs_grant, touch_device
from shield_api.services.geo import ip_to_country
from shield_api.services.tokens import random_token
from shield_api.utils.clock import current_time
from shield_api.utils.masking import mask_string

logger = logging.getLogger(__name__)


def _best_effort(db: Session, action: str, write: Callable[[], None], **context: object) -> bool:
    """执行一次独立提交的副作用写入，失败时回滚并吞掉异常。"""
    try:
        write()
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("%s failed %s error=%s", action, " ".join(f"{k}={v}" for k, v in context.items()), exc)
        return False
    return True


def _store_ticket(db: Session, model: type[GrantTicket] | type[ReactivateTicket], uid: int, ticket: str) -> None:
    upsert(db, model, {"uid": uid, "ticket": ticket}, conflict_columns=("uid",), update_columns=("ticket",))


def _issue_reactivate_ticket(db: Session, uid: int, state: AccountState) -> str | None:
    if state != AccountState.PENDING_DELETE:
        return None
    ticket = random_token()
    _best_effort(
        db,
        "store reactivate ticket",
        lambda: _store_ticket(db, ReactivateTicket, uid, ticket),
        uid=uid,
    )
    return ticket


def _check_device(db: Session, uid: int, device: str) -> str | None:
    if needs_grant(db, uid, device):
        ticket = random_token()
        _best_effort(
            db,
            "store grant ticket",
            lambda: _store_ticket(db, GrantTicket, uid, ticket),
            uid=uid,
            device=device,
        )
        return ticket

    _best_effort(
        db,
        "touch device",
        lambda: touch_device(db, uid, device, current_time()),
        uid=uid,
        device=device,
    )
    return None


def _find_login_token(db: Session, uid: int, device: str) -> str | None:
    try:
        return db.execute(
            select(LoginToken.token).where(LoginToken.uid == uid).where(LoginToken.device == device)
        ).scalar_one_or_none()
    except SQLAlchemyError as exc:
        logger.warning("login token lookup failed uid=%s device=%s error=%s", uid, device, exc)
        db.rollback()
        return None


def _issue_login_token(db: Session, uid: int, device: str) -> str:
    existing = _find_login_token(db, uid, device)
    if existing:
        return existing

    token = random_token()
    # 并发登录同一 (uid, device) 时以最后一次写入为准。
    _best_effort(
        db,
        "store login token",
        lambda: upsert(
            db,
            LoginToken,
            {"uid": uid, "device": device, "token": token},
            conflict_columns=("uid", "device"),
            update_columns=("token",),
        ),
        uid=uid,
        device=device,
    )
    return token


def issue_session(db: Session, account: Account, state: AccountState, device: str, ip: str) -> LoginResult:
    """为已认证账号签发登录结果。"""
    # 先取快照：后续任一步回滚都会让会话内对象过期。
    uid, name, email, mobile = account.uid, account.name, account.email, account.mobile

    reactivate_ticket = _issue_reactivate_ticket(db, uid, state)
    grant_ticket = _check_device(db, uid, device)
    token = _issue_login_token(db, uid, device)

    logger.info(
        "session issued uid=%s device_grant=%s reactivate=%s",
        uid,
        grant_ticket is not None,
        reactivate_ticket is not None,
    )
    return LoginResult(
        account=AccountData(
            uid=uid,
            name=mask_string(name),
            email=mask_string(email),
            mobile=mask_string(mobile),
            token=token,
            country=ip_to_country(ip),
            device_grant_ticket=grant_ticket,
            reactivate_ticket=reactivate_ticket,
        ),
        device_grant_required=grant_ticket is not None,
        reactivate_required=reactivate_ticket is not None,
    )
