"""设备信任判定。"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shield_api.db.upsert import upsert
from shield_api.models.account import Device

logger = logging.getLogger(__name__)


def needs_grant(db: Session, uid: int, device: str) -> bool:
    """判断 (uid, device) 是否需要新设备授权。

    1. 该设备已登记：无需授权。
    2. 账号尚无任何设备：首台设备自动信任。
    3. 账号已有其他设备：需要授权。

    查询出错时按需要授权处理。
    """
    try:
        known = db.execute(
            select(Device.uid).where(Device.uid == uid).where(Device.device == device).limit(1)
        ).first()
        if known is not None:
            return False

        any_device = db.execute(select(Device.uid).where(Device.uid == uid).limit(1)).first()
    except SQLAlchemyError as exc:
        logger.warning("device lookup failed uid=%s error=%s", uid, exc)
        db.rollback()
        return True

    return any_device is not None


def touch_device(db: Session, uid: int, device: str, now: int) -> None:
    """登记设备或刷新最近登录时间。"""
    upsert(
        db,
        Device,
        {"uid": uid, "device": device, "epoch_lastseen": now},
        conflict_columns=("uid", "device"),
        update_columns=("epoch_lastseen",),
    )
