"""登录令牌与一次性票据模型。"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from shield_api.models.base import Base


class GrantTicket(Base):
    """新设备授权票据，每个账号仅保留最新一张。"""

    __tablename__ = "grant_tickets"

    uid: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    ticket: Mapped[str] = mapped_column(String(32), nullable=False)


class ReactivateTicket(Base):
    """注销冷静期账号的复活票据，每个账号仅保留最新一张。"""

    __tablename__ = "reactivate_tickets"

    uid: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    ticket: Mapped[str] = mapped_column(String(32), nullable=False)


class LoginToken(Base):
    """按 (uid, device) 唯一的登录令牌。"""

    __tablename__ = "login_tokens"

    uid: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    device: Mapped[str] = mapped_column(String(128), primary_key=True)
    token: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
