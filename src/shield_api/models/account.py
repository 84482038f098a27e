"""账号与设备模型。"""

from sqlalchemy import Integer, SmallInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from shield_api.models.base import Base
from shield_api.models.enums import AccountState


class Account(Base):
    """游戏账号实体。

    +---------------+--------------+------+-----+---------+----------------+
    | Field         | Type         | Null | Key | Default | Extra          |
    +---------------+--------------+------+-----+---------+----------------+
    | uid           | int          | NO   | PRI | NULL    | auto_increment |
    | name          | varchar(64)  | YES  |     | NULL    |                |
    | email         | varchar(128) | YES  |     | NULL    |                |
    | mobile        | varchar(32)  | YES  |     | NULL    |                |
    | password      | varchar(128) | YES  |     | NULL    |                |
    | state         | smallint     | NO   |     | 1       |                |
    | epoch_created | int          | NO   |     | 0       |                |
    +---------------+--------------+------+-----+---------+----------------+
    """

    __tablename__ = "accounts"

    uid: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 登录名，可为空（仅绑定第三方的账号）。
    name: Mapped[str | None] = mapped_column(String(64), index=True)
    email: Mapped[str | None] = mapped_column(String(128), index=True)
    mobile: Mapped[str | None] = mapped_column(String(32))
    # bcrypt 口令哈希；为空表示该账号未设置口令，登录时跳过口令校验。
    password: Mapped[str | None] = mapped_column(String(128))
    # 见 AccountState，读取时经 AccountState.from_code 转换。
    state: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=int(AccountState.ACTIVE))
    created_at: Mapped[int] = mapped_column("epoch_created", Integer, nullable=False, default=0)


class Device(Base):
    """账号已信任设备。

    存在任意一行即表示该账号已有设备历史。
    """

    __tablename__ = "devices"

    uid: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    # 客户端上报的设备标识（x-rpc-device_id）。
    device: Mapped[str] = mapped_column(String(128), primary_key=True)
    last_seen: Mapped[int] = mapped_column("epoch_lastseen", Integer, nullable=False, default=0)
