"""登录与令牌校验请求/响应结构。"""

from pydantic import BaseModel, Field

from shield_api.schemas.common import BaseSchema

REALNAME_OP_NONE = "None"


class LoginRequest(BaseModel):
    """账号口令登录请求。"""

    account: str = Field(max_length=128, description="用户名或邮箱。", examples=["traveler"])
    password: str = Field(
        max_length=4096,
        description="base64 编码的口令；is_crypto 为真时为 RSA 加密后的密文。",
        examples=["U3Ryb25nUGFzc3cwcmQh"],
    )
    is_crypto: bool = Field(default=False, description="口令是否经过 RSA 加密。")


class VerifyRequest(BaseModel):
    """登录令牌校验请求。"""

    uid: int = Field(description="账号 uid。")
    token: str = Field(max_length=64, description="此前登录签发的登录令牌。")


class AccountData(BaseSchema):
    """登录成功后返回的账号快照。"""

    uid: int = Field(description="账号 uid。")
    name: str = Field(description="用户名（脱敏）。")
    email: str = Field(description="邮箱（脱敏）。")
    mobile: str = Field(description="手机号（脱敏）。")
    is_email_verify: bool = Field(default=False, description="邮箱是否已验证。")
    realname: str = Field(default="", description="实名信息（脱敏）。")
    identity_card: str = Field(default="", description="证件号（脱敏）。")
    token: str = Field(description="按 (uid, 设备) 唯一的登录令牌。")
    country: str = Field(description="按请求 IP 解析的国家代码，无法解析时为 ZZ。")
    device_grant_ticket: str | None = Field(default=None, description="新设备授权票据。")
    reactivate_ticket: str | None = Field(default=None, description="注销冷静期复活票据。")


class LoginResult(BaseSchema):
    """登录/令牌校验结果。"""

    account: AccountData = Field(description="账号快照。")
    realperson_required: bool = Field(default=False, description="是否需要真人核验。")
    device_grant_required: bool = Field(description="当前设备是否需要额外授权。")
    safe_mobile_required: bool = Field(default=False, description="是否需要绑定安全手机。")
    reactivate_required: bool = Field(description="账号是否处于注销冷静期需要复活。")
    realname_operation: str = Field(default=REALNAME_OP_NONE, description="实名认证操作状态。")
