"""账号注册表单结构。"""

from pydantic import BaseModel, Field


class RegisterForm(BaseModel):
    """网页注册表单，字段规则由通用校验器执行。"""

    username: str = Field(min_length=2, max_length=64, description="用户名。")
    email: str = Field(
        max_length=128,
        pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$",
        description="邮箱。",
    )
    passwordv1: str = Field(min_length=8, max_length=128, description="登录密码。")
    # 仅用于确认第一次输入的密码。
    passwordv2: str = Field(description="确认密码。")
