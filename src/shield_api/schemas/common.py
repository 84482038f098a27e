"""全局通用结构。

用于定义 SDK 统一响应包裹结构，便于在线接口文档展示与联调。
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field


class BaseSchema(BaseModel):
    """基础结构，开启对象映射能力。"""

    model_config = ConfigDict(from_attributes=True)


T = TypeVar("T")


class MessageResponse(BaseSchema, Generic[T]):
    """统一响应，成功与失败共用同一结构。"""

    retcode: int = Field(description="返回码，0 表示成功，非 0 表示具体拒绝类别。")
    message: str = Field(description="人类可读结果信息。")
    data: T | None = Field(default=None, description="业务返回数据主体，失败时为空。")


class ErrorResponse(MessageResponse[None]):
    """统一错误响应。"""
