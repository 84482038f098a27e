"""统一响应结构工具。"""

from typing import Any

from pydantic import BaseModel

RESPONSE_SUCCESS = 0
SUCCESS_MESSAGE = "OK"
DEFAULT_ERROR_MESSAGE = "An internal server error has occurred."


def message_response(retcode: int, message: str, data: Any = None) -> dict[str, Any]:
    """构造 SDK 统一响应结构：`{retcode, message, data}`。"""
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    return {
        "retcode": retcode,
        "message": message,
        "data": data,
    }


def success(data: Any) -> dict[str, Any]:
    """构造统一成功响应结构。"""
    return message_response(RESPONSE_SUCCESS, SUCCESS_MESSAGE, data)
