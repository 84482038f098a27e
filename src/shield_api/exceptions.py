"""业务异常定义与应用异常处理注册。"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from shield_api.utils.response import DEFAULT_ERROR_MESSAGE, message_response

logger = logging.getLogger(__name__)

RETCODE_FAIL = -1
RETCODE_INVALID_CREDENTIAL = -101
RETCODE_BAD_TOKEN = -111
RETCODE_DEVICE_MISMATCH = -112


class ShieldError(Exception):
    """可直接映射为 SDK 响应的业务异常。"""

    retcode = RETCODE_FAIL
    message = DEFAULT_ERROR_MESSAGE
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, reason: str | None = None) -> None:
        # reason 仅用于日志，不写入响应。
        super().__init__(reason or self.message)
        self.reason = reason or self.message


class InvalidCredential(ShieldError):
    """账号不存在、口令错误、状态不允许登录或口令无法解码。

    对外统一为同一提示，不区分具体原因。
    """

    retcode = RETCODE_INVALID_CREDENTIAL
    message = "Incorrect username or password."


class BadToken(ShieldError):
    """登录令牌不存在或已失效。"""

    retcode = RETCODE_BAD_TOKEN
    message = "Invalid or expired login token."


class DeviceMismatch(ShieldError):
    """登录令牌属于其他设备。"""

    retcode = RETCODE_DEVICE_MISMATCH
    message = "Login token does not belong to this device."


class StorageUnavailable(ShieldError):
    """主流程数据库访问失败。"""

    retcode = RETCODE_FAIL
    message = DEFAULT_ERROR_MESSAGE
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def shield_exception_handler(request: Request, exc: ShieldError):
    """将业务异常包装为 SDK 响应结构。"""
    logger.info("request rejected path=%s retcode=%s reason=%s", request.url.path, exc.retcode, exc.reason)
    return JSONResponse(
        status_code=exc.status_code,
        content=message_response(exc.retcode, exc.message),
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """将协议异常统一包装为 SDK 响应结构。"""
    message = exc.detail if isinstance(exc.detail, str) else DEFAULT_ERROR_MESSAGE
    return JSONResponse(
        status_code=exc.status_code,
        content=message_response(RETCODE_FAIL, message),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """统一处理请求参数校验错误。"""
    logger.debug("request validation failed path=%s errors=%s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=message_response(RETCODE_FAIL, "Invalid request."),
    )


async def unexpected_exception_handler(request: Request, exc: Exception):
    """处理未捕获异常，避免内部细节泄露。"""
    logger.exception("unhandled error path=%s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=message_response(RETCODE_FAIL, DEFAULT_ERROR_MESSAGE),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """集中注册异常处理器。"""
    app.exception_handler(ShieldError)(shield_exception_handler)
    app.exception_handler(HTTPException)(http_exception_handler)
    app.exception_handler(RequestValidationError)(validation_exception_handler)
    app.exception_handler(Exception)(unexpected_exception_handler)
