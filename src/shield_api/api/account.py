"""网页注册接口。

该页面由游戏内嵌网页打开，直接返回纯文本或重定向，不使用 SDK 响应结构。
"""

import logging

from fastapi import APIRouter, Depends, Form, Query, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shield_api.db.session import get_db
from shield_api.schemas.account import RegisterForm
from shield_api.services.accounts import (
    WEBVIEW_REQUEST_TYPE_SDK,
    RegistrationRejected,
    account_exists,
    create_account,
    sdk_redirect_url,
)
from shield_api.utils.response import DEFAULT_ERROR_MESSAGE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/account", tags=["account"])

REGISTER_PAGE = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>Register</title></head>
<body>
<form method="post">
  <input name="username" placeholder="Username" required>
  <input name="email" type="email" placeholder="Email" required>
  <input name="passwordv1" type="password" placeholder="Password" required>
  <input name="passwordv2" type="password" placeholder="Confirm password" required>
  <button type="submit">Register</button>
</form>
</body>
</html>
"""


def _bad_request(message: str) -> PlainTextResponse:
    return PlainTextResponse(message, status_code=status.HTTP_400_BAD_REQUEST)


def _server_error() -> PlainTextResponse:
    return PlainTextResponse(DEFAULT_ERROR_MESSAGE, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.get(
    "/register",
    summary="注册页面",
    description="返回账号注册表单页面。",
    response_class=HTMLResponse,
)
def account_register_page():
    """返回注册表单。"""
    return HTMLResponse(REGISTER_PAGE)


@router.post(
    "/register",
    summary="注册账号",
    description="提交注册表单创建账号；`type=sdk` 时重定向回游戏客户端并携带登录信息。",
    response_class=PlainTextResponse,
    responses={302: {"description": "回跳游戏客户端。"}, 400: {}, 500: {}},
)
def account_register(
    username: str = Form(default=""),
    email: str = Form(default=""),
    passwordv1: str = Form(default=""),
    passwordv2: str = Form(default=""),
    request_type: str | None = Query(default=None, alias="type"),
    db: Session = Depends(get_db),
):
    """创建账号。"""
    try:
        exists = account_exists(db, username, email)
    except SQLAlchemyError:
        logger.exception("account existence check failed")
        return _server_error()
    if exists:
        return _bad_request("An account with that username or email already exists.")

    try:
        form = RegisterForm(username=username, email=email, passwordv1=passwordv1, passwordv2=passwordv2)
    except ValidationError:
        return _bad_request("Invalid account data specified.")

    try:
        create_account(db, form)
    except RegistrationRejected as exc:
        return _bad_request(str(exc))
    except (SQLAlchemyError, ValueError):
        db.rollback()
        logger.exception("account creation failed")
        return _server_error()

    if request_type == WEBVIEW_REQUEST_TYPE_SDK:
        return RedirectResponse(
            sdk_redirect_url(form.username, form.passwordv1.strip()),
            status_code=status.HTTP_302_FOUND,
        )
    return PlainTextResponse("Account created. Please close this page and login in the game.")
