"""游戏客户端账号登录接口。"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shield_api.db.session import get_db
from shield_api.dependencies import get_client_ip, get_device_id
from shield_api.schemas.common import ErrorResponse, MessageResponse
from shield_api.schemas.shield import LoginRequest, LoginResult, VerifyRequest
from shield_api.services import authentication
from shield_api.utils.response import success

router = APIRouter(prefix="/mdk/shield/api", tags=["shield"])


@router.post(
    "/login",
    summary="账号口令登录",
    description="使用用户名或邮箱 + 口令登录，返回脱敏账号快照、登录令牌及附加验证要求。",
    status_code=status.HTTP_200_OK,
    response_model=MessageResponse[LoginResult],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def shield_login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    device_id: str = Depends(get_device_id),
    ip_address: str = Depends(get_client_ip),
):
    """账号口令登录并签发登录令牌。"""
    result = authentication.login(
        db,
        account_name=payload.account,
        password=payload.password,
        is_crypto=payload.is_crypto,
        device=device_id,
        ip=ip_address,
    )
    return success(result)


@router.post(
    "/verify",
    summary="登录令牌校验",
    description="使用此前签发的登录令牌免密登录，令牌必须与当前设备匹配。",
    status_code=status.HTTP_200_OK,
    response_model=MessageResponse[LoginResult],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def shield_verify(
    payload: VerifyRequest,
    db: Session = Depends(get_db),
    device_id: str = Depends(get_device_id),
    ip_address: str = Depends(get_client_ip),
):
    """校验登录令牌并返回会话信息。"""
    result = authentication.verify(db, uid=payload.uid, token=payload.token, device=device_id, ip=ip_address)
    return success(result)
