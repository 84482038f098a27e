"""健康检查接口。"""

from sqlalchemy import text
from sqlalchemy.orm import Session

from fastapi import APIRouter, Depends, status

from shield_api.db.session import get_db
from shield_api.schemas.common import ErrorResponse, MessageResponse
from shield_api.utils.response import success

router = APIRouter(prefix="/health", tags=["health"])


@router.get(
    "/live",
    summary="存活探针",
    description="用于容器编排系统检测服务进程是否存活。",
    status_code=status.HTTP_200_OK,
    response_model=MessageResponse[dict[str, str]],
    responses={500: {"model": ErrorResponse}},
)
def live():
    """仅表示进程存活，不校验外部依赖。"""
    return success({"status": "ok"})


@router.get(
    "/ready",
    summary="就绪探针",
    description="通过数据库连通性检测服务是否具备对外提供能力。",
    status_code=status.HTTP_200_OK,
    response_model=MessageResponse[dict[str, str]],
    responses={500: {"model": ErrorResponse}},
)
def ready(db: Session = Depends(get_db)):
    """执行轻量数据库探活语句验证数据库可用。"""
    db.execute(text("select 1"))
    return success({"status": "ready"})
