"""FastAPI 应用入口点。"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from shield_api.api.router import api_router
from shield_api.core.config import get_settings
from shield_api.core.security import get_private_key
from shield_api.exceptions import register_exception_handlers
from shield_api.middlewares import register_middlewares

settings = get_settings()
logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """初始化进程级日志格式。"""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """启动时加载私钥，缺失或格式错误直接终止启动。"""
    current = get_settings()
    configure_logging(current.log_level)
    get_private_key()
    logger.info("%s started env=%s", current.app_name, current.app_env)
    yield


def create_app() -> FastAPI:
    """创建并配置 FastAPI 应用实例。"""
    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        debug=settings.app_debug,
        lifespan=lifespan,
        description=(
            "游戏客户端账号登录网关。\n\n"
            "登录接口统一返回：`{retcode, message, data}`。\n"
            "设备标识通过 `x-rpc-device_id` 请求头传递。"
        ),
        openapi_tags=[
            {"name": "health", "description": "服务存活与就绪探针。"},
            {"name": "shield", "description": "账号口令登录与登录令牌校验。"},
            {"name": "account", "description": "网页账号注册。"},
        ],
    )

    register_middlewares(app)
    register_exception_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()
