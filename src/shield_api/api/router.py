"""顶层路由注册。"""

from fastapi import APIRouter

from . import account, health, shield

# 国际服与国服客户端使用不同前缀，登录逻辑一致。
SHIELD_REGIONS = ("/hk4e_global", "/hk4e_cn")

api_router = APIRouter()

api_router.include_router(health.router)
for region in SHIELD_REGIONS:
    api_router.include_router(shield.router, prefix=region)
api_router.include_router(account.router)
