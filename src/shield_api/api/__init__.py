"""路由模块导出集合。"""

from . import account, health, shield

__all__ = [
    "account",
    "health",
    "shield",
]
