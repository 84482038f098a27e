"""时间工具。"""

from datetime import datetime, timezone


def current_time() -> int:
    """返回当前 UNIX 时间戳（秒）。"""
    return int(datetime.now(timezone.utc).timestamp())
