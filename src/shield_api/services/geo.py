"""客户端 IP 到国家代码的离线解析。"""

import ipaddress
import logging
from functools import lru_cache

import geoip2.database
from geoip2.errors import AddressNotFoundError, GeoIP2Error
from maxminddb.errors import InvalidDatabaseError

from shield_api.core.config import get_settings

logger = logging.getLogger(__name__)

UNKNOWN_COUNTRY = "ZZ"


@lru_cache
def _open_reader(path: str) -> geoip2.database.Reader | None:
    """打开并缓存国家库；库文件在进程生命周期内只读不变。"""
    try:
        return geoip2.database.Reader(path)
    except (OSError, InvalidDatabaseError, ValueError) as exc:
        logger.warning("geoip database unavailable path=%s error=%s", path, exc)
        return None


def ip_to_country(ip: str) -> str:
    """解析客户端 IP 所属国家代码，任何失败都回退为 ZZ。"""
    try:
        address = ipaddress.ip_address(ip.strip())
    except ValueError:
        logger.debug("unparsable client address %r", ip)
        return UNKNOWN_COUNTRY

    reader = _open_reader(get_settings().geoip_database_path)
    if reader is None:
        return UNKNOWN_COUNTRY

    try:
        code = reader.country(str(address)).country.iso_code
    except AddressNotFoundError:
        return UNKNOWN_COUNTRY
    except (GeoIP2Error, InvalidDatabaseError, ValueError, TypeError) as exc:
        logger.debug("geoip lookup failed address=%s error=%s", address, exc)
        return UNKNOWN_COUNTRY
    return code or UNKNOWN_COUNTRY
