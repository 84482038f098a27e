"""请求上下文依赖。

职责:
1. 强制要求客户端上报设备标识。
2. 解析客户端真实 IP（兼容 CDN 与反向代理）。
"""

from fastapi import HTTPException, Request, status

DEVICE_ID_HEADER = "x-rpc-device_id"
CF_HEADER = "CF-Connecting-IP"
PROXY_HEADER = "X-Real-IP"

MISSING_DEVICE_ID = f"Invalid request, missing '{DEVICE_ID_HEADER}' header."
MISSING_IP_ADDRESS = "Invalid request, missing client IP address."


def get_device_id(request: Request) -> str:
    """读取设备标识请求头，缺失时拒绝请求。"""
    device_id = request.headers.get(DEVICE_ID_HEADER)
    if not device_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MISSING_DEVICE_ID)
    return device_id


def get_client_ip(request: Request) -> str:
    """按 CDN 头、代理头、连接地址的顺序提取客户端 IP。"""
    for header in (CF_HEADER, PROXY_HEADER):
        ip = request.headers.get(header)
        if ip:
            return ip.strip()
    if request.client and request.client.host:
        return request.client.host
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MISSING_IP_ADDRESS)
