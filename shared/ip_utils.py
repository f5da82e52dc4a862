"""
Client IP resolution for FastAPI requests.

The resolved address is forwarded to the verification endpoint as
``remoteip``, so anything that does not parse as an IP address is ignored
rather than passed along.
"""

from __future__ import annotations

import ipaddress

from fastapi import Request

_PROXY_HEADERS: tuple[str, ...] = (
    "CF-Connecting-IP",
    "True-Client-IP",
    "X-Forwarded-For",
    "X-Real-IP",
)


def _parse_ip(value: str) -> str:
    candidate = value.strip()
    try:
        return str(ipaddress.ip_address(candidate))
    except ValueError:
        return ""


def get_client_ip(request: Request) -> str:
    """Extract the real client IP from a FastAPI ``Request``.

    Checks proxy headers in priority order before falling back to the
    direct connection address:

    1. ``CF-Connecting-IP``: Cloudflare
    2. ``True-Client-IP``: Akamai and others
    3. ``X-Forwarded-For``: standard proxy header (first IP in list)
    4. ``X-Real-IP``: nginx / other reverse proxies

    Returns:
        The resolved client IP string, or ``""`` if none can be found.
    """
    for header in _PROXY_HEADERS:
        header_value: str | None = request.headers.get(header)
        if header_value:
            client_ip = _parse_ip(header_value.split(",")[0])
            if client_ip:
                return client_ip

    if request.client is None:
        return ""
    return _parse_ip(request.client.host)
