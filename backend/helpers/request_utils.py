"""
Client details used for rate-limit keys and request logs.
"""

from typing import NamedTuple, Optional

from fastapi import Request

from models.config import settings

# Checked in order; X-Forwarded-For is handled separately (first hop wins)
PROXY_IP_HEADERS = ("CF-Connecting-IP", "X-Real-IP")
USER_AGENT_MAX_LENGTH = 200


class ClientInfo(NamedTuple):
    ip: Optional[str]
    user_agent: Optional[str]


def _forwarded_ip(request: Request) -> Optional[str]:
    for header in PROXY_IP_HEADERS:
        value = (request.headers.get(header) or "").strip()
        if value:
            return value

    forwarded_for = request.headers.get("X-Forwarded-For") or ""
    first_hop = forwarded_for.split(",")[0].strip()
    return first_hop or None


def get_client_ip(request: Request) -> Optional[str]:
    """
    The reporter's IP address.

    With TRUST_PROXY_HEADERS on, Cloudflare, nginx and X-Forwarded-For headers
    are consulted before the socket peer address.
    """
    if settings.TRUST_PROXY_HEADERS:
        forwarded = _forwarded_ip(request)
        if forwarded:
            return forwarded

    return request.client.host if request.client else None


def get_user_agent(request: Request) -> Optional[str]:
    user_agent = request.headers.get("User-Agent")
    return user_agent[:USER_AGENT_MAX_LENGTH] if user_agent else None


def get_client_info(request: Request) -> ClientInfo:
    return ClientInfo(ip=get_client_ip(request), user_agent=get_user_agent(request))
