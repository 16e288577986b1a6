"""Rate limiter shared by main.py and the routers.

Kept out of main.py so routers can decorate endpoints without a circular import.
"""

from fastapi import Request
from slowapi import Limiter

from helpers.request_utils import get_client_ip
from models.config import settings

SUBMISSION_RATE_LIMIT = "10/minute"
CONTACT_RATE_LIMIT = "5/hour"
CHAT_RATE_LIMIT = "20/minute"


def client_key(request: Request) -> str:
    """Rate-limit key: the real client IP, looking through proxy headers."""
    return get_client_ip(request) or "unknown"


limiter = Limiter(key_func=client_key, enabled=settings.RATE_LIMIT_ENABLED)
