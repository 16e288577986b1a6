"""
Security headers middleware for FastAPI.

Adds standard security headers to every response.
"""

from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from models.config import settings

# Proof files may be cached privately by the browser
FILES_PATH_PREFIX = "/api/files/"

PERMISSIONS_POLICY = ", ".join(
    f"{feature}=()"
    for feature in (
        "accelerometer",
        "camera",
        "geolocation",
        "gyroscope",
        "magnetometer",
        "microphone",
        "payment",
        "usb",
    )
)

# Scam education videos are embedded from YouTube
CONTENT_SECURITY_POLICY = (
    "default-src 'self'; "
    "img-src 'self' data: https://i.ytimg.com; "
    "frame-src https://www.youtube.com https://www.youtube-nocookie.com; "
    "connect-src 'self'; "
    "frame-ancestors 'self'"
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds security headers to all responses.

    HSTS is only sent in production, where the API sits behind HTTPS.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "SAMEORIGIN"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = PERMISSIONS_POLICY
        response.headers["Content-Security-Policy"] = CONTENT_SECURITY_POLICY

        if settings.ENVIRONMENT == "production":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        if "Cache-Control" not in response.headers:
            if request.url.path.startswith(FILES_PATH_PREFIX):
                response.headers["Cache-Control"] = "private, max-age=3600"
            else:
                response.headers["Cache-Control"] = "no-store, max-age=0"

        return response
