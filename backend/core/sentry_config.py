"""
Sentry SDK configuration.

Sentry stays disabled unless SENTRY_DSN is set. Reporter emails and bearer
tokens are scrubbed before events leave the process.
"""

import os
from typing import Any

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.loguru import LoguruIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
from sentry_sdk.types import Event, Hint

_UNSAMPLED_PATHS = {"/health", "/api/health"}


def _before_send(event: Event, hint: Hint) -> Event | None:
    """Drop user PII and credentials from error events."""
    user = event.get("user")
    if user:
        user.pop("email", None)
        user.pop("username", None)
        if "ip_address" in user:
            user["ip_address"] = "{{auto}}"

    request = event.get("request")
    if request and isinstance(request, dict):
        request.pop("cookies", None)
        headers = request.get("headers")
        if isinstance(headers, dict):
            for name in ("Authorization", "authorization"):
                if name in headers:
                    headers[name] = "[Filtered]"
        # Report bodies hold scammer and victim contact details
        request.pop("data", None)

    return event


def _traces_sampler(sampling_context: dict[str, Any]) -> float:
    if sampling_context.get("parent_sampled") is True:
        return 1.0

    path = sampling_context.get("asgi_scope", {}).get("path", "")
    if path in _UNSAMPLED_PATHS:
        return 0.0

    # Report submission is the write path worth watching
    if path.startswith("/api/scam-reports") or path.startswith("/api/auth"):
        return 0.5

    return 0.2


def init_sentry() -> None:
    """Initialize Sentry. Call before the FastAPI app is created."""
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return

    sentry_sdk.init(
        dsn=dsn,
        environment=os.getenv("ENVIRONMENT", "development"),
        release=os.getenv("SENTRY_RELEASE", "unknown"),
        send_default_pii=False,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
            LoguruIntegration(),
        ],
        traces_sampler=_traces_sampler,
        sample_rate=1.0,
        before_send=_before_send,
        attach_stacktrace=True,
        max_breadcrumbs=50,
        ignore_errors=[KeyboardInterrupt, SystemExit],
    )
