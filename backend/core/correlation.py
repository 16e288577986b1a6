"""
Request-scoped correlation IDs.

Every request gets a short ID that is echoed back in the `X-Correlation-ID`
header, attached to log lines and returned in error bodies so a reporter can
quote it when something goes wrong.
"""

import uuid
from contextvars import ContextVar

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

CORRELATION_HEADER = "X-Correlation-ID"


def generate_correlation_id() -> str:
    """Return an 8 character hex ID, short enough to read over the phone."""
    return uuid.uuid4().hex[:8]


def get_correlation_id() -> str:
    """Correlation ID of the current request, or empty string outside one."""
    return correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> None:
    correlation_id_var.set(correlation_id)


def resolve_correlation_id(incoming: str | None) -> str:
    """
    Reuse a caller-supplied correlation ID when it looks sane.

    Proxies and the frontend may already have minted one; anything empty or
    suspiciously long is replaced with a fresh ID.
    """
    if incoming and 0 < len(incoming) <= 64 and incoming.isprintable():
        return incoming
    return generate_correlation_id()
