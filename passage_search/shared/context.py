"""Request context management using contextvars.

Async-safe storage for the request correlation id, read by the logging
filter and error responses.

Usage:
    token = set_correlation_id("abc123")
    cid = get_correlation_id()
    reset_correlation_id(token)
"""

from contextvars import ContextVar, Token

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def set_correlation_id(correlation_id: str | None) -> Token[str | None]:
    """Bind the correlation id for the current task; returns a token for reset."""
    return _correlation_id.set(correlation_id)


def reset_correlation_id(token: Token[str | None]) -> None:
    _correlation_id.reset(token)


def get_correlation_id() -> str | None:
    """Return the current correlation id, or None outside a request."""
    return _correlation_id.get()
