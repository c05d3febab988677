"""Correlation ID middleware.

Forwards a client X-Correlation-ID (when safe to log) or falls back to the
request id, then to a new UUID. The id is echoed on the response and bound to
the logging context for the duration of the request. Raw ASGI.
"""

import uuid
from typing import Callable

from passage_search.middleware.headers import get_header, is_safe_trace_id
from passage_search.shared.context import reset_correlation_id, set_correlation_id


def CorrelationIDMiddleware(
    app: Callable, header_name: str = "X-Correlation-ID"
) -> Callable:
    """Add or forward X-Correlation-ID and bind it for log records. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        raw = get_header(scope, header_name)
        if is_safe_trace_id(raw):
            correlation_id = raw.strip()
        else:
            correlation_id = scope.get("state", {}).get("request_id") or str(uuid.uuid4())
        scope.setdefault("state", {})["correlation_id"] = correlation_id

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((header_name.encode(), correlation_id.encode()))
                message["headers"] = headers
            await send(message)

        token = set_correlation_id(correlation_id)
        try:
            await app(scope, receive, send_wrapper)
        finally:
            reset_correlation_id(token)

    return asgi_app
