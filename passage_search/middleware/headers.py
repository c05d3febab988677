"""Header helpers shared by the request/correlation id middleware."""

import re
import uuid

# Safe for logging: alphanumeric, hyphen, underscore, dot; bounded length.
TRACE_ID_MAX_LENGTH = 64
TRACE_ID_ALLOWED_PATTERN = re.compile(
    r"^[a-zA-Z0-9_.-]{1," + str(TRACE_ID_MAX_LENGTH) + r"}$"
)


def get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive). Headers are (bytes, bytes)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


def is_safe_trace_id(raw: str | None) -> bool:
    return bool(raw) and TRACE_ID_ALLOWED_PATTERN.match(raw.strip()) is not None


def sanitize_trace_id(raw: str | None) -> str:
    """Return raw (stripped) if safe to log; otherwise a new UUID."""
    if not is_safe_trace_id(raw):
        return str(uuid.uuid4())
    return raw.strip()
