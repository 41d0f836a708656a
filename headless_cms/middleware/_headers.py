"""Header helpers shared by the raw-ASGI middleware."""

import re
import uuid

# Safe for logging: alphanumeric, hyphen, underscore; max length to avoid abuse.
TRACE_ID_MAX_LENGTH = 64
TRACE_ID_ALLOWED_PATTERN = re.compile(
    r"^[a-zA-Z0-9_-]{1," + str(TRACE_ID_MAX_LENGTH) + r"}$"
)


def get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive). Headers are (bytes, bytes)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


def sanitize_trace_id(raw: str | None) -> str | None:
    """Return raw stripped if it is safe to log, else None."""
    if not raw or not TRACE_ID_ALLOWED_PATTERN.match(raw.strip()):
        return None
    return raw.strip()


def new_trace_id() -> str:
    return str(uuid.uuid4())
