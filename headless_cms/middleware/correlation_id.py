"""Correlation ID middleware.

Propagates X-Correlation-ID across services (forward from client or reuse the request ID).
Uses raw ASGI (no BaseHTTPMiddleware).
"""

from collections.abc import Callable

from headless_cms.middleware._headers import get_header, new_trace_id, sanitize_trace_id


def CorrelationIDMiddleware(
    app: Callable, header_name: str = "X-Correlation-ID"
) -> Callable:
    """Add or forward X-Correlation-ID; fall back to request_id if set on scope state. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        correlation_id = (
            sanitize_trace_id(get_header(scope, header_name))
            or scope.get("state", {}).get("request_id")
            or new_trace_id()
        )
        scope.setdefault("state", {})["correlation_id"] = correlation_id

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((header_name.encode(), correlation_id.encode()))
                message["headers"] = headers
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
