"""Raw-ASGI middleware: request id, correlation id, security headers."""

from headless_cms.middleware.correlation_id import CorrelationIDMiddleware
from headless_cms.middleware.request_id import RequestIDMiddleware
from headless_cms.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "CorrelationIDMiddleware",
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
]
