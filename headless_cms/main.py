"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
See headless_cms.core.lifespan and headless_cms.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and optionally
clear get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from headless_cms.api import api_router
from headless_cms.core.config import get_settings
from headless_cms.core.exception_handlers import register_exception_handlers
from headless_cms.core.lifespan import create_lifespan
from headless_cms.core.limiter import limiter
from headless_cms.middleware import (
    CorrelationIDMiddleware,
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
)
from headless_cms.shared.telemetry.logging import setup_logging


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Middleware: last added = outermost. Order: request ID -> correlation ID -> security -> CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(CorrelationIDMiddleware, header_name=settings.correlation_id_header)
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api")

    return app
