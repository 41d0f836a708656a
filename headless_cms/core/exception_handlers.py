"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from headless_cms.core.config import get_settings
from headless_cms.domain.exceptions import CmsException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status when applicable
_ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "AUTHENTICATION_ERROR": 401,
    "VALIDATION_ERROR": 400,
    "INTERNAL_ERROR": 500,
    "DOCUMENT_BATCH_DELETE_ERROR": 500,
    "ASSET_STORE_CONFIG_ERROR": 500,
    "ASSET_DELETE_ERROR": 502,
    "DOCUMENT_STORE_ERROR": 502,
}


def _cms_exception_handler(request: Request, exc: CmsException) -> JSONResponse:
    """Return JSON from CmsException.to_dict() with appropriate status code.

    Server-side failures keep their details out of the body unless debug is True.
    """
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    content = exc.to_dict()
    if status >= 500:
        logger.error(
            "%s on %s %s: %s %s",
            exc.error_code,
            request.method,
            request.url.path,
            exc.message,
            exc.details,
        )
        if not get_settings().debug:
            content["details"] = {}
    return JSONResponse(status_code=status, content=content)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: CmsException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(CmsException, _cms_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
