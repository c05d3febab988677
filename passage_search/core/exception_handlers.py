"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain, data-access and
framework exceptions to HTTP responses. Every error body carries error,
message, correlation_id, timestamp and details.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from passage_search.core.config import get_settings
from passage_search.domain.exceptions import (
    PassageSearchException,
    ServiceUnavailableException,
)
from passage_search.infrastructure.resilience.policies import is_transient_database_error
from passage_search.shared.context import get_correlation_id
from passage_search.shared.telemetry.tracing import set_span_error

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status when applicable
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "RESOURCE_NOT_FOUND": 404,
    "SERVICE_UNAVAILABLE": 503,
    "CIRCUIT_OPEN": 503,
}

# Retry-After (seconds) sent with a 503 when the failure carries no hint.
DEFAULT_RETRY_AFTER_SECONDS = 5


def _correlation_id(request: Request) -> str | None:
    return getattr(request.state, "correlation_id", None) or get_correlation_id()


def error_body(
    request: Request,
    error: str,
    message: Any,
    details: Any = None,
) -> dict[str, Any]:
    """Standard error envelope."""
    return {
        "error": error,
        "message": message,
        "correlation_id": _correlation_id(request),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "details": details or {},
    }


def _retry_after_header(seconds: float | None) -> dict[str, str]:
    if seconds is None or seconds <= 0:
        seconds = DEFAULT_RETRY_AFTER_SECONDS
    return {"Retry-After": str(math.ceil(seconds))}


def _passage_search_exception_handler(
    request: Request, exc: PassageSearchException
) -> JSONResponse:
    """Return the exception envelope with the status mapped from error_code."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    headers: dict[str, str] | None = None
    if isinstance(exc, ServiceUnavailableException):
        status = 503
        headers = _retry_after_header(exc.retry_after_seconds)
        logger.warning("Service unavailable: %s", exc.message)
    return JSONResponse(
        status_code=status,
        content=error_body(request, exc.error_code, exc.message, exc.details),
        headers=headers,
    )


def _database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Transient data-access failures (retries exhausted) become 503; others 500."""
    if is_transient_database_error(exc):
        logger.warning("Data store unavailable: %s", type(exc).__name__)
        return JSONResponse(
            status_code=503,
            content=error_body(
                request,
                "SERVICE_UNAVAILABLE",
                "The data store is temporarily unavailable; try again later",
            ),
            headers=_retry_after_header(None),
        )
    return _generic_exception_handler(request, exc)


def _timeout_exception_handler(request: Request, exc: TimeoutError) -> JSONResponse:
    """An operation timed out on every attempt."""
    logger.warning("Operation timed out on every attempt")
    return JSONResponse(
        status_code=503,
        content=error_body(
            request,
            "SERVICE_UNAVAILABLE",
            "The operation timed out; try again later",
        ),
        headers=_retry_after_header(None),
    )


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content=error_body(
            request,
            "VALIDATION_ERROR",
            "Request validation failed",
            jsonable_encoder(exc.errors()),
        ),
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, "HTTP_ERROR", exc.detail),
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    set_span_error(exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content=error_body(request, "INTERNAL_ERROR", detail),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: PassageSearchException (and
    subclasses), SQLAlchemy errors, TimeoutError, RequestValidationError,
    StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(PassageSearchException, _passage_search_exception_handler)
    app.add_exception_handler(SQLAlchemyError, _database_exception_handler)
    app.add_exception_handler(TimeoutError, _timeout_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
