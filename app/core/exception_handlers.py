"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to the error envelope
``{"success": false, "error": {"message", "statusCode", "details"?}}``.
Stack traces and driver messages never reach the client.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import MerchApiException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status when applicable
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "CONFLICT": 409,
    "BACKING_STORE_ERROR": 500,
    "CACHE_UNAVAILABLE": 500,
}


def error_body(
    message: str, status_code: int, details: Any | None = None
) -> dict[str, Any]:
    """Build the error envelope (shared with raw ASGI middleware)."""
    error: dict[str, Any] = {"message": message, "statusCode": status_code}
    if details:
        error["details"] = details
    return {"success": False, "error": error}


def _field_errors(exc: MerchApiException) -> list[dict[str, str]] | None:
    field = exc.details.get("field")
    if field:
        return [{"field": field, "message": exc.message}]
    return None


def _merch_exception_handler(request: Request, exc: MerchApiException) -> JSONResponse:
    """Return the error envelope with the status mapped from exc.error_code."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if status >= 500:
        logger.error(
            "%s on %s %s: %s",
            exc.error_code,
            request.method,
            request.url.path,
            exc.details,
        )
        return JSONResponse(status_code=status, content=error_body(exc.message, status))
    return JSONResponse(
        status_code=status,
        content=error_body(exc.message, status, _field_errors(exc)),
    )


def _loc_to_field(loc: tuple[Any, ...] | list[Any]) -> str:
    """('query', 'limit') -> 'limit'; ('body', 'university', 'id') -> 'university.id'."""
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header")]
    return ".".join(parts) or "request"


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 with [{field, message}] for every failed field."""
    details = [
        {"field": _loc_to_field(err.get("loc", ())), "message": err.get("msg", "Invalid value")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=error_body("Validation failed", 400, details),
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return the envelope for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail), exc.status_code),
        headers=getattr(exc, "headers", None),
    )


def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return 429 with the envelope; Retry-After is set by SlowAPI headers."""
    response = JSONResponse(
        status_code=429,
        content=error_body("Too many requests, please try again later.", 429),
    )
    limiter = getattr(request.app.state, "limiter", None)
    view_limit = getattr(request.state, "view_rate_limit", None)
    if limiter is not None and view_limit is not None:
        response = limiter._inject_headers(response, view_limit)
    return response


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    message = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(status_code=500, content=error_body(message, 500))


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: MerchApiException (and
    subclasses), RequestValidationError, StarletteHTTPException,
    RateLimitExceeded, generic Exception.
    """
    app.add_exception_handler(MerchApiException, _merch_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
