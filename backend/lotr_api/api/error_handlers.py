"""Error Handlers — global exception handlers producing the uniform error envelope.

Invariants:
    - LotrApiError → its kind's status and {success: false, error: {code, message, details?}}
    - RequestValidationError → 400 VALIDATION_ERROR with {"field.path": "message"} details
    - Starlette HTTPException (unknown route, wrong method) → envelope with status-derived code
    - RateLimitExceeded → 429 RATE_LIMIT_EXCEEDED
    - Exception (catch-all) → 500 INTERNAL_ERROR, never leaks internal details
    - NOT_FOUND is logged at debug only

Design Decisions:
    - Registered from main.py through register_error_handlers(app)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from lotr_api.core.errors import (
    ErrorKind, ErrorSeverity, LotrApiError, error_envelope, traits_for,
)
from lotr_api.infrastructure.rate_limit import rate_limit_exceeded_handler

logger = logging.getLogger(__name__)

_HTTP_STATUS_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    415: "UNSUPPORTED_MEDIA_TYPE",
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    _register_generic_error_handler(app)


def _log_domain_error(request: Request, exc: LotrApiError) -> None:
    extra = {
        "error_code": exc.code,
        "path": request.url.path,
        "operation": exc.context.operation,
    }
    if exc.severity == ErrorSeverity.INFO:
        logger.debug(f"{exc.code}: {exc.message}", extra=extra)
    elif exc.severity == ErrorSeverity.WARNING:
        logger.warning(f"{exc.code}: {exc.message}", extra=extra)
    else:
        logger.error(
            f"{exc.code}: {exc.message} {exc.context.debug_info or ''}".rstrip(),
            extra=extra,
            exc_info=exc.__cause__ is not None,
        )


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(LotrApiError)
    async def domain_error_handler(request: Request, exc: LotrApiError):
        """Handle every tagged API error."""
        _log_domain_error(request, exc)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        """Routing-level errors raised by Starlette itself."""
        code = _HTTP_STATUS_CODES.get(exc.status_code, "HTTP_ERROR")
        message = exc.detail if isinstance(exc.detail, str) else code
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(code, message),
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_envelope(
                traits_for(ErrorKind.INTERNAL).code,
                "An unexpected error occurred",
            ),
        )


def _field_path(loc: tuple) -> str:
    # drop the "body"/"query"/"path" source prefix when a field name follows
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in ("body", "query", "path"):
        parts = parts[1:]
    return ".".join(parts)


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return error_envelope(
        traits_for(ErrorKind.VALIDATION).code,
        "Invalid input data",
        {_field_path(e["loc"]): e["msg"] for e in exc.errors()},
    )
