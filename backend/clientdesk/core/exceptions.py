"""
Application exceptions and the FastAPI handlers that serialize them.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
from typing import Any


logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception."""
    def __init__(self, message: str, status_code: int = 500, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class InvalidRecord(AppException):
    """A backend record broke the minimal contract (e.g. has no ``_id``)."""
    def __init__(self, message: str = "Invalid client record", details: Any = None):
        super().__init__(message, status_code=status.HTTP_502_BAD_GATEWAY, details=details)


class UpstreamError(AppException):
    """The backend API failed or rejected a request.

    Client errors (4xx) keep their status so the caller sees e.g. a 404 for a
    missing client; everything else is reported as a bad gateway.
    """
    def __init__(self, message: str, upstream_status: int | None = None, details: Any = None):
        self.upstream_status = upstream_status
        if upstream_status is not None and 400 <= upstream_status < 500:
            status_code = upstream_status
        else:
            status_code = status.HTTP_502_BAD_GATEWAY
        super().__init__(message, status_code=status_code, details=details)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Handle application exceptions.

    Backend rejections the caller can act on (4xx) are logged as warnings;
    gateway failures and invalid records as errors.
    """
    upstream_status = getattr(exc, "upstream_status", None)
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        f"{type(exc).__name__}: {exc.message}",
        extra={
            "status_code": exc.status_code,
            "upstream_status": upstream_status,
            "path": request.url.path,
            "details": exc.details,
        },
    )

    error = {
        "message": exc.message,
        "details": exc.details,
        "path": request.url.path,
    }
    if upstream_status is not None:
        error["upstream_status"] = upstream_status
    return JSONResponse(status_code=exc.status_code, content={"error": error})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    logger.warning(
        f"HTTP exception: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
        },
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "message": exc.detail,
                "status_code": exc.status_code,
                "path": request.url.path,
            }
        },
        headers=getattr(exc, "headers", None),
    )


def _serialize_validation_errors(errors: list) -> list:
    """Convert validation errors to JSON-serializable format."""
    serialized = []
    for error in errors:
        serialized_error = {}
        for key, value in error.items():
            if key == "ctx" and isinstance(value, dict):
                # ctx may carry the raised ValueError itself
                serialized_error[key] = {
                    ctx_key: str(ctx_value) if isinstance(ctx_value, Exception) else ctx_value
                    for ctx_key, ctx_value in value.items()
                }
            elif isinstance(value, Exception):
                serialized_error[key] = str(value)
            else:
                serialized_error[key] = value
        serialized.append(serialized_error)
    return serialized


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors."""
    serialized_errors = _serialize_validation_errors(exc.errors())

    logger.warning(
        "Validation error",
        extra={
            "path": request.url.path,
            "errors": serialized_errors,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": {
                "message": "Validation error",
                "details": serialized_errors,
                "path": request.url.path,
            }
        },
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(
        f"Unhandled exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "exception_type": type(exc).__name__,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "message": "Internal server error",
                "path": request.url.path,
            }
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
