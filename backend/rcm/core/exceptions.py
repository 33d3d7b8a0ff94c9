"""
Application exceptions and the global exception handlers.
Serializes exceptions into structured logs and the observability backend.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
from typing import Any, Optional
from uuid import UUID

from rcm.core.integrations.observability import record_exception


logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception."""
    def __init__(self, message: str, status_code: int = 500, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class InvalidRangeError(AppException):
    """Raised when a date range ends before it starts."""
    def __init__(self, start_date, end_date):
        super().__init__(
            "End date must not be before start date",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"start_date": str(start_date), "end_date": str(end_date)},
        )
        self.start_date = start_date
        self.end_date = end_date


class UnknownGranularityError(AppException):
    """Raised for a granularity other than daily, weekly or monthly."""
    def __init__(self, granularity: Any):
        super().__init__(
            f"Unknown granularity: {granularity!r}",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={
                "granularity": str(granularity),
                "allowed": ["daily", "weekly", "monthly"],
            },
        )
        self.granularity = granularity


class ResourceNotFoundError(AppException):
    """Raised when a resource does not exist within the caller's team."""
    def __init__(self, resource_id: UUID):
        super().__init__(
            "Resource not found",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource_id": str(resource_id)},
        )
        self.resource_id = resource_id


class ResourceFetchError(AppException):
    """
    Raised when capacity data for a single resource cannot be loaded.
    
    The heatmap assembler catches it per resource, so it only reaches the
    exception handlers when raised outside a heatmap request.
    """
    def __init__(self, resource_id: UUID, cause: Optional[BaseException] = None):
        message = f"Failed to load capacity data for resource {resource_id}"
        super().__init__(
            message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={
                "resource_id": str(resource_id),
                "cause": type(cause).__name__ if cause is not None else None,
            },
        )
        self.resource_id = resource_id
        self.cause = cause


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"Application exception: {exc.message}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
            "details": exc.details,
        },
    )
    
    if exc.status_code >= 500:
        record_exception(exc, request)
    
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "message": exc.message,
                "details": exc.details,
                "path": request.url.path,
            }
        },
    )


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
                # ctx may hold the raised ValueError itself
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
        f"Validation error: {serialized_errors}",
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
    
    record_exception(exc, request)
    
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
