"""
Observability hooks.
Exporter wiring (OpenTelemetry, Prometheus) is configured by the deployment;
the service itself only logs startup context and recorded exceptions.
"""

from typing import Optional
from fastapi import Request
import logging

from rcm.core.config import settings

logger = logging.getLogger(__name__)


def setup_observability() -> None:
    """Log the observability target for this process."""
    logger.info(
        "Setting up observability",
        extra={
            "otel_endpoint": settings.OTEL_EXPORTER_OTLP_ENDPOINT,
            "service_name": settings.OTEL_SERVICE_NAME,
            "environment": settings.OTEL_ENVIRONMENT,
        },
    )


def record_exception(exc: BaseException, request: Optional[Request] = None) -> None:
    """
    Record an exception in the observability backend.
    
    Args:
        exc: The exception that occurred
        request: The FastAPI request object, if the exception surfaced in a request
    """
    logger.error(
        f"Exception recorded: {type(exc).__name__}",
        extra={
            "exception_message": str(exc),
            "path": request.url.path if request is not None else None,
            "service_name": settings.OTEL_SERVICE_NAME,
        },
    )
