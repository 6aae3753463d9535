"""
Exception to HTTP response mapping.

Domain exceptions raised anywhere below the routers are rendered as
ErrorResponse bodies with a status code chosen by exception type.

Dependencies: fastapi, standup_digest.core.exceptions
System role: Error contract of the HTTP API
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from standup_digest.core.exceptions import (
    ConfigurationError,
    ModelInvocationError,
    PublishingError,
    ReportParseError,
    SourceFetchError,
    StandupDigestException,
    ValidationError,
)
from standup_digest.models.common import ErrorResponse
from standup_digest.observability.correlation import get_correlation_id

logger = logging.getLogger(__name__)

# First match wins; subclasses must precede their bases.
ERROR_STATUS_CODES: list[tuple[type[StandupDigestException], int]] = [
    (ConfigurationError, status.HTTP_400_BAD_REQUEST),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (SourceFetchError, status.HTTP_502_BAD_GATEWAY),
    (ReportParseError, status.HTTP_502_BAD_GATEWAY),
    (ModelInvocationError, status.HTTP_502_BAD_GATEWAY),
    (PublishingError, status.HTTP_502_BAD_GATEWAY),
]


def status_code_for(exc: StandupDigestException) -> int:
    """HTTP status for a domain exception (500 when unmapped)."""
    for exc_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_domain_exception(request: Request, exc: StandupDigestException) -> JSONResponse:
    status_code = status_code_for(exc)
    log = logger.warning if status_code < 500 else logger.error
    log(
        f"{request.method} {request.url.path} - {type(exc).__name__}: {exc.message}",
        extra={"error_type": type(exc).__name__, "status_code": status_code},
    )
    body = ErrorResponse(
        error=exc.message,
        error_type=type(exc).__name__,
        details=exc.details or None,
        correlation_id=get_correlation_id() or None,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the domain exception handler on the app."""
    app.add_exception_handler(StandupDigestException, handle_domain_exception)
