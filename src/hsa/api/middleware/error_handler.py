"""Global error handling.

Every error leaves the API as ``{"error", "error_code", "retry_allowed"}``
with the matching HTTP status. Internal details (SQL, bound parameters,
exception text) are logged only in debug mode and never returned.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from hsa.config import settings
from hsa.core.errors import get_error
from hsa.core.exceptions import HSAError

logger = logging.getLogger(__name__)


def error_response(http_status: int, error_code: str, message: str | None = None) -> JSONResponse:
    """Build the standard error body for a catalog code."""
    error_info = get_error(error_code)
    return JSONResponse(
        status_code=http_status,
        content={
            "error": message or error_info["user_message"],
            "error_code": error_code,
            "retry_allowed": error_info["retry_allowed"],
        },
    )


async def handle_hsa_error(request: Request, exc: HSAError) -> JSONResponse:
    """Handle business exceptions raised by the service layer.

    Args:
        request: The incoming request
        exc: The business exception

    Returns:
        JSONResponse with the catalog message for the exception's code
    """
    extra = {"error_code": exc.error_code, "path": request.url.path, "method": request.method}
    if settings.debug:
        extra["details"] = exc.details

    if exc.http_status >= 500:
        logger.error(f"Request failed: {exc.error_code}", extra=extra)
    else:
        logger.info(f"Request rejected: {exc.error_code}", extra=extra)

    return error_response(exc.http_status, exc.error_code)


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors as 400 with a field-level summary.

    Args:
        request: The incoming request
        exc: The validation error

    Returns:
        JSONResponse naming the offending fields
    """
    errors = exc.errors()
    error_messages = []

    for error in errors:
        field = ".".join(str(x) for x in error.get("loc", []) if x not in ("body", "query"))
        msg = error.get("msg", "Invalid value")
        error_messages.append(f"{field}: {msg}" if field else msg)

    extra = {"path": request.url.path, "method": request.method}
    if settings.debug:
        extra["errors"] = str(errors)
    logger.info(f"Validation error on {request.url.path}", extra=extra)

    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "VAL_001",
        message="; ".join(error_messages) or None,
    )


async def handle_integrity_error(
    request: Request, exc: IntegrityError
) -> JSONResponse:
    """Handle database integrity errors not already translated by a service.

    Args:
        request: The incoming request
        exc: The integrity error

    Returns:
        409 for unique violations, 500 otherwise
    """
    # Do not log str(exc): it can include SQL + bound parameters.
    log = logger.exception if settings.debug else logger.error
    log(
        f"Database integrity error on {request.url.path}",
        extra={"path": request.url.path, "method": request.method},
    )

    error_msg = str(exc.orig).lower() if exc.orig is not None else ""
    if "unique" in error_msg or "duplicate" in error_msg:
        return error_response(status.HTTP_409_CONFLICT, "DB_002")

    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "DB_001")


async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle any other storage failure with a generic 500."""
    log = logger.exception if settings.debug else logger.error
    log(
        f"Database error on {request.url.path}",
        extra={
            "error_type": type(exc).__name__,
            "path": request.url.path,
            "method": request.method,
        },
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "DB_001")


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions.

    Args:
        request: The incoming request
        exc: The unexpected exception

    Returns:
        JSONResponse with generic error message
    """
    # In non-debug: do not log str(exc) or traceback (may include sensitive data).
    log = logger.exception if settings.debug else logger.error
    log(
        f"Unexpected error on {request.url.path}",
        extra={
            "error_type": type(exc).__name__,
            "path": request.url.path,
            "method": request.method,
        },
    )

    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "SYS_001")
