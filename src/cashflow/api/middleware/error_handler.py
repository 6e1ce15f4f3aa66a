"""Global error handling.

Every exception reaching the API is converted to the same JSON error shape:
error_code, message, user_message, suggestion, retry_allowed.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from cashflow.config import settings
from cashflow.core.errors import get_error
from cashflow.core.exceptions import ImportProcessingError

logger = logging.getLogger(__name__)


def _error_content(error_code: str, message: str | None = None) -> dict:
    error_info = get_error(error_code)
    return {
        "error_code": error_code,
        "message": message or error_info["message"],
        "user_message": error_info["user_message"],
        "suggestion": error_info["suggestion"],
        "retry_allowed": error_info["retry_allowed"],
    }


async def handle_import_processing_error(
    request: Request, exc: ImportProcessingError
) -> JSONResponse:
    """Handle custom import exceptions using the error catalog."""
    extra = {"error_code": exc.error_code, "path": request.url.path, "method": request.method}
    if settings.debug:
        extra["details"] = exc.details

    logger.error(f"Import processing error: {exc.error_code}", extra=extra)

    return JSONResponse(
        status_code=exc.http_status,
        content=_error_content(exc.error_code),
    )


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors."""
    error_messages = []
    for error in exc.errors():
        field = ".".join(str(x) for x in error.get("loc", []))
        msg = error.get("msg", "Invalid value")
        error_messages.append(f"{field}: {msg}")

    logger.warning(
        f"Validation error on {request.url.path}",
        extra={"path": request.url.path, "method": request.method},
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_content("VAL_001", " | ".join(error_messages)),
    )


async def handle_integrity_error(
    request: Request, exc: IntegrityError
) -> JSONResponse:
    """Handle database integrity errors.

    A uniqueness violation usually means two imports created the same
    category title concurrently.
    """
    # str(exc) includes SQL and bound parameters; only log it in debug.
    if settings.debug:
        logger.exception(
            f"Database integrity error on {request.url.path}",
            extra={"path": request.url.path, "method": request.method},
        )
    else:
        logger.error(
            f"Database integrity error on {request.url.path}",
            extra={"path": request.url.path, "method": request.method},
        )

    error_msg = str(exc).lower()
    if "unique" in error_msg or "duplicate" in error_msg:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=_error_content("DB_002"),
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_content("DB_001"),
    )


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without exposing internal details."""
    extra = {
        "error_type": type(exc).__name__,
        "path": request.url.path,
        "method": request.method,
    }
    if settings.debug:
        logger.exception(f"Unexpected error on {request.url.path}", extra=extra)
    else:
        logger.error(f"Unexpected error on {request.url.path}", extra=extra)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_content("SYS_001"),
    )
