"""Custom exception classes and handlers for the API."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Raised when a request passes schema validation but cannot be analyzed."""

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(message)


class EmptySeriesError(ValidationError):
    """Raised when a request carries no usable rows for a series."""

    def __init__(self, field: str = "bars", dropped: int = 0):
        self.dropped = dropped
        message = f"At least one valid entry is required in '{field}'"
        if dropped:
            message = f"{message} ({dropped} invalid or duplicate rows dropped)"
        super().__init__(message, field=field)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Handle ValidationError exceptions."""
    logger.info("Rejected %s %s: %s", request.method, request.url, exc.message)
    content = {
        "success": False,
        "message": exc.message,
    }
    if exc.field:
        content["field"] = exc.field
    return JSONResponse(
        status_code=422,
        content=content,
    )
