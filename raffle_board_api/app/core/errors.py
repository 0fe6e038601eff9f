"""
Storage error type and its HTTP handler.

Endpoints raise ``StorageError`` when the database fails.  The handler
answers with HTTP 500 and a flat ``{"message", "error"}`` body, the
shape the board's web client reads, carrying the raw database error
text.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """A database operation failed while serving a request."""

    def __init__(self, message: str, error: Exception) -> None:
        self.message = message
        self.error = error
        super().__init__(message)


async def storage_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, StorageError) else StorageError("Storage error", exc)
    logger.error("%s: %s", error.message, error.error)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": error.message, "error": str(error.error)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorageError, storage_error_handler)
