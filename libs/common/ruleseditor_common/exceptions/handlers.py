"""Error handlers mapping storage exceptions to HTTP responses."""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse

from .storage import (
    InvalidStorageArgument,
    StorageError,
    StorageInitializationFailure,
    WorkflowNotFound,
)

logger = logging.getLogger(__name__)


def _error_body(message: str, exc: StorageError) -> dict[str, Any]:
    return {
        "success": False,
        "message": message,
        "data": None,
        "errors": [str(exc)],
    }


def _log_storage_error(exc: StorageError, request: Request) -> None:
    """Log storage error with request context.

    Args:
        exc: The storage exception
        request: FastAPI request object
    """
    log_context = {
        "error_type": type(exc).__name__,
        "error_message": str(exc),
        "request_method": request.method,
        "request_path": request.url.path,
        "provider": exc.provider,
        "workflow_name": exc.workflow_name,
    }

    if isinstance(exc, WorkflowNotFound):
        logger.info("Workflow not found", extra=log_context)
    elif isinstance(exc, InvalidStorageArgument):
        logger.warning("Invalid storage request", extra=log_context)
    else:
        logger.error("Storage error occurred", extra=log_context)


async def workflow_not_found_handler(request: Request, exc: WorkflowNotFound) -> JSONResponse:
    """Handle missing workflow errors with a 404 response."""
    _log_storage_error(exc, request)

    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=_error_body(exc.message, exc),
    )


async def invalid_storage_argument_handler(
    request: Request, exc: InvalidStorageArgument
) -> JSONResponse:
    """Handle invalid names and unknown provider types with a 400 response."""
    _log_storage_error(exc, request)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(exc.message, exc),
    )


async def storage_initialization_handler(
    request: Request, exc: StorageInitializationFailure
) -> JSONResponse:
    """Handle providers that could not be constructed.

    Returns 503 because the backend is unusable until configuration is fixed.
    """
    _log_storage_error(exc, request)

    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=_error_body("Storage provider unavailable", exc),
    )


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    """Handle generic storage errors.

    This is a catch-all handler for StorageError instances that
    don't have more specific handlers.

    Args:
        request: FastAPI request object
        exc: StorageError exception

    Returns:
        JSONResponse with 500 status
    """
    _log_storage_error(exc, request)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Storage operation failed", exc),
    )


# Registry of error handlers for easy registration
STORAGE_ERROR_HANDLERS = {
    WorkflowNotFound: workflow_not_found_handler,
    InvalidStorageArgument: invalid_storage_argument_handler,
    StorageInitializationFailure: storage_initialization_handler,
    StorageError: storage_error_handler,  # Catch-all handler
}
