"""Exception classes for the Rules Editor.

This module provides the workflow storage exception taxonomy and the
FastAPI handlers that map it onto HTTP responses.
"""

from .handlers import (
    STORAGE_ERROR_HANDLERS,
    invalid_storage_argument_handler,
    storage_error_handler,
    storage_initialization_handler,
    workflow_not_found_handler,
)
from .registration import register_storage_error_handlers
from .storage import (
    InvalidStorageArgument,
    StorageError,
    StorageInitializationFailure,
    StorageTransportFailure,
    WorkflowNotFound,
    WorkflowParseFailure,
)

__all__ = [
    "STORAGE_ERROR_HANDLERS",
    "InvalidStorageArgument",
    # Exception classes
    "StorageError",
    "StorageInitializationFailure",
    "StorageTransportFailure",
    "WorkflowNotFound",
    "WorkflowParseFailure",
    # Error handlers
    "invalid_storage_argument_handler",
    # Registration utilities
    "register_storage_error_handlers",
    "storage_error_handler",
    "storage_initialization_handler",
    "workflow_not_found_handler",
]
