"""Utility functions for registering storage error handlers."""

from fastapi import FastAPI

from .handlers import STORAGE_ERROR_HANDLERS


def register_storage_error_handlers(app: FastAPI) -> None:
    """Register all storage error handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    for exception_class, handler in STORAGE_ERROR_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
