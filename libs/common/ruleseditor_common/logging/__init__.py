"""Logging setup for the Rules Editor services."""

from .config import StructuredFormatter, setup_logging

__all__ = [
    "StructuredFormatter",
    "setup_logging",
]
