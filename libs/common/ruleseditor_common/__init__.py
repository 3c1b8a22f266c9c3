"""Rules Editor Common Library."""

from . import config, exceptions, logging

__version__ = "0.1.0"

__all__ = [
    "config",
    "exceptions",
    "logging",
]
