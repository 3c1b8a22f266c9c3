"""HTTP API for the Rules Engine Editor workflow store."""

__version__ = "0.1.0"
