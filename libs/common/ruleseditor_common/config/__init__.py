"""Configuration management for the Rules Editor.

Settings are split by concern and built once per process; every settings
class is frozen after construction.
"""

from .app import AppSettings, get_app_settings
from .aws import AWSSettings, get_aws_settings, get_s3_client
from .base import BaseAppSettings
from .settings import Settings, get_settings
from .storage import StorageSettings, get_storage_settings

__all__ = [
    # App
    "AppSettings",
    # AWS
    "AWSSettings",
    # Base
    "BaseAppSettings",
    # Main settings
    "Settings",
    # Storage
    "StorageSettings",
    "get_app_settings",
    "get_aws_settings",
    "get_s3_client",
    "get_settings",
    "get_storage_settings",
]
