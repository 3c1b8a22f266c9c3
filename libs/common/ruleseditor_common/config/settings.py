"""Main application settings container."""

from functools import lru_cache

from pydantic_settings import BaseSettings

from .app import AppSettings, get_app_settings
from .aws import AWSSettings, get_aws_settings
from .storage import StorageSettings, get_storage_settings


class Settings(BaseSettings):
    """Main application settings container."""

    app: AppSettings
    storage: StorageSettings
    aws: AWSSettings

    model_config = {"env_file": ".env", "extra": "ignore", "frozen": True}


@lru_cache
def get_settings() -> Settings:
    """Get the main application settings."""
    return Settings(
        app=get_app_settings(),
        storage=get_storage_settings(),
        aws=get_aws_settings(),
    )
