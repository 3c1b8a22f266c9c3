"""Workflow storage configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field

from .base import BaseAppSettings


class StorageSettings(BaseAppSettings):
    """Workflow storage configuration.

    Supported STORAGE_TYPE values:
    - "jsonfile": JSON files in a local directory (default)
    - "s3": AWS S3 or any S3-compatible object store
    - "azureblob": Azure Blob Storage container
    """

    STORAGE_TYPE: str = "jsonfile"
    STORAGE_LIST_CONCURRENCY: int = Field(default=8, ge=1)

    # JSON file storage (documents live in a "Rules" directory under this path)
    STORAGE_JSON_FILE_PATH: str = "./data/rules-storage"

    # S3-specific settings (only used when STORAGE_TYPE="s3")
    STORAGE_S3_BUCKET_NAME: str | None = None
    STORAGE_S3_PREFIX: str = "workflows/"

    # Azure-specific settings (only used when STORAGE_TYPE="azureblob")
    STORAGE_AZURE_CONNECTION_STRING: str | None = None
    STORAGE_AZURE_CONTAINER_NAME: str = "workflows"

    @property
    def json_file_directory(self) -> Path:
        return Path(self.STORAGE_JSON_FILE_PATH) / "Rules"

    @property
    def s3_configured(self) -> bool:
        return bool(self.STORAGE_S3_BUCKET_NAME)

    @property
    def azure_configured(self) -> bool:
        return bool(self.STORAGE_AZURE_CONNECTION_STRING)


@lru_cache
def get_storage_settings() -> StorageSettings:
    """Get storage settings."""
    return StorageSettings()
