"""Storage Provider Factory.

This module resolves workflow storage providers by name, using the storage
settings for backend configuration.

Supported storage providers:
- jsonfile: JSON files in a local directory (default)
- s3: AWS S3 or an S3-compatible store
- azureblob: Azure Blob Storage
"""

import logging
import threading

from pydantic import BaseModel
from ruleseditor_common.config.aws import AWSSettings, get_s3_client
from ruleseditor_common.config.storage import StorageSettings
from ruleseditor_common.exceptions import InvalidStorageArgument, StorageInitializationFailure

from .domain.interfaces import StorageProvider

logger = logging.getLogger(__name__)

JSON_FILE = "jsonfile"
S3 = "s3"
AZURE_BLOB = "azureblob"

PROVIDER_LABELS = {
    JSON_FILE: "JSON File Storage",
    S3: "AWS S3 Storage",
    AZURE_BLOB: "Azure Blob Storage",
}


class ProviderInfo(BaseModel):
    """Description of a storage provider for discovery endpoints."""

    name: str
    label: str
    configured: bool


def normalize_provider_type(provider_type: str) -> str:
    """Case-fold a provider type and check it is supported.

    Raises:
        InvalidStorageArgument: If the type is not a known provider
    """
    normalized = (provider_type or "").strip().lower()
    if normalized not in PROVIDER_LABELS:
        raise InvalidStorageArgument(
            f"Unknown storage provider: '{provider_type}'. "
            f"Supported types: {', '.join(repr(name) for name in PROVIDER_LABELS)}"
        )
    return normalized


class StorageProviderFactory:
    """Factory for resolving workflow storage providers.

    Providers hold only fixed backend configuration, so one instance per
    provider type is built lazily and reused for the factory's lifetime.
    """

    def __init__(self, settings: StorageSettings, aws_settings: AWSSettings | None = None):
        """Initialize factory with settings.

        Args:
            settings: Storage configuration settings
            aws_settings: AWS client settings used by the S3 provider

        Raises:
            InvalidStorageArgument: If STORAGE_TYPE names an unknown provider
        """
        self.settings = settings
        self.aws_settings = aws_settings or AWSSettings()

        # Validate the default at startup to fail fast
        self.default_provider_type = normalize_provider_type(settings.STORAGE_TYPE)

        self._providers: dict[str, StorageProvider] = {}
        # Per-backend build locks; cached lookups take no lock
        self._build_locks = {name: threading.Lock() for name in PROVIDER_LABELS}

        logger.info(
            f"Initialized StorageProviderFactory with default type: {self.default_provider_type}"
        )

    def create_provider(self, provider_type: str | None = None) -> StorageProvider:
        """Resolve a storage provider.

        Args:
            provider_type: Provider name (case-insensitive); the configured
                default when None

        Returns:
            StorageProvider: The provider for that backend

        Raises:
            InvalidStorageArgument: If the provider type is unknown
            StorageInitializationFailure: If the backend is not configured or
                cannot be initialized
        """
        if provider_type is None:
            resolved = self.default_provider_type
        else:
            resolved = normalize_provider_type(provider_type)

        provider = self._providers.get(resolved)
        if provider is not None:
            return provider

        with self._build_locks[resolved]:
            provider = self._providers.get(resolved)
            if provider is None:
                provider = self._build(resolved)
                self._providers[resolved] = provider
        return provider

    def _build(self, provider_type: str) -> StorageProvider:
        list_concurrency = self.settings.STORAGE_LIST_CONCURRENCY

        if provider_type == JSON_FILE:
            from .infrastructure.json_file_provider import JsonFileStorageProvider

            logger.debug("Creating JsonFileStorageProvider")
            return JsonFileStorageProvider(
                self.settings.json_file_directory, list_concurrency=list_concurrency
            )

        elif provider_type == S3:
            from .infrastructure.s3_provider import S3StorageProvider

            if not self.settings.s3_configured:
                raise StorageInitializationFailure(
                    "S3 storage provider not configured. Set STORAGE_S3_BUCKET_NAME.",
                    provider=PROVIDER_LABELS[S3],
                )

            logger.debug("Creating S3StorageProvider")
            return S3StorageProvider(
                get_s3_client(self.aws_settings),
                self.settings.STORAGE_S3_BUCKET_NAME,
                prefix=self.settings.STORAGE_S3_PREFIX,
                list_concurrency=list_concurrency,
            )

        elif provider_type == AZURE_BLOB:
            from .infrastructure.azure_blob_provider import AzureBlobStorageProvider

            if not self.settings.azure_configured:
                raise StorageInitializationFailure(
                    "Azure Blob Storage not configured. Set STORAGE_AZURE_CONNECTION_STRING.",
                    provider=PROVIDER_LABELS[AZURE_BLOB],
                )

            logger.debug("Creating AzureBlobStorageProvider")
            return AzureBlobStorageProvider.from_connection_string(
                self.settings.STORAGE_AZURE_CONNECTION_STRING,
                self.settings.STORAGE_AZURE_CONTAINER_NAME,
                list_concurrency=list_concurrency,
            )

        raise InvalidStorageArgument(f"Unknown storage provider: '{provider_type}'")

    def available_providers(self) -> list[ProviderInfo]:
        """Describe every supported provider and whether it is configured."""
        configured = {
            JSON_FILE: True,
            S3: self.settings.s3_configured,
            AZURE_BLOB: self.settings.azure_configured,
        }
        return [
            ProviderInfo(name=name, label=label, configured=configured[name])
            for name, label in PROVIDER_LABELS.items()
        ]
