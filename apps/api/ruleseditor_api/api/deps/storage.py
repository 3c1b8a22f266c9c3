"""Storage dependencies for FastAPI endpoints."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Query
from ruleseditor_common.config import get_settings
from ruleseditor_workflows.domain.interfaces import StorageProvider
from ruleseditor_workflows.storage_provider_factory import StorageProviderFactory


@lru_cache
def get_storage_provider_factory() -> StorageProviderFactory:
    """Get the process-wide provider factory."""
    settings = get_settings()
    return StorageProviderFactory(settings.storage, aws_settings=settings.aws)


StorageProviderFactoryDep = Annotated[StorageProviderFactory, Depends(get_storage_provider_factory)]


def get_storage_provider(
    factory: StorageProviderFactoryDep,
    provider: str | None = Query(
        default=None,
        description="Storage provider to use (jsonfile, s3, azureblob); configured default if omitted",
    ),
) -> StorageProvider:
    """Resolve the provider requested through the ``provider`` query parameter.

    Declared sync so backend construction runs in the threadpool.
    """
    return factory.create_provider(provider)


StorageProviderDep = Annotated[StorageProvider, Depends(get_storage_provider)]
