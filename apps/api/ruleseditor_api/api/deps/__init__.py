"""FastAPI dependencies."""

from .storage import (
    StorageProviderDep,
    StorageProviderFactoryDep,
    get_storage_provider,
    get_storage_provider_factory,
)

__all__ = [
    "StorageProviderDep",
    "StorageProviderFactoryDep",
    "get_storage_provider",
    "get_storage_provider_factory",
]
