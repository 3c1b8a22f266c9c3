"""Workflow storage for the Rules Engine Editor.

Workflow documents are persisted through a ``StorageProvider`` resolved by
``StorageProviderFactory``: local JSON files, AWS S3 or Azure Blob Storage.
"""

from .domain import StorageProvider, WorkflowDocument, WorkflowSummary
from .storage_provider_factory import ProviderInfo, StorageProviderFactory

__version__ = "0.1.0"

__all__ = [
    "ProviderInfo",
    "StorageProvider",
    "StorageProviderFactory",
    "WorkflowDocument",
    "WorkflowSummary",
]
