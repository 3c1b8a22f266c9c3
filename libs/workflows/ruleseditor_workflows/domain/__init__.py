"""Workflow domain: models, storage keys, codec and provider interface."""

from .codec import decode_document, encode_document
from .interfaces import StorageProvider
from .keys import DOCUMENT_EXTENSION, derive_document_key
from .models import (
    DEFAULT_EXPRESSION_TYPE,
    GlobalParam,
    RuleRecord,
    WorkflowDocument,
    WorkflowSummary,
    sort_summaries,
)

__all__ = [
    "DEFAULT_EXPRESSION_TYPE",
    "DOCUMENT_EXTENSION",
    "GlobalParam",
    "RuleRecord",
    "StorageProvider",
    "WorkflowDocument",
    "WorkflowSummary",
    "decode_document",
    "derive_document_key",
    "encode_document",
    "sort_summaries",
]
