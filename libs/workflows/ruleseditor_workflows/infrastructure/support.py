"""Helpers shared by the storage provider implementations."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from datetime import datetime

from ruleseditor_common.exceptions import WorkflowNotFound, WorkflowParseFailure

from ..domain.models import WorkflowDocument, WorkflowSummary, sort_summaries

DEFAULT_LIST_CONCURRENCY = 8


async def collect_summaries(
    keys: Iterable[str],
    load: Callable[[str], Awaitable[WorkflowDocument]],
    logger: logging.Logger,
    provider_name: str,
    concurrency: int = DEFAULT_LIST_CONCURRENCY,
) -> list[WorkflowSummary]:
    """Load every key and summarize it, skipping documents that fail.

    Loads run concurrently, at most ``concurrency`` at a time.
    """
    semaphore = asyncio.Semaphore(concurrency)

    async def summarize(key: str) -> WorkflowSummary | None:
        async with semaphore:
            try:
                document = await load(key)
            except Exception as e:
                logger.error(f"Error reading {provider_name} document {key}: {e}")
                return None
        return document.summarize()

    results = await asyncio.gather(*(summarize(key) for key in keys))
    return sort_summaries([summary for summary in results if summary is not None])


async def stored_created_at(
    load: Callable[[str], Awaitable[WorkflowDocument]], key: str
) -> datetime | None:
    """Return ``created_at`` of the document currently stored under ``key``.

    Missing or unreadable documents yield None so a save can replace them;
    transport failures propagate.
    """
    try:
        existing = await load(key)
    except (WorkflowNotFound, WorkflowParseFailure):
        return None
    return existing.created_at
