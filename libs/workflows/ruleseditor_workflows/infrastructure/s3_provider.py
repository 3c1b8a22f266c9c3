"""Workflow storage in AWS S3 (or any S3-compatible store such as MinIO)."""

import asyncio
import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError
from ruleseditor_common.exceptions import (
    InvalidStorageArgument,
    StorageInitializationFailure,
    StorageTransportFailure,
    WorkflowNotFound,
)

from ..domain.codec import CONTENT_TYPE, decode_document, encode_document
from ..domain.interfaces import StorageProvider
from ..domain.keys import derive_document_key, is_document_key, normalize_prefix
from ..domain.models import WorkflowDocument, WorkflowSummary
from .support import DEFAULT_LIST_CONCURRENCY, collect_summaries, stored_created_at

_NOT_FOUND_CODES = frozenset({"NoSuchKey", "NotFound", "404"})


def _is_not_found(error: ClientError) -> bool:
    code = error.response.get("Error", {}).get("Code")
    status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    return code in _NOT_FOUND_CODES or status == 404


class S3StorageProvider(StorageProvider):
    """Stores each workflow as an object ``{prefix}{name}.json`` in a bucket.

    Only keys under the prefix are in scope. The boto3 client is blocking,
    so every call runs in a worker thread.
    """

    def __init__(
        self,
        client: Any,
        bucket_name: str,
        prefix: str = "workflows/",
        logger: logging.Logger | None = None,
        list_concurrency: int = DEFAULT_LIST_CONCURRENCY,
        verify_bucket: bool = True,
    ):
        """Initialize S3 storage.

        Args:
            client: boto3 S3 client
            bucket_name: Bucket holding the workflows
            prefix: Key prefix scoping this store inside the bucket
            logger: Logger for diagnostics (module logger by default)
            list_concurrency: Maximum objects fetched in parallel while listing
            verify_bucket: Probe the bucket so bad credentials fail here

        Raises:
            StorageInitializationFailure: If the bucket is not configured or
                cannot be reached
        """
        self._logger = logger or logging.getLogger(__name__)
        self._list_concurrency = list_concurrency
        self._client = client

        if not bucket_name:
            raise StorageInitializationFailure(
                "S3 bucket name not configured", provider=self.provider_name
            )

        self.bucket_name = bucket_name
        self.prefix = normalize_prefix(prefix)

        if verify_bucket:
            try:
                self._client.head_bucket(Bucket=self.bucket_name)
            except (BotoCoreError, ClientError) as e:
                self._logger.error(f"Failed to initialize S3 storage: {e}")
                raise StorageInitializationFailure(
                    f"Cannot access S3 bucket '{self.bucket_name}': {e}",
                    provider=self.provider_name,
                ) from e

        self._logger.info(
            f"S3 Storage initialized - Bucket: {self.bucket_name}, Prefix: {self.prefix}"
        )

    @property
    def provider_name(self) -> str:
        return "AWS S3 Storage"

    def _object_key(self, name: str) -> str:
        return derive_document_key(name, prefix=self.prefix)

    def _transport_failure(
        self, action: str, error: Exception, name: str | None = None
    ) -> StorageTransportFailure:
        return StorageTransportFailure(
            f"S3 {action} failed: {error}", provider=self.provider_name, workflow_name=name
        )

    def _list_document_keys(self) -> list[str]:
        keys: list[str] = []
        try:
            paginator = self._client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self.bucket_name, Prefix=self.prefix):
                keys.extend(
                    obj["Key"] for obj in page.get("Contents", []) if is_document_key(obj["Key"])
                )
        except (BotoCoreError, ClientError) as e:
            raise self._transport_failure("list", e) from e
        return keys

    def _get_object_content(self, key: str) -> bytes:
        try:
            response = self._client.get_object(Bucket=self.bucket_name, Key=key)
            return response["Body"].read()
        except ClientError as e:
            if _is_not_found(e):
                raise WorkflowNotFound(key, provider=self.provider_name) from e
            raise self._transport_failure("get", e, key) from e
        except BotoCoreError as e:
            raise self._transport_failure("get", e, key) from e

    def _head_object(self, key: str) -> bool:
        """Metadata-only lookup; False when the object is missing."""
        try:
            self._client.head_object(Bucket=self.bucket_name, Key=key)
            return True
        except ClientError as e:
            if _is_not_found(e):
                return False
            raise self._transport_failure("head", e, key) from e
        except BotoCoreError as e:
            raise self._transport_failure("head", e, key) from e

    def _put_object(self, key: str, body: bytes) -> None:
        try:
            self._client.put_object(
                Bucket=self.bucket_name, Key=key, Body=body, ContentType=CONTENT_TYPE
            )
        except (BotoCoreError, ClientError) as e:
            raise self._transport_failure("put", e, key) from e

    def _delete_object(self, key: str) -> None:
        try:
            self._client.delete_object(Bucket=self.bucket_name, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise self._transport_failure("delete", e, key) from e

    async def _load(self, key: str) -> WorkflowDocument:
        content = await asyncio.to_thread(self._get_object_content, key)
        return decode_document(content, provider=self.provider_name, key=key)

    async def list_workflows(self) -> list[WorkflowSummary]:
        try:
            keys = await asyncio.to_thread(self._list_document_keys)
        except Exception as e:
            self._logger.error(f"Error listing S3 workflows: {e}")
            raise

        return await collect_summaries(
            keys,
            self._load,
            self._logger,
            self.provider_name,
            concurrency=self._list_concurrency,
        )

    async def get_workflow(self, name: str) -> WorkflowDocument:
        try:
            workflow = await self._load(self._object_key(name))
        except WorkflowNotFound as e:
            self._logger.info(f"S3 workflow '{name}' not found")
            raise WorkflowNotFound(name, provider=self.provider_name) from e
        except Exception as e:
            self._logger.error(f"Error getting S3 workflow '{name}': {e}")
            raise

        self._logger.info(f"Retrieved S3 workflow: {name}")
        return workflow

    async def save_workflow(self, workflow: WorkflowDocument) -> bool:
        try:
            if not workflow.name or not workflow.name.strip():
                raise InvalidStorageArgument(
                    "Workflow name is required", provider=self.provider_name
                )

            key = self._object_key(workflow.name)
            workflow.stamp_for_save(await stored_created_at(self._load, key))
            body = encode_document(workflow).encode("utf-8")
            await asyncio.to_thread(self._put_object, key, body)
        except Exception as e:
            self._logger.error(f"Error saving S3 workflow: {e}")
            raise

        self._logger.info(f"Saved S3 workflow: {workflow.name}")
        return True

    async def delete_workflow(self, name: str) -> bool:
        try:
            key = self._object_key(name)
            # delete_object succeeds for missing keys, so check first
            if not await asyncio.to_thread(self._head_object, key):
                self._logger.info(f"S3 workflow '{name}' not found for deletion")
                raise WorkflowNotFound(name, provider=self.provider_name)
            await asyncio.to_thread(self._delete_object, key)
        except WorkflowNotFound:
            raise
        except Exception as e:
            self._logger.error(f"Error deleting S3 workflow '{name}': {e}")
            raise

        self._logger.info(f"Deleted S3 workflow: {name}")
        return True

    async def workflow_exists(self, name: str) -> bool:
        try:
            return await asyncio.to_thread(self._head_object, self._object_key(name))
        except Exception as e:
            self._logger.error(f"Error checking S3 workflow existence: {e}")
            return False
