"""Workflow storage in an Azure Blob Storage container."""

import asyncio
import logging
from typing import Any

from azure.core.exceptions import AzureError, ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import BlobServiceClient, ContentSettings
from ruleseditor_common.exceptions import (
    InvalidStorageArgument,
    StorageInitializationFailure,
    StorageTransportFailure,
    WorkflowNotFound,
)

from ..domain.codec import CONTENT_TYPE, decode_document, encode_document
from ..domain.interfaces import StorageProvider
from ..domain.keys import derive_document_key, is_document_key
from ..domain.models import WorkflowDocument, WorkflowSummary
from .support import DEFAULT_LIST_CONCURRENCY, collect_summaries, stored_created_at


class AzureBlobStorageProvider(StorageProvider):
    """Stores each workflow as a blob ``{name}.json`` in one container.

    Every ``.json`` blob in the container is in scope. The container is
    created on construction when it does not exist yet.
    """

    def __init__(
        self,
        container_client: Any,
        logger: logging.Logger | None = None,
        list_concurrency: int = DEFAULT_LIST_CONCURRENCY,
    ):
        """Initialize Azure Blob storage.

        Args:
            container_client: ``azure.storage.blob.ContainerClient``
            logger: Logger for diagnostics (module logger by default)
            list_concurrency: Maximum blobs downloaded in parallel while listing

        Raises:
            StorageInitializationFailure: If the container cannot be created
                or reached
        """
        self._logger = logger or logging.getLogger(__name__)
        self._list_concurrency = list_concurrency
        self._container = container_client
        self.container_name = container_client.container_name

        try:
            self._container.create_container()
            self._logger.info(f"Created Azure Blob container: {self.container_name}")
        except ResourceExistsError:
            pass
        except AzureError as e:
            self._logger.error(f"Failed to initialize Azure Blob Storage: {e}")
            raise StorageInitializationFailure(
                f"Cannot access Azure Blob container '{self.container_name}': {e}",
                provider=self.provider_name,
            ) from e

        self._logger.info(f"Azure Blob Storage initialized - Container: {self.container_name}")

    @classmethod
    def from_connection_string(
        cls,
        connection_string: str | None,
        container_name: str = "workflows",
        **kwargs: Any,
    ) -> "AzureBlobStorageProvider":
        """Build a provider from an account connection string.

        Raises:
            StorageInitializationFailure: If the connection string is missing
                or malformed
        """
        if not connection_string:
            raise StorageInitializationFailure(
                "Azure connection string not configured", provider="Azure Blob Storage"
            )

        try:
            service_client = BlobServiceClient.from_connection_string(connection_string)
        except ValueError as e:
            raise StorageInitializationFailure(
                f"Invalid Azure connection string: {e}", provider="Azure Blob Storage"
            ) from e

        return cls(service_client.get_container_client(container_name), **kwargs)

    @property
    def provider_name(self) -> str:
        return "Azure Blob Storage"

    def _blob_name(self, name: str) -> str:
        return derive_document_key(name)

    def _transport_failure(
        self, action: str, error: Exception, name: str | None = None
    ) -> StorageTransportFailure:
        return StorageTransportFailure(
            f"Azure Blob {action} failed: {error}",
            provider=self.provider_name,
            workflow_name=name,
        )

    def _list_blob_names(self) -> list[str]:
        try:
            return [
                blob.name for blob in self._container.list_blobs() if is_document_key(blob.name)
            ]
        except AzureError as e:
            raise self._transport_failure("list", e) from e

    def _download(self, blob_name: str) -> bytes:
        try:
            return self._container.download_blob(blob_name).readall()
        except ResourceNotFoundError as e:
            raise WorkflowNotFound(blob_name, provider=self.provider_name) from e
        except AzureError as e:
            raise self._transport_failure("download", e, blob_name) from e

    def _upload(self, blob_name: str, body: bytes) -> None:
        try:
            self._container.upload_blob(
                blob_name,
                body,
                overwrite=True,
                content_settings=ContentSettings(content_type=CONTENT_TYPE),
            )
        except AzureError as e:
            raise self._transport_failure("upload", e, blob_name) from e

    def _delete(self, blob_name: str) -> None:
        try:
            self._container.delete_blob(blob_name)
        except ResourceNotFoundError as e:
            raise WorkflowNotFound(blob_name, provider=self.provider_name) from e
        except AzureError as e:
            raise self._transport_failure("delete", e, blob_name) from e

    def _exists(self, blob_name: str) -> bool:
        return bool(self._container.get_blob_client(blob_name).exists())

    async def _load(self, blob_name: str) -> WorkflowDocument:
        content = await asyncio.to_thread(self._download, blob_name)
        return decode_document(content, provider=self.provider_name, key=blob_name)

    async def list_workflows(self) -> list[WorkflowSummary]:
        try:
            blob_names = await asyncio.to_thread(self._list_blob_names)
        except Exception as e:
            self._logger.error(f"Error listing Azure Blob workflows: {e}")
            raise

        return await collect_summaries(
            blob_names,
            self._load,
            self._logger,
            self.provider_name,
            concurrency=self._list_concurrency,
        )

    async def get_workflow(self, name: str) -> WorkflowDocument:
        try:
            workflow = await self._load(self._blob_name(name))
        except WorkflowNotFound as e:
            self._logger.info(f"Azure Blob workflow '{name}' not found")
            raise WorkflowNotFound(name, provider=self.provider_name) from e
        except Exception as e:
            self._logger.error(f"Error getting Azure Blob workflow '{name}': {e}")
            raise

        self._logger.info(f"Retrieved Azure Blob workflow: {name}")
        return workflow

    async def save_workflow(self, workflow: WorkflowDocument) -> bool:
        try:
            if not workflow.name or not workflow.name.strip():
                raise InvalidStorageArgument(
                    "Workflow name is required", provider=self.provider_name
                )

            blob_name = self._blob_name(workflow.name)
            workflow.stamp_for_save(await stored_created_at(self._load, blob_name))
            body = encode_document(workflow).encode("utf-8")
            await asyncio.to_thread(self._upload, blob_name, body)
        except Exception as e:
            self._logger.error(f"Error saving Azure Blob workflow: {e}")
            raise

        self._logger.info(f"Saved Azure Blob workflow: {workflow.name}")
        return True

    async def delete_workflow(self, name: str) -> bool:
        try:
            await asyncio.to_thread(self._delete, self._blob_name(name))
        except WorkflowNotFound as e:
            self._logger.info(f"Azure Blob workflow '{name}' not found for deletion")
            raise WorkflowNotFound(name, provider=self.provider_name) from e
        except Exception as e:
            self._logger.error(f"Error deleting Azure Blob workflow '{name}': {e}")
            raise

        self._logger.info(f"Deleted Azure Blob workflow: {name}")
        return True

    async def workflow_exists(self, name: str) -> bool:
        try:
            return await asyncio.to_thread(self._exists, self._blob_name(name))
        except Exception as e:
            self._logger.error(f"Error checking Azure Blob workflow existence: {e}")
            return False
