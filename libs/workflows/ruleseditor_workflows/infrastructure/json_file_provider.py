"""Workflow storage as JSON files in a local directory."""

import asyncio
import logging
import os
import tempfile
from pathlib import Path

from ruleseditor_common.exceptions import (
    InvalidStorageArgument,
    StorageInitializationFailure,
    StorageTransportFailure,
    WorkflowNotFound,
)

from ..domain.codec import decode_document, encode_document
from ..domain.interfaces import StorageProvider
from ..domain.keys import DOCUMENT_EXTENSION, derive_document_key
from ..domain.models import WorkflowDocument, WorkflowSummary
from .support import DEFAULT_LIST_CONCURRENCY, collect_summaries, stored_created_at


class JsonFileStorageProvider(StorageProvider):
    """Stores each workflow as ``{base_directory}/{name}.json``.

    The directory is flat; listing does not descend into subdirectories.
    Blocking file I/O runs in worker threads.
    """

    def __init__(
        self,
        base_directory: str | Path,
        logger: logging.Logger | None = None,
        list_concurrency: int = DEFAULT_LIST_CONCURRENCY,
    ):
        """Initialize JSON file storage, creating the directory if needed.

        Args:
            base_directory: Directory holding the workflow files
            logger: Logger for diagnostics (module logger by default)
            list_concurrency: Maximum files read in parallel while listing

        Raises:
            StorageInitializationFailure: If the directory cannot be created
        """
        self._logger = logger or logging.getLogger(__name__)
        self._list_concurrency = list_concurrency
        self.base_directory = Path(base_directory)

        try:
            self.base_directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self._logger.error(f"Failed to initialize JSON storage directory: {e}")
            raise StorageInitializationFailure(
                f"Cannot create storage directory '{self.base_directory}': {e}",
                provider=self.provider_name,
            ) from e

        self._logger.info(f"JSON Storage initialized at: {self.base_directory}")

    @property
    def provider_name(self) -> str:
        return "JSON File Storage"

    def _workflow_path(self, name: str) -> Path:
        return self.base_directory / derive_document_key(name)

    def _read_text(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise WorkflowNotFound(path.stem, provider=self.provider_name) from e
        except OSError as e:
            raise StorageTransportFailure(
                f"Cannot read workflow file: {e}", provider=self.provider_name
            ) from e

    def _write_text_atomically(self, path: Path, content: str) -> None:
        """Write via a temp file in the same directory, then replace."""
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=path.parent,
                delete=False,
                suffix=".tmp",
            ) as tmp:
                tmp_path = tmp.name
                tmp.write(content)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StorageTransportFailure(
                f"Cannot write workflow file: {e}", provider=self.provider_name
            ) from e

    def _document_files(self) -> list[Path]:
        try:
            return [
                entry
                for entry in self.base_directory.iterdir()
                if entry.suffix == DOCUMENT_EXTENSION and entry.is_file()
            ]
        except FileNotFoundError:
            self._logger.warning(f"Workflow directory does not exist: {self.base_directory}")
            return []
        except OSError as e:
            raise StorageTransportFailure(
                f"Cannot list workflow directory: {e}", provider=self.provider_name
            ) from e

    async def _load(self, key: str) -> WorkflowDocument:
        path = self.base_directory / key
        content = await asyncio.to_thread(self._read_text, path)
        return decode_document(content, provider=self.provider_name, key=key)

    async def list_workflows(self) -> list[WorkflowSummary]:
        files = await asyncio.to_thread(self._document_files)
        return await collect_summaries(
            (path.name for path in files),
            self._load,
            self._logger,
            self.provider_name,
            concurrency=self._list_concurrency,
        )

    async def get_workflow(self, name: str) -> WorkflowDocument:
        try:
            key = derive_document_key(name)
            workflow = await self._load(key)
        except WorkflowNotFound as e:
            self._logger.info(f"Workflow '{name}' not found")
            raise WorkflowNotFound(name, provider=self.provider_name) from e
        except Exception as e:
            self._logger.error(f"Error getting workflow '{name}': {e}")
            raise

        self._logger.info(f"Retrieved workflow: {name}")
        return workflow

    async def save_workflow(self, workflow: WorkflowDocument) -> bool:
        try:
            if not workflow.name or not workflow.name.strip():
                raise InvalidStorageArgument(
                    "Workflow name is required", provider=self.provider_name
                )

            key = derive_document_key(workflow.name)
            workflow.stamp_for_save(await stored_created_at(self._load, key))
            await asyncio.to_thread(
                self._write_text_atomically, self.base_directory / key, encode_document(workflow)
            )
        except Exception as e:
            self._logger.error(f"Error saving workflow: {e}")
            raise

        self._logger.info(f"Saved workflow: {workflow.name}")
        return True

    async def delete_workflow(self, name: str) -> bool:
        try:
            path = self._workflow_path(name)
            await asyncio.to_thread(path.unlink)
        except FileNotFoundError as e:
            self._logger.info(f"Workflow '{name}' not found for deletion")
            raise WorkflowNotFound(name, provider=self.provider_name) from e
        except OSError as e:
            self._logger.error(f"Error deleting workflow '{name}': {e}")
            raise StorageTransportFailure(
                f"Cannot delete workflow file: {e}",
                provider=self.provider_name,
                workflow_name=name,
            ) from e
        except Exception as e:
            self._logger.error(f"Error deleting workflow '{name}': {e}")
            raise

        self._logger.info(f"Deleted workflow: {name}")
        return True

    async def workflow_exists(self, name: str) -> bool:
        try:
            path = self._workflow_path(name)
            return await asyncio.to_thread(path.is_file)
        except Exception as e:
            self._logger.error(f"Error checking workflow existence: {e}")
            return False
