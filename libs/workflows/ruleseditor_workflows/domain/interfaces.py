"""Storage provider capability interface."""

from abc import ABC, abstractmethod

from .models import WorkflowDocument, WorkflowSummary


class StorageProvider(ABC):
    """Uniform workflow storage contract.

    Implementations: JSON files on local disk, AWS S3 and Azure Blob
    Storage. Every backend raises the same exception types for the same
    conditions.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Human-readable backend label, for diagnostics only."""

    @abstractmethod
    async def list_workflows(self) -> list[WorkflowSummary]:
        """List stored workflows, most recently updated first.

        Unreadable documents are logged and skipped.
        """

    @abstractmethod
    async def get_workflow(self, name: str) -> WorkflowDocument:
        """Get a workflow by name.

        Raises:
            WorkflowNotFound: If nothing is stored under the name
            StorageTransportFailure: On backend or parse failures
        """

    @abstractmethod
    async def save_workflow(self, workflow: WorkflowDocument) -> bool:
        """Create or fully replace a workflow.

        Stamps ``updated_at`` (and ``created_at`` on first save) on the
        given document before writing.

        Raises:
            InvalidStorageArgument: If the workflow has no name
        """

    @abstractmethod
    async def delete_workflow(self, name: str) -> bool:
        """Delete a workflow.

        Raises:
            WorkflowNotFound: If nothing is stored under the name
        """

    @abstractmethod
    async def workflow_exists(self, name: str) -> bool:
        """Check whether a workflow exists. Never raises; faults read as False."""
