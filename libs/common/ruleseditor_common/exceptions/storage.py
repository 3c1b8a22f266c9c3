"""Workflow storage exception classes."""


class StorageError(Exception):
    """Base exception for workflow storage errors.

    Carries the provider label and workflow name so errors can be traced
    back to the backend and document that produced them.
    """

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        workflow_name: str | None = None,
    ):
        """Initialize storage error.

        Args:
            message: Error message
            provider: Label of the storage provider that raised the error
            workflow_name: Name of the workflow being accessed
        """
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.workflow_name = workflow_name

    def __str__(self) -> str:
        """Return string representation with context."""
        context_parts = []
        if self.provider:
            context_parts.append(f"provider={self.provider}")
        if self.workflow_name:
            context_parts.append(f"workflow={self.workflow_name}")

        if context_parts:
            context = " (" + ", ".join(context_parts) + ")"
            return f"{self.message}{context}"
        return self.message


class WorkflowNotFound(StorageError):  # noqa: N818
    """Raised when no stored object exists for a workflow name."""

    def __init__(self, workflow_name: str, provider: str | None = None):
        """Initialize workflow not found error.

        Args:
            workflow_name: Name of the missing workflow
            provider: Label of the storage provider
        """
        super().__init__(
            message=f"Workflow '{workflow_name}' not found",
            provider=provider,
            workflow_name=workflow_name,
        )


class InvalidStorageArgument(StorageError, ValueError):  # noqa: N818
    """Raised for empty or invalid workflow names and unknown provider types."""


class StorageTransportFailure(StorageError):  # noqa: N818
    """Raised when the backing store is unreachable or rejects a request."""


class WorkflowParseFailure(StorageTransportFailure):  # noqa: N818
    """Raised when stored content is not a valid workflow document."""

    def __init__(
        self,
        reason: str,
        provider: str | None = None,
        workflow_name: str | None = None,
    ):
        """Initialize parse failure.

        Args:
            reason: Why the content could not be decoded
            provider: Label of the storage provider
            workflow_name: Name or key of the unreadable document
        """
        super().__init__(
            message=f"Stored workflow is not a valid document: {reason}",
            provider=provider,
            workflow_name=workflow_name,
        )
        self.reason = reason


class StorageInitializationFailure(StorageError):  # noqa: N818
    """Raised when a provider cannot be constructed.

    Covers missing configuration, bad credentials and inaccessible
    directories or containers. These are fatal for the provider and are
    never deferred to the first call.
    """
