"""JSON encoding of workflow documents."""

import json

from pydantic import ValidationError
from ruleseditor_common.exceptions import WorkflowParseFailure

from .models import WorkflowDocument

CONTENT_TYPE = "application/json"


def encode_document(document: WorkflowDocument) -> str:
    """Serialize a document as indented JSON using its wire names."""
    return json.dumps(document.model_dump(mode="json", by_alias=True), indent=2)


def decode_document(
    content: str | bytes,
    provider: str | None = None,
    key: str | None = None,
) -> WorkflowDocument:
    """Parse stored content into a document.

    Field names are matched case-insensitively.

    Raises:
        WorkflowParseFailure: If the content is not JSON or not a workflow
    """
    try:
        if isinstance(content, bytes):
            content = content.decode("utf-8-sig")
        payload = json.loads(content)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise WorkflowParseFailure(str(e), provider=provider, workflow_name=key) from e

    if not isinstance(payload, dict):
        raise WorkflowParseFailure(
            f"expected a JSON object, got {type(payload).__name__}",
            provider=provider,
            workflow_name=key,
        )

    try:
        return WorkflowDocument.model_validate(payload)
    except ValidationError as e:
        raise WorkflowParseFailure(
            f"{e.error_count()} validation error(s): {e.errors()[0]['msg']}",
            provider=provider,
            workflow_name=key,
        ) from e
