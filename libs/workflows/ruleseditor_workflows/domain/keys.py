"""Storage key derivation shared by every provider.

Keys are derived from workflow names by keeping only the final path
segment, so a name can never address anything outside the provider's
directory, prefix or container.
"""

import re

from ruleseditor_common.exceptions import InvalidStorageArgument

DOCUMENT_EXTENSION = ".json"

_PATH_SEPARATORS = re.compile(r"[\\/]")


def derive_document_key(workflow_name: str, prefix: str = "") -> str:
    """Derive the storage key for a workflow name.

    Args:
        workflow_name: Workflow name as supplied by the caller
        prefix: Scope prefix prepended by object-store providers

    Returns:
        ``prefix`` + sanitized base name, ending in ``.json``

    Raises:
        InvalidStorageArgument: If nothing usable is left after sanitization
    """
    if workflow_name is None:
        raise InvalidStorageArgument("Invalid workflow name")

    base_name = _PATH_SEPARATORS.split(workflow_name)[-1]
    if not base_name.strip() or base_name in (".", "..") or "\x00" in base_name:
        raise InvalidStorageArgument("Invalid workflow name", workflow_name=workflow_name)

    if not base_name.endswith(DOCUMENT_EXTENSION):
        base_name += DOCUMENT_EXTENSION

    return f"{normalize_prefix(prefix)}{base_name}"


def normalize_prefix(prefix: str | None) -> str:
    """Return the prefix with exactly one trailing slash, or an empty string."""
    prefix = (prefix or "").strip().strip("/")
    return f"{prefix}/" if prefix else ""


def is_document_key(key: str) -> bool:
    return key.endswith(DOCUMENT_EXTENSION)
