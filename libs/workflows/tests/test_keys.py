"""Tests for storage key derivation."""

import pytest
from ruleseditor_common.exceptions import InvalidStorageArgument
from ruleseditor_workflows.domain.keys import (
    derive_document_key,
    is_document_key,
    normalize_prefix,
)


class TestDeriveDocumentKey:
    """Test key derivation and sanitization."""

    def test_appends_extension(self):
        assert derive_document_key("OrderValidation") == "OrderValidation.json"

    def test_keeps_existing_extension(self):
        assert derive_document_key("OrderValidation.json") == "OrderValidation.json"

    def test_prefix(self):
        assert derive_document_key("OrderValidation", prefix="workflows/") == (
            "workflows/OrderValidation.json"
        )

    @pytest.mark.parametrize(
        "name",
        ["../../etc/passwd", "..\\..\\etc\\passwd", "/etc/passwd", "nested/dir/passwd"],
    )
    def test_traversal_confined_to_scope(self, name):
        """Test only the final path segment survives."""
        assert derive_document_key(name, prefix="workflows") == "workflows/passwd.json"

    def test_case_sensitive(self):
        assert derive_document_key("Order") != derive_document_key("order")

    @pytest.mark.parametrize("name", ["", "   ", ".", "..", "a/..", "dir/", "bad\x00name"])
    def test_invalid_names(self, name):
        with pytest.raises(InvalidStorageArgument):
            derive_document_key(name)

    def test_none_name(self):
        with pytest.raises(InvalidStorageArgument):
            derive_document_key(None)


class TestNormalizePrefix:
    @pytest.mark.parametrize(
        ("prefix", "expected"),
        [
            ("workflows/", "workflows/"),
            ("workflows", "workflows/"),
            ("/workflows//", "workflows/"),
            ("", ""),
            (None, ""),
            ("/", ""),
        ],
    )
    def test_single_trailing_slash(self, prefix, expected):
        assert normalize_prefix(prefix) == expected


def test_is_document_key():
    assert is_document_key("workflows/OrderValidation.json")
    assert not is_document_key("workflows/readme.txt")
