"""Tests for logging configuration."""

import json
import logging
import sys

from ruleseditor_common.logging import StructuredFormatter, setup_logging


class TestStructuredFormatter:
    """Test JSON log formatting."""

    def _record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord(
            name="ruleseditor_workflows.infrastructure.s3_provider",
            level=logging.ERROR,
            pathname=__file__,
            lineno=1,
            msg="Error getting S3 workflow '%s'",
            args=("OrderValidation",),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_formats_record_as_json(self):
        """Test the core fields are rendered."""
        entry = json.loads(StructuredFormatter().format(self._record()))

        assert entry["level"] == "ERROR"
        assert entry["logger"] == "ruleseditor_workflows.infrastructure.s3_provider"
        assert entry["message"] == "Error getting S3 workflow 'OrderValidation'"
        assert "timestamp" in entry

    def test_includes_extra_fields(self):
        """Test fields passed through ``extra`` are kept."""
        entry = json.loads(
            StructuredFormatter().format(
                self._record(provider="AWS S3 Storage", workflow_name="OrderValidation")
            )
        )

        assert entry["provider"] == "AWS S3 Storage"
        assert entry["workflow_name"] == "OrderValidation"
        assert "args" not in entry

    def test_includes_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = self._record()
            record.exc_info = sys.exc_info()

        entry = json.loads(StructuredFormatter().format(record))

        assert "RuntimeError: boom" in entry["exception"]


class TestSetupLogging:
    """Test dictConfig setup."""

    def test_sets_package_levels(self):
        setup_logging(level="debug", enable_structured_logging=False)

        assert logging.getLogger("ruleseditor_workflows").level == logging.DEBUG
        assert logging.getLogger("ruleseditor_api").level == logging.DEBUG
        assert logging.getLogger("botocore").level == logging.WARNING

    def test_structured_handler(self):
        setup_logging(level="INFO", enable_structured_logging=True)

        handlers = logging.getLogger("ruleseditor_workflows").handlers
        assert handlers
        assert isinstance(handlers[0].formatter, StructuredFormatter)
