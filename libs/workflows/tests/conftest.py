"""Shared fixtures for workflow storage tests."""

from unittest.mock import MagicMock

import pytest
from ruleseditor_workflows.domain.models import GlobalParam, RuleRecord, WorkflowDocument
from ruleseditor_workflows.infrastructure.json_file_provider import JsonFileStorageProvider


def make_workflow(name: str = "OrderValidation", **kwargs) -> WorkflowDocument:
    """Build a workflow with a single CheckAmount rule."""
    kwargs.setdefault("description", "Validates incoming orders")
    kwargs.setdefault(
        "rules",
        [
            RuleRecord(
                name="CheckAmount",
                expression="input1.Amount > 0",
                success_event="AmountValid",
                error_message="Amount must be positive",
            )
        ],
    )
    return WorkflowDocument(name=name, **kwargs)


@pytest.fixture
def sample_workflow():
    """OrderValidation workflow with one rule."""
    return make_workflow(
        global_params=[GlobalParam(name="threshold", expression="100")],
    )


@pytest.fixture
def mock_logger():
    """Logger double for asserting diagnostics."""
    return MagicMock()


@pytest.fixture
def json_storage(tmp_path, mock_logger):
    """JSON file provider rooted in a temporary directory."""
    return JsonFileStorageProvider(tmp_path / "Rules", logger=mock_logger)


@pytest.fixture
def workflow_factory():
    """Callable building workflows by name."""
    return make_workflow
