"""Tests for JSON file workflow storage."""

import json
from datetime import UTC, datetime

import pytest
from ruleseditor_common.exceptions import (
    InvalidStorageArgument,
    StorageInitializationFailure,
    WorkflowNotFound,
)
from ruleseditor_workflows.domain.models import WorkflowDocument
from ruleseditor_workflows.infrastructure.json_file_provider import JsonFileStorageProvider


class TestJsonFileStorageInitialization:
    def test_creates_directory(self, tmp_path):
        directory = tmp_path / "data" / "Rules"

        JsonFileStorageProvider(directory)

        assert directory.is_dir()

    def test_directory_blocked_by_file(self, tmp_path):
        """Test a path occupied by a regular file fails at construction."""
        blocker = tmp_path / "Rules"
        blocker.write_text("not a directory")

        with pytest.raises(StorageInitializationFailure):
            JsonFileStorageProvider(blocker / "nested")

    def test_provider_name(self, json_storage):
        assert json_storage.provider_name == "JSON File Storage"


class TestJsonFileStorage:
    """Test CRUD operations against a temporary directory."""

    @pytest.mark.asyncio
    async def test_save_then_get(self, json_storage, sample_workflow):
        """Test OrderValidation round trips with its CheckAmount rule."""
        assert await json_storage.save_workflow(sample_workflow) is True

        stored = await json_storage.get_workflow("OrderValidation")

        assert stored.name == "OrderValidation"
        assert len(stored.rules) == 1
        assert stored.rules[0].name == "CheckAmount"
        assert stored.rules[0].expression == "input1.Amount > 0"
        assert stored.global_params == sample_workflow.global_params
        assert stored.updated_at == sample_workflow.updated_at
        assert stored.created_at is not None

    @pytest.mark.asyncio
    async def test_file_layout(self, json_storage, sample_workflow):
        await json_storage.save_workflow(sample_workflow)

        path = json_storage.base_directory / "OrderValidation.json"
        payload = json.loads(path.read_text(encoding="utf-8"))

        assert payload["name"] == "OrderValidation"
        assert payload["rules"][0]["RuleName"] == "CheckAmount"
        assert path.read_text(encoding="utf-8").startswith("{\n  ")
        assert list(json_storage.base_directory.glob("*.tmp")) == []

    @pytest.mark.asyncio
    async def test_list_includes_summary(self, json_storage, sample_workflow):
        await json_storage.save_workflow(sample_workflow)

        summaries = await json_storage.list_workflows()

        assert len(summaries) == 1
        assert summaries[0].name == "OrderValidation"
        assert summaries[0].rule_count == 1

    @pytest.mark.asyncio
    async def test_list_orders_by_updated_desc(self, json_storage, workflow_factory):
        for name in ("First", "Second", "Third"):
            await json_storage.save_workflow(workflow_factory(name))

        assert [s.name for s in await json_storage.list_workflows()] == [
            "Third",
            "Second",
            "First",
        ]

        # Re-saving moves a document to the front
        await json_storage.save_workflow(workflow_factory("First"))

        assert (await json_storage.list_workflows())[0].name == "First"

    @pytest.mark.asyncio
    async def test_list_skips_unreadable_documents(self, json_storage, sample_workflow, mock_logger):
        await json_storage.save_workflow(sample_workflow)
        (json_storage.base_directory / "broken.json").write_text("{not json", encoding="utf-8")
        (json_storage.base_directory / "notes.txt").write_text("ignored", encoding="utf-8")
        (json_storage.base_directory / "nested").mkdir()
        (json_storage.base_directory / "nested" / "Deep.json").write_text("{}", encoding="utf-8")

        summaries = await json_storage.list_workflows()

        assert [s.name for s in summaries] == ["OrderValidation"]
        assert any("broken.json" in str(call) for call in mock_logger.error.call_args_list)

    @pytest.mark.asyncio
    async def test_list_empty_directory(self, json_storage):
        assert await json_storage.list_workflows() == []

    @pytest.mark.asyncio
    async def test_get_missing(self, json_storage):
        with pytest.raises(WorkflowNotFound) as exc_info:
            await json_storage.get_workflow("Missing")

        assert exc_info.value.workflow_name == "Missing"
        assert exc_info.value.provider == "JSON File Storage"

    @pytest.mark.asyncio
    async def test_save_preserves_created_at(self, json_storage, sample_workflow):
        await json_storage.save_workflow(sample_workflow)
        first = await json_storage.get_workflow("OrderValidation")

        resubmitted = WorkflowDocument(
            name="OrderValidation",
            description=sample_workflow.description,
            rules=sample_workflow.rules,
            global_params=sample_workflow.global_params,
            created_at=datetime(2030, 1, 1, tzinfo=UTC),
        )
        await json_storage.save_workflow(resubmitted)
        second = await json_storage.get_workflow("OrderValidation")

        assert second.created_at == first.created_at
        assert second.updated_at >= first.updated_at
        assert second.model_dump(exclude={"updated_at"}) == first.model_dump(
            exclude={"updated_at"}
        )

    @pytest.mark.asyncio
    async def test_save_overwrites_unparseable_document(self, json_storage, sample_workflow):
        (json_storage.base_directory / "OrderValidation.json").write_text("{", encoding="utf-8")

        await json_storage.save_workflow(sample_workflow)

        assert (await json_storage.get_workflow("OrderValidation")).rules[0].name == "CheckAmount"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["", "   "])
    async def test_save_requires_name(self, json_storage, name):
        with pytest.raises(InvalidStorageArgument):
            await json_storage.save_workflow(WorkflowDocument(name=name))

    @pytest.mark.asyncio
    async def test_traversal_name_confined(self, json_storage, tmp_path, workflow_factory):
        await json_storage.save_workflow(workflow_factory("../../etc/passwd"))

        assert (json_storage.base_directory / "passwd.json").is_file()
        assert not (tmp_path / "etc").exists()
        assert await json_storage.workflow_exists("passwd")

    @pytest.mark.asyncio
    async def test_delete(self, json_storage, sample_workflow):
        await json_storage.save_workflow(sample_workflow)

        assert await json_storage.delete_workflow("OrderValidation") is True

        assert await json_storage.workflow_exists("OrderValidation") is False
        with pytest.raises(WorkflowNotFound):
            await json_storage.get_workflow("OrderValidation")

    @pytest.mark.asyncio
    async def test_delete_missing(self, json_storage):
        with pytest.raises(WorkflowNotFound):
            await json_storage.delete_workflow("Missing")

    @pytest.mark.asyncio
    async def test_exists(self, json_storage, sample_workflow):
        assert await json_storage.workflow_exists("OrderValidation") is False

        await json_storage.save_workflow(sample_workflow)

        assert await json_storage.workflow_exists("OrderValidation") is True

    @pytest.mark.asyncio
    async def test_exists_invalid_name_is_false(self, json_storage):
        assert await json_storage.workflow_exists("..") is False
