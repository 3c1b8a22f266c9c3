"""Workflow CRUD endpoints.

Every route accepts an optional ``provider`` query parameter selecting the
storage backend. Storage errors are mapped to HTTP responses by the handlers
registered in ``ruleseditor_common.exceptions``.
"""

import logging
from typing import Any

from fastapi import APIRouter, Response
from pydantic import BaseModel, ConfigDict, Field
from ruleseditor_common.exceptions import InvalidStorageArgument
from ruleseditor_workflows.converters import (
    RulesEngineWorkflow,
    from_rules_engine_workflows,
    to_rules_engine_workflows,
)
from ruleseditor_workflows.domain.models import GlobalParam, RuleRecord, WorkflowDocument
from ruleseditor_workflows.storage_provider_factory import ProviderInfo

from .deps.storage import StorageProviderDep, StorageProviderFactoryDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rules", tags=["rules"])


class CreateWorkflowRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str | None = None
    rules: list[RuleRecord] = Field(default_factory=list)
    global_params: list[GlobalParam] = Field(default_factory=list, alias="globalParams")


class WorkflowResponse(BaseModel):
    success: bool
    message: str
    data: Any = None
    errors: list[str] = Field(default_factory=list)


class ProvidersResponse(BaseModel):
    default: str
    providers: list[ProviderInfo]


def _dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)


@router.get("/workflows", response_model=WorkflowResponse)
async def list_workflows(storage: StorageProviderDep):
    """List workflow summaries, most recently updated first."""
    workflows = await storage.list_workflows()
    return WorkflowResponse(
        success=True,
        message=f"Retrieved {len(workflows)} workflows from {storage.provider_name}",
        data=[_dump(summary) for summary in workflows],
    )


@router.get("/workflows/{name}", response_model=WorkflowResponse)
async def get_workflow(name: str, storage: StorageProviderDep):
    """Get a workflow by name."""
    workflow = await storage.get_workflow(name)
    return WorkflowResponse(
        success=True,
        message=f"Retrieved workflow '{name}'",
        data=_dump(workflow),
    )


@router.post("/workflows", response_model=WorkflowResponse)
async def save_workflow(request: CreateWorkflowRequest, storage: StorageProviderDep):
    """Create or replace a workflow."""
    if not request.name.strip():
        raise InvalidStorageArgument("Workflow name is required", provider=storage.provider_name)

    workflow = WorkflowDocument(
        name=request.name,
        description=request.description,
        rules=request.rules,
        global_params=request.global_params,
    )
    await storage.save_workflow(workflow)
    logger.info(f"Saved workflow: {request.name}")

    return WorkflowResponse(
        success=True,
        message=f"Workflow '{request.name}' saved successfully",
        data=_dump(workflow),
    )


@router.delete("/workflows/{name}", response_model=WorkflowResponse)
async def delete_workflow(name: str, storage: StorageProviderDep):
    """Delete a workflow."""
    await storage.delete_workflow(name)
    return WorkflowResponse(success=True, message=f"Workflow '{name}' deleted successfully")


@router.head("/workflows/{name}")
async def workflow_exists(name: str, storage: StorageProviderDep):
    """200 when the workflow exists, 404 otherwise."""
    exists = await storage.workflow_exists(name)
    return Response(status_code=200 if exists else 404)


@router.get("/workflows/{name}/export", response_model=list[RulesEngineWorkflow])
async def export_workflow(name: str, storage: StorageProviderDep):
    """Export a workflow as a RulesEngine workflow array."""
    workflow = await storage.get_workflow(name)
    return to_rules_engine_workflows(workflow)


@router.post("/workflows/import", response_model=WorkflowResponse)
async def import_workflow(workflows: list[RulesEngineWorkflow], storage: StorageProviderDep):
    """Save the first entry of a RulesEngine workflow array."""
    workflow = from_rules_engine_workflows(workflows)
    if workflow is None or not workflow.name.strip():
        raise InvalidStorageArgument(
            "A RulesEngine workflow with a WorkflowName is required", provider=storage.provider_name
        )

    await storage.save_workflow(workflow)
    logger.info(f"Imported workflow: {workflow.name}")

    return WorkflowResponse(
        success=True,
        message=f"Workflow '{workflow.name}' imported successfully",
        data=_dump(workflow),
    )


@router.get("/providers", response_model=ProvidersResponse)
async def list_providers(factory: StorageProviderFactoryDep):
    """List the storage providers and whether each one is configured."""
    return ProvidersResponse(
        default=factory.default_provider_type,
        providers=factory.available_providers(),
    )
