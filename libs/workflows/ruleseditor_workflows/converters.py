"""Conversion between editor documents and the Microsoft RulesEngine format.

RulesEngine consumes a JSON array of workflows, each shaped as
``{"WorkflowName": ..., "Rules": [...], "GlobalParams": [...]}``.
"""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from ruleseditor_common.exceptions import InvalidStorageArgument

from .domain.models import (
    GlobalParam,
    RuleRecord,
    WorkflowDocument,
    WorkflowSummary,
    match_fields_case_insensitively,
)


class RulesEngineWorkflow(BaseModel):
    """One entry of a RulesEngine workflow array."""

    model_config = ConfigDict(populate_by_name=True)

    workflow_name: str = Field(..., alias="WorkflowName")
    rules: list[RuleRecord] = Field(default_factory=list, alias="Rules")
    global_params: list[GlobalParam] = Field(default_factory=list, alias="GlobalParams")

    @model_validator(mode="before")
    @classmethod
    def match_keys(cls, data: Any) -> Any:
        data = match_fields_case_insensitively(cls, data)
        if isinstance(data, dict):
            for key in ("Rules", "GlobalParams"):
                if key in data and data[key] is None:
                    data[key] = []
        return data


def _default_description(workflow_name: str) -> str:
    return f"Workflow for {workflow_name}"


def to_rules_engine_workflows(workflow: WorkflowDocument) -> list[RulesEngineWorkflow]:
    """Wrap a document as a single-entry RulesEngine workflow array."""
    return [
        RulesEngineWorkflow(
            workflow_name=workflow.name,
            rules=list(workflow.rules),
            global_params=list(workflow.global_params),
        )
    ]


def from_rules_engine_workflows(
    workflows: list[RulesEngineWorkflow],
) -> WorkflowDocument | None:
    """Build an editor document from the first entry of a RulesEngine array.

    Returns None for an empty array. Timestamps are left unset; providers
    stamp them on save.
    """
    if not workflows:
        return None

    first = workflows[0]
    return WorkflowDocument(
        name=first.workflow_name,
        description=_default_description(first.workflow_name),
        rules=list(first.rules),
        global_params=list(first.global_params),
    )


def summarize_rules_engine_workflows(
    workflows: list[RulesEngineWorkflow],
) -> WorkflowSummary | None:
    """Summary metadata for the first entry of a RulesEngine array."""
    if not workflows:
        return None

    first = workflows[0]
    return WorkflowSummary(
        name=first.workflow_name,
        description=_default_description(first.workflow_name),
        rule_count=len(first.rules),
        global_param_count=len(first.global_params),
    )


def dump_rules_engine_workflows(workflows: list[RulesEngineWorkflow]) -> str:
    """Serialize a RulesEngine array with the RulesEngine key names."""
    payload = [workflow.model_dump(mode="json", by_alias=True) for workflow in workflows]
    return json.dumps(payload, indent=2, ensure_ascii=False)


def load_rules_engine_workflows(content: str | bytes) -> list[RulesEngineWorkflow]:
    """Parse a RulesEngine workflow array.

    Raises:
        InvalidStorageArgument: If the content is not a valid workflow array
    """
    try:
        payload = json.loads(content)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InvalidStorageArgument(f"Invalid RulesEngine workflow array: {e}") from e

    if not isinstance(payload, list):
        raise InvalidStorageArgument(
            f"Invalid RulesEngine workflow array: expected a JSON array, got {type(payload).__name__}"
        )

    try:
        return [RulesEngineWorkflow.model_validate(item) for item in payload]
    except ValidationError as e:
        raise InvalidStorageArgument(f"Invalid RulesEngine workflow array: {e}") from e
