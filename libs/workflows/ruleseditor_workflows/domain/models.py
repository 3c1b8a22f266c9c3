"""Workflow domain models.

Wire names follow the documents the editor has always written: camelCase for
workflow-level fields and the Microsoft RulesEngine PascalCase names for
rules and global params.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_EXPRESSION_TYPE = "LambdaExpression"


def match_fields_case_insensitively(model_cls: type[BaseModel], data: Any) -> Any:
    """Rewrite incoming keys onto the model's aliases, ignoring case.

    Hand-edited documents drift in key casing ("ruleName", "rulename",
    "success_event"); each spelling is mapped onto the canonical alias.
    """
    if not isinstance(data, dict):
        return data

    lookup: dict[str, str] = {}
    for field_name, field in model_cls.model_fields.items():
        canonical = field.alias or field_name
        lookup[field_name.lower()] = canonical
        lookup[canonical.lower()] = canonical

    normalized: dict[str, Any] = {}
    for key, value in data.items():
        target = lookup.get(key.lower(), key) if isinstance(key, str) else key
        # An exact alias match wins over a case-folded duplicate
        if target in normalized and key != target:
            continue
        normalized[target] = value
    return normalized


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class RuleRecord(BaseModel):
    """A single rule, compatible with RulesEngine.Models.Rule.

    The expression is opaque here; evaluation happens elsewhere.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., alias="RuleName")
    expression: str = Field(..., alias="Expression")
    success_event: str = Field(default="", alias="SuccessEvent")
    error_message: str | None = Field(default=None, alias="ErrorMessage")
    expression_type: str = Field(default=DEFAULT_EXPRESSION_TYPE, alias="RuleExpressionType")
    enabled: bool = Field(default=True, alias="Enabled")

    @model_validator(mode="before")
    @classmethod
    def match_keys(cls, data: Any) -> Any:
        return match_fields_case_insensitively(cls, data)

    @field_validator("expression_type", mode="before")
    @classmethod
    def default_expression_type(cls, v: Any) -> Any:
        """Treat an explicit null or blank type as the default."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_EXPRESSION_TYPE
        return v


class GlobalParam(BaseModel):
    """Named expression shared by every rule in a workflow."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., alias="Name")
    expression: str = Field(..., alias="Expression")

    @model_validator(mode="before")
    @classmethod
    def match_keys(cls, data: Any) -> Any:
        return match_fields_case_insensitively(cls, data)


class WorkflowDocument(BaseModel):
    """A named collection of rules plus metadata, the unit of storage."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default="", alias="name")
    description: str | None = Field(default=None, alias="description")
    rules: list[RuleRecord] = Field(default_factory=list, alias="rules")
    global_params: list[GlobalParam] = Field(default_factory=list, alias="globalParams")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    @model_validator(mode="before")
    @classmethod
    def match_keys(cls, data: Any) -> Any:
        data = match_fields_case_insensitively(cls, data)
        # Documents written by older tools may carry explicit nulls for lists
        if isinstance(data, dict):
            for key in ("rules", "globalParams"):
                if key in data and data[key] is None:
                    data[key] = []
        return data

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)

    @model_validator(mode="after")
    def validate_timestamps(self) -> "WorkflowDocument":
        """Validate datetime field relationships."""
        if self.created_at and self.updated_at and self.updated_at < self.created_at:
            raise ValueError("updatedAt cannot be before createdAt")
        return self

    def stamp_for_save(self, stored_created_at: datetime | None = None) -> None:
        """Set timestamps ahead of a write.

        ``updated_at`` becomes now. ``created_at`` keeps the value already in
        storage when there is one, then the document's own value, then now.
        """
        now = datetime.now(UTC)
        created_at = _as_utc(stored_created_at) or _as_utc(self.created_at) or now
        self.updated_at = now
        self.created_at = min(created_at, now)

    def summarize(self) -> "WorkflowSummary":
        return WorkflowSummary(
            name=self.name,
            description=self.description,
            rule_count=len(self.rules),
            global_param_count=len(self.global_params),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class WorkflowSummary(BaseModel):
    """Workflow metadata for list operations."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(..., alias="name")
    description: str | None = Field(default=None, alias="description")
    rule_count: int = Field(default=0, alias="ruleCount")
    global_param_count: int = Field(default=0, alias="globalParamCount")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


def sort_summaries(summaries: list[WorkflowSummary]) -> list[WorkflowSummary]:
    """Order summaries most recently updated first; undated documents last."""
    oldest = datetime.min.replace(tzinfo=UTC)
    return sorted(summaries, key=lambda s: s.updated_at or oldest, reverse=True)
