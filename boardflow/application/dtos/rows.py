"""Validated row models for the repository boundary.

Repositories hand back loosely-typed mappings. Each one is validated
here into a frozen pydantic model and from there into a domain record,
so nothing untyped reaches the planning or analysis code. A row that
fails validation raises InvalidRecordError naming the record type.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from boardflow.domain.errors.repository import InvalidRecordError
from boardflow.domain.models.board_column import Column
from boardflow.domain.models.status import Status, StatusCategory


class _Row(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class StatusRow(_Row):
    """Status row: id, name, color, category."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    color: str | None = None
    category: StatusCategory

    def to_domain(self) -> Status:
        return Status(
            id=self.id,
            name=self.name,
            color=self.color or "",
            category=self.category,
        )


class SchemeMappingRow(_Row):
    """Scheme mapping row. issue_type_id is None for the default mapping."""

    id: str = Field(min_length=1)
    scheme_id: str = Field(min_length=1)
    issue_type_id: str | None = None
    workflow_id: str = Field(min_length=1)

    @property
    def is_default(self) -> bool:
        return self.issue_type_id is None


class WorkflowRow(_Row):
    id: str = Field(min_length=1)
    name: str = ""


class WorkflowStepRow(_Row):
    """Workflow step row; position is the declared layout order."""

    id: str = Field(min_length=1)
    workflow_id: str = Field(min_length=1)
    status_id: str = Field(min_length=1)
    position: int = 0


class WorkflowTransitionRow(_Row):
    from_step_id: str = Field(min_length=1)
    to_step_id: str = Field(min_length=1)


class ColumnRow(_Row):
    """Board column row including its mapped status ids."""

    id: str = Field(min_length=1)
    board_id: str = Field(min_length=1)
    name: str
    position: int = Field(ge=0)
    min_issues: int | None = Field(default=None, ge=0)
    max_issues: int | None = Field(default=None, ge=0)
    status_ids: tuple[str, ...] = ()

    @field_validator("status_ids", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        # LEFT JOIN aggregates come back as NULL for columns with no statuses
        return () if value is None else value

    def to_domain(self) -> Column:
        return Column(
            id=self.id,
            name=self.name,
            position=self.position,
            status_ids=self.status_ids,
            min_issues=self.min_issues,
            max_issues=self.max_issues,
        )


RowModel = TypeVar("RowModel", bound=_Row)

_RECORD_TYPES: dict[type[_Row], str] = {
    StatusRow: "status",
    SchemeMappingRow: "workflow_scheme_mapping",
    WorkflowRow: "workflow",
    WorkflowStepRow: "workflow_step",
    WorkflowTransitionRow: "workflow_transition",
    ColumnRow: "board_column",
}


def parse_row(model: type[RowModel], row: Mapping[str, Any]) -> RowModel:
    """Validate one repository row.

    Raises:
        InvalidRecordError: If the row does not match the model.
    """
    try:
        return model.model_validate(dict(row))
    except ValidationError as exc:
        raise InvalidRecordError(
            _RECORD_TYPES.get(model, model.__name__),
            "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in exc.errors()
            ),
        ) from exc


def parse_rows(model: type[RowModel], rows: Iterable[Mapping[str, Any]]) -> list[RowModel]:
    """Validate a sequence of repository rows, preserving order."""
    return [parse_row(model, row) for row in rows]
