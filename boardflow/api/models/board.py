"""Board API request/response models.

Pydantic models for the board alignment, sync, move, and column
configuration endpoints.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from boardflow.domain.models.alignment import AlignmentReport, StatusTransitionInfo
from boardflow.domain.models.board_column import Column
from boardflow.domain.models.move_validation import MoveOutcome, MoveValidation
from boardflow.domain.models.status import Status
from boardflow.domain.services.column_planner import BoardTemplate


class StatusResponse(BaseModel):
    """A workflow status."""

    id: str
    name: str
    category: str = Field(..., examples=["todo", "in_progress", "done"])
    color: str = ""

    @classmethod
    def from_domain(cls, status: Status) -> StatusResponse:
        return cls(
            id=status.id,
            name=status.name,
            category=status.category.value,
            color=status.color,
        )


class ColumnResponse(BaseModel):
    """A board column and its mapped statuses."""

    id: str
    name: str
    position: int
    status_ids: list[str]
    min_issues: int | None = None
    max_issues: int | None = None

    @classmethod
    def from_domain(cls, column: Column) -> ColumnResponse:
        return cls(
            id=column.id,
            name=column.name,
            position=column.position,
            status_ids=list(column.status_ids),
            min_issues=column.min_issues,
            max_issues=column.max_issues,
        )


class ColumnsListResponse(BaseModel):
    columns: list[ColumnResponse]


class AlignmentReportResponse(BaseModel):
    """Alignment of a board against its workflow.

    Attributes:
        board_id: The analysed board.
        workflow_configured: False if the project has no workflow.
        warnings: Warning messages keyed by column id.
        unmapped_statuses: Workflow statuses on no column.
    """

    board_id: str
    workflow_configured: bool
    warnings: dict[str, list[str]] = Field(
        default_factory=dict,
        examples=[
            {"col-2": ["No workflow transitions lead to this column from previous columns."]}
        ],
    )
    unmapped_statuses: list[StatusResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, report: AlignmentReport) -> AlignmentReportResponse:
        return cls(
            board_id=report.board_id,
            workflow_configured=report.workflow_configured,
            warnings=report.warnings,
            unmapped_statuses=[StatusResponse.from_domain(s) for s in report.unmapped_statuses],
        )


class StatusTransitionInfoResponse(BaseModel):
    status_id: str
    can_reach: list[str]
    reachable_from: list[str]

    @classmethod
    def from_domain(cls, info: StatusTransitionInfo) -> StatusTransitionInfoResponse:
        return cls(
            status_id=info.status_id,
            can_reach=list(info.can_reach),
            reachable_from=list(info.reachable_from),
        )


class TransitionInfoListResponse(BaseModel):
    statuses: list[StatusTransitionInfoResponse]


class StatusListResponse(BaseModel):
    statuses: list[StatusResponse]


class RegenerateRequest(BaseModel):
    project_id: str = Field(..., min_length=1)
    preserve_wip_limits: bool | None = Field(
        default=None,
        description="Carry WIP limits over by column name (server default when omitted)",
    )


class RegenerationResponse(BaseModel):
    columns_created: int
    columns_removed: int


class SyncRequest(BaseModel):
    project_id: str = Field(..., min_length=1)
    remove_orphans: bool | None = Field(
        default=None,
        description="Remove columns whose statuses all left the workflow",
    )


class SyncResponse(BaseModel):
    added: int
    removed: int


class ProjectRegenerationResponse(BaseModel):
    boards_updated: int


class MoveValidationRequest(BaseModel):
    from_status_id: str = Field(..., min_length=1)
    to_status_id: str = Field(..., min_length=1)


class MoveValidationResponse(BaseModel):
    valid: bool
    error: str | None = None
    reason: str | None = Field(
        default=None,
        examples=["transition_not_allowed", "validation_failed"],
    )

    @classmethod
    def from_domain(cls, validation: MoveValidation) -> MoveValidationResponse:
        return cls(
            valid=validation.valid,
            error=validation.error,
            reason=validation.reason.value if validation.reason else None,
        )


class TransitionRequest(BaseModel):
    to_status_id: str = Field(..., min_length=1)


class DropRequest(BaseModel):
    """A work item dropped on a board column.

    Attributes:
        zone_status_id: Sub-status zone the item was dropped on, if any.
    """

    issue_id: str = Field(..., min_length=1)
    project_id: str = Field(..., min_length=1)
    column_id: str = Field(..., min_length=1)
    zone_status_id: str | None = None


class MoveOutcomeResponse(BaseModel):
    success: bool
    target_status_id: str | None = None
    error: str | None = None

    @classmethod
    def from_domain(cls, outcome: MoveOutcome) -> MoveOutcomeResponse:
        return cls(
            success=outcome.success,
            target_status_id=outcome.target_status_id,
            error=outcome.error,
        )


class CreateColumnRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class RenameColumnRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class MoveColumnRequest(BaseModel):
    direction: Literal["up", "down"]


class MoveColumnResponse(BaseModel):
    moved: bool


class WipLimitsRequest(BaseModel):
    min_issues: int | None = Field(default=None, ge=0)
    max_issues: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _min_not_above_max(self) -> WipLimitsRequest:
        if (
            self.min_issues is not None
            and self.max_issues is not None
            and self.min_issues > self.max_issues
        ):
            raise ValueError("min_issues must not exceed max_issues")
        return self


class ColumnStatusRequest(BaseModel):
    status_id: str = Field(..., min_length=1)


class DefaultColumnsRequest(BaseModel):
    project_id: str = Field(..., min_length=1)
    template: BoardTemplate = BoardTemplate.SCRUM


class DefaultColumnsResponse(BaseModel):
    column_ids: list[str]


class BoardErrorResponse(BaseModel):
    """RFC 7807 problem details."""

    type: str
    title: str
    status: int
    detail: str
    instance: str
