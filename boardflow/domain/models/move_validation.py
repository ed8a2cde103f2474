"""Result of validating a work item status change."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

TRANSITION_NOT_ALLOWED_MESSAGE = "This transition is not allowed by the workflow"
VALIDATION_FAILED_MESSAGE = "Failed to validate workflow transition"
ISSUE_NOT_FOUND_MESSAGE = "Issue not found"


class MoveRejectionReason(StrEnum):
    """Why a move was rejected.

    TRANSITION_NOT_ALLOWED is the expected, user-facing rejection.
    VALIDATION_FAILED means the graph could not be obtained and the
    move was refused without being checked. WORKFLOW_NOT_CONFIGURED is
    the same refusal when the project has no usable workflow.
    """

    TRANSITION_NOT_ALLOWED = "transition_not_allowed"
    VALIDATION_FAILED = "validation_failed"
    ISSUE_NOT_FOUND = "issue_not_found"
    WORKFLOW_NOT_CONFIGURED = "workflow_not_configured"


@dataclass(frozen=True)
class MoveValidation:
    """Outcome of a move validation.

    Attributes:
        valid: True if the move may be committed.
        error: User-facing reason when invalid.
        reason: Machine-readable rejection reason when invalid.
    """

    valid: bool
    error: str | None = None
    reason: MoveRejectionReason | None = None

    def __post_init__(self) -> None:
        if self.valid and (self.error is not None or self.reason is not None):
            raise ValueError("A valid move cannot carry an error")
        if not self.valid and self.reason is None:
            raise ValueError("An invalid move must carry a rejection reason")

    @classmethod
    def allowed(cls) -> MoveValidation:
        return cls(valid=True)

    @classmethod
    def not_allowed(cls) -> MoveValidation:
        return cls(
            valid=False,
            error=TRANSITION_NOT_ALLOWED_MESSAGE,
            reason=MoveRejectionReason.TRANSITION_NOT_ALLOWED,
        )

    @classmethod
    def failed(cls) -> MoveValidation:
        return cls(
            valid=False,
            error=VALIDATION_FAILED_MESSAGE,
            reason=MoveRejectionReason.VALIDATION_FAILED,
        )

    @classmethod
    def not_configured(cls, guidance: str) -> MoveValidation:
        return cls(
            valid=False,
            error=guidance,
            reason=MoveRejectionReason.WORKFLOW_NOT_CONFIGURED,
        )

    @classmethod
    def issue_not_found(cls) -> MoveValidation:
        return cls(
            valid=False,
            error=ISSUE_NOT_FOUND_MESSAGE,
            reason=MoveRejectionReason.ISSUE_NOT_FOUND,
        )


@dataclass(frozen=True)
class MoveOutcome:
    """Result of an attempted (validated) status change.

    Attributes:
        success: True if the new status was committed.
        target_status_id: The status the item was moved to (or would have been).
        error: Reason when the move was not committed.
    """

    success: bool
    target_status_id: str | None = None
    error: str | None = None
