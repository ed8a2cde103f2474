"""Domain models for BoardFlow."""

from boardflow.domain.models.alignment import (
    NO_INCOMING_TRANSITIONS_MESSAGE,
    NO_OUTGOING_TRANSITIONS_MESSAGE,
    AlignmentReport,
    AlignmentWarning,
    StatusTransitionInfo,
)
from boardflow.domain.models.board_column import (
    BoardColumnPartition,
    Column,
    WipState,
)
from boardflow.domain.models.board_sync import (
    ColumnSpec,
    PartitionPlan,
    RegenerationResult,
    SyncPlan,
    SyncResult,
    WipLimits,
)
from boardflow.domain.models.move_validation import (
    MoveOutcome,
    MoveRejectionReason,
    MoveValidation,
)
from boardflow.domain.models.status import Status, StatusCategory
from boardflow.domain.models.workflow_graph import Transition, WorkflowGraph

__all__: list[str] = [
    "NO_INCOMING_TRANSITIONS_MESSAGE",
    "NO_OUTGOING_TRANSITIONS_MESSAGE",
    "AlignmentReport",
    "AlignmentWarning",
    "BoardColumnPartition",
    "Column",
    "ColumnSpec",
    "MoveOutcome",
    "MoveRejectionReason",
    "MoveValidation",
    "PartitionPlan",
    "RegenerationResult",
    "Status",
    "StatusCategory",
    "StatusTransitionInfo",
    "SyncPlan",
    "SyncResult",
    "Transition",
    "WipLimits",
    "WipState",
    "WorkflowGraph",
]
