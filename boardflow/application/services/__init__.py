"""Application services for board/workflow alignment."""

from boardflow.application.services.board_alignment_service import BoardAlignmentService
from boardflow.application.services.board_operation_guard import BoardOperationGuard
from boardflow.application.services.board_sync_service import BoardSyncService
from boardflow.application.services.column_configuration_service import (
    ColumnConfigurationService,
    MoveDirection,
)
from boardflow.application.services.drop_router import DropRouter, resolve_drop_status
from boardflow.application.services.transition_validation_service import (
    TransitionValidationService,
)
from boardflow.application.services.workflow_graph_loader import WorkflowGraphLoader

__all__ = [
    "BoardAlignmentService",
    "BoardOperationGuard",
    "BoardSyncService",
    "ColumnConfigurationService",
    "DropRouter",
    "MoveDirection",
    "TransitionValidationService",
    "WorkflowGraphLoader",
    "resolve_drop_status",
]
