"""Board service dependencies.

FastAPI dependency injection for the board services. The service graph
is set once at startup (or by tests with stub repositories).
"""

from boardflow.application.services import (
    BoardAlignmentService,
    BoardSyncService,
    ColumnConfigurationService,
    DropRouter,
    TransitionValidationService,
    WorkflowGraphLoader,
)
from boardflow.bootstrap.board_services import BoardServices

# Singleton instance (initialized at startup)
_board_services: BoardServices | None = None


def get_board_services() -> BoardServices:
    """Get the board service graph singleton.

    Raises:
        RuntimeError: If services were not initialized (startup error).
    """
    if _board_services is None:
        raise RuntimeError(
            "BoardServices not initialized. "
            "Call set_board_services() during startup."
        )
    return _board_services


def set_board_services(services: BoardServices | None) -> None:
    """Set the board service graph singleton.

    Called during application startup, and by tests to inject services
    built over stub repositories. None resets it.
    """
    global _board_services
    _board_services = services


def get_board_sync_service() -> BoardSyncService:
    return get_board_services().sync


def get_board_alignment_service() -> BoardAlignmentService:
    return get_board_services().alignment


def get_transition_validation_service() -> TransitionValidationService:
    return get_board_services().validation


def get_drop_router() -> DropRouter:
    return get_board_services().drop_router


def get_column_configuration_service() -> ColumnConfigurationService:
    return get_board_services().columns


def get_workflow_graph_loader() -> WorkflowGraphLoader:
    return get_board_services().graph_loader


__all__ = [
    "get_board_alignment_service",
    "get_board_services",
    "get_board_sync_service",
    "get_column_configuration_service",
    "get_drop_router",
    "get_transition_validation_service",
    "get_workflow_graph_loader",
    "set_board_services",
]
