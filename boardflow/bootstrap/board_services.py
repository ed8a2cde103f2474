"""Board service graph wiring.

Builds the repositories for the configured backend and the services on
top of them. The memory backend uses the in-process stubs and is meant
for development and tests; postgres uses the SQLAlchemy adapters.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from boardflow.application.ports.board_column_repository import (
    BoardColumnRepositoryProtocol,
)
from boardflow.application.ports.work_item_repository import (
    WorkItemRepositoryProtocol,
)
from boardflow.application.ports.workflow_definition_repository import (
    WorkflowDefinitionRepositoryProtocol,
)
from boardflow.application.services import (
    BoardAlignmentService,
    BoardOperationGuard,
    BoardSyncService,
    ColumnConfigurationService,
    DropRouter,
    TransitionValidationService,
    WorkflowGraphLoader,
)
from boardflow.bootstrap.database import get_session_factory
from boardflow.config.board_sync_config import BoardSyncConfig
from boardflow.infrastructure.adapters.persistence import (
    PostgresBoardColumnRepository,
    PostgresWorkflowDefinitionRepository,
    PostgresWorkItemRepository,
)
from boardflow.infrastructure.stubs import (
    BoardColumnRepositoryStub,
    WorkflowDefinitionRepositoryStub,
    WorkItemRepositoryStub,
)

logger = get_logger()


@dataclass(frozen=True)
class BoardServices:
    """The wired service graph for one process."""

    config: BoardSyncConfig
    graph_loader: WorkflowGraphLoader
    sync: BoardSyncService
    alignment: BoardAlignmentService
    validation: TransitionValidationService
    drop_router: DropRouter
    columns: ColumnConfigurationService


def create_board_services(
    config: BoardSyncConfig,
    workflow_repository: WorkflowDefinitionRepositoryProtocol,
    column_repository: BoardColumnRepositoryProtocol,
    work_item_repository: WorkItemRepositoryProtocol,
) -> BoardServices:
    """Wire services over the given repositories.

    All column-mutating services share one per-board guard.
    """
    guard = BoardOperationGuard(config.lock_timeout_seconds)
    graph_loader = WorkflowGraphLoader(workflow_repository)
    validation = TransitionValidationService(graph_loader, work_item_repository)
    return BoardServices(
        config=config,
        graph_loader=graph_loader,
        sync=BoardSyncService(
            graph_loader,
            column_repository,
            work_item_repository,
            guard=guard,
            config=config,
        ),
        alignment=BoardAlignmentService(graph_loader, column_repository),
        validation=validation,
        drop_router=DropRouter(validation),
        columns=ColumnConfigurationService(column_repository, guard=guard),
    )


def build_board_services(
    config: BoardSyncConfig,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> BoardServices:
    """Build the service graph for config.backend.

    Args:
        config: Board sync configuration.
        session_factory: Session factory for the postgres backend.
            Defaults to the DATABASE_URL factory.
    """
    log = logger.bind(component="board_bootstrap", backend=config.backend)

    if config.backend == "postgres":
        factory = session_factory or get_session_factory()
        services = create_board_services(
            config,
            PostgresWorkflowDefinitionRepository(factory),
            PostgresBoardColumnRepository(factory),
            PostgresWorkItemRepository(factory),
        )
    else:
        services = create_board_services(
            config,
            WorkflowDefinitionRepositoryStub(),
            BoardColumnRepositoryStub(),
            WorkItemRepositoryStub(),
        )

    log.info("board_services_created")
    return services
