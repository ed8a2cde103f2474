"""PostgreSQL repository adapters (SQLAlchemy async)."""

from boardflow.infrastructure.adapters.persistence.board_column_repository import (
    PostgresBoardColumnRepository,
)
from boardflow.infrastructure.adapters.persistence.work_item_repository import (
    PostgresWorkItemRepository,
)
from boardflow.infrastructure.adapters.persistence.workflow_definition_repository import (
    PostgresWorkflowDefinitionRepository,
)

__all__ = [
    "PostgresBoardColumnRepository",
    "PostgresWorkItemRepository",
    "PostgresWorkflowDefinitionRepository",
]
