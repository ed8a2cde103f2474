"""In-memory repository stubs for development and testing."""

from boardflow.infrastructure.stubs.board_column_repository_stub import (
    BoardColumnRepositoryStub,
)
from boardflow.infrastructure.stubs.work_item_repository_stub import (
    WorkItemRepositoryStub,
)
from boardflow.infrastructure.stubs.workflow_definition_repository_stub import (
    WorkflowDefinitionRepositoryStub,
)

__all__ = [
    "BoardColumnRepositoryStub",
    "WorkItemRepositoryStub",
    "WorkflowDefinitionRepositoryStub",
]
