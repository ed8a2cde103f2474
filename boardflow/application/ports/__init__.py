"""Ports (repository interfaces) consumed by BoardFlow services.

Repositories return loosely-typed rows (mappings), mirroring the
generic filter/order/CRUD protocol of the backing store. Rows are
validated into domain records by boardflow.application.dtos.rows
before any service logic sees them.
"""

from boardflow.application.ports.board_column_repository import (
    BoardColumnRepositoryProtocol,
)
from boardflow.application.ports.work_item_repository import (
    WorkItemRepositoryProtocol,
)
from boardflow.application.ports.workflow_definition_repository import (
    WorkflowDefinitionRepositoryProtocol,
)

__all__: list[str] = [
    "BoardColumnRepositoryProtocol",
    "WorkItemRepositoryProtocol",
    "WorkflowDefinitionRepositoryProtocol",
]
