"""
Pytest configuration and shared fixtures for BoardFlow tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Repositories are replaced by the in-memory stubs from
  boardflow.infrastructure.stubs
- Use AsyncMock for SQLAlchemy session mocking
- Unit tests go in tests/unit/
"""

import pytest

from boardflow.application.services.workflow_graph_loader import WorkflowGraphLoader
from boardflow.domain.models.board_column import Column
from boardflow.domain.models.status import Status, StatusCategory
from boardflow.domain.models.workflow_graph import Transition, WorkflowGraph
from boardflow.infrastructure.stubs import (
    BoardColumnRepositoryStub,
    WorkflowDefinitionRepositoryStub,
    WorkItemRepositoryStub,
)

PROJECT_ID = "proj-1"
BOARD_ID = "board-1"

# (status_id, name, category) for the three-step workflow used across tests
BASIC_STATUSES = [
    ("todo", "To Do", "todo"),
    ("in_progress", "In Progress", "in_progress"),
    ("done", "Done", "done"),
]
BASIC_TRANSITIONS = [("todo", "in_progress"), ("in_progress", "done")]


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from boardflow import __version__

    return __version__


@pytest.fixture
def todo() -> Status:
    return Status(id="todo", name="To Do", category=StatusCategory.TODO)


@pytest.fixture
def in_progress() -> Status:
    return Status(id="in_progress", name="In Progress", category=StatusCategory.IN_PROGRESS)


@pytest.fixture
def done() -> Status:
    return Status(id="done", name="Done", category=StatusCategory.DONE)


@pytest.fixture
def basic_graph(todo: Status, in_progress: Status, done: Status) -> WorkflowGraph:
    """To Do -> In Progress -> Done."""
    return WorkflowGraph.build(
        [todo, in_progress, done],
        [Transition("todo", "in_progress"), Transition("in_progress", "done")],
    )


@pytest.fixture
def basic_columns() -> list[Column]:
    """One column per basic status, in workflow order."""
    return [
        Column(id="col-todo", name="To Do", position=0, status_ids=("todo",)),
        Column(id="col-progress", name="In Progress", position=1, status_ids=("in_progress",)),
        Column(id="col-done", name="Done", position=2, status_ids=("done",)),
    ]


@pytest.fixture
def workflow_repository() -> WorkflowDefinitionRepositoryStub:
    """Provide a workflow definition stub with the basic workflow on PROJECT_ID."""
    stub = WorkflowDefinitionRepositoryStub()
    stub.configure_project(PROJECT_ID, BASIC_STATUSES, BASIC_TRANSITIONS)
    return stub


@pytest.fixture
def column_repository() -> BoardColumnRepositoryStub:
    """Provide a board column stub with BOARD_ID registered on PROJECT_ID."""
    stub = BoardColumnRepositoryStub()
    stub.add_board(BOARD_ID, PROJECT_ID)
    return stub


@pytest.fixture
def work_item_repository() -> WorkItemRepositoryStub:
    """Provide an empty work item stub."""
    return WorkItemRepositoryStub()


@pytest.fixture
def graph_loader(workflow_repository: WorkflowDefinitionRepositoryStub) -> WorkflowGraphLoader:
    return WorkflowGraphLoader(workflow_repository)
