"""Unit tests for drop routing onto board columns."""

from __future__ import annotations

import pytest

from boardflow.application.services.drop_router import (
    EMPTY_COLUMN_MESSAGE,
    DropRouter,
    resolve_drop_status,
)
from boardflow.application.services.transition_validation_service import (
    TransitionValidationService,
)
from boardflow.application.services.workflow_graph_loader import WorkflowGraphLoader
from boardflow.domain.models.board_column import Column
from boardflow.domain.models.move_validation import TRANSITION_NOT_ALLOWED_MESSAGE
from boardflow.infrastructure.stubs import WorkItemRepositoryStub

MULTI = Column(id="col-active", name="Active", position=1, status_ids=("in_progress", "done"))


@pytest.fixture
def router(
    graph_loader: WorkflowGraphLoader, work_item_repository: WorkItemRepositoryStub
) -> DropRouter:
    return DropRouter(TransitionValidationService(graph_loader, work_item_repository))


class TestResolveDropStatus:
    """Target status selection."""

    def test_empty_column(self) -> None:
        assert resolve_drop_status(Column(id="c", name="Empty", position=0)) is None

    def test_single_status_ignores_zone(self) -> None:
        column = Column(id="c", name="Done", position=0, status_ids=("done",))

        assert resolve_drop_status(column, zone_status_id="todo") == "done"

    def test_zone_on_multi_status_column(self) -> None:
        assert resolve_drop_status(MULTI, zone_status_id="done") == "done"

    def test_default_used_without_zone(self) -> None:
        assert resolve_drop_status(MULTI, default_status_id="done") == "done"

    def test_zone_beats_default(self) -> None:
        assert (
            resolve_drop_status(MULTI, zone_status_id="in_progress", default_status_id="done")
            == "in_progress"
        )

    def test_first_status_when_nothing_else_applies(self) -> None:
        assert resolve_drop_status(MULTI) == "in_progress"

    def test_foreign_zone_and_default_ignored(self) -> None:
        assert (
            resolve_drop_status(MULTI, zone_status_id="todo", default_status_id="todo")
            == "in_progress"
        )


class TestDropRouter:
    """Tests for DropRouter.drop."""

    def test_resolve_target_uses_configured_default(
        self, graph_loader: WorkflowGraphLoader, work_item_repository: WorkItemRepositoryStub
    ) -> None:
        router = DropRouter(
            TransitionValidationService(graph_loader, work_item_repository),
            default_status_ids={"col-active": "done"},
        )

        assert router.resolve_target(MULTI) == "done"

    @pytest.mark.asyncio
    async def test_drop_moves_item(
        self, router: DropRouter, work_item_repository: WorkItemRepositoryStub
    ) -> None:
        work_item_repository.add_item("issue-1", "proj-1", "todo")

        outcome = await router.drop("issue-1", "proj-1", MULTI)

        assert outcome.success
        assert outcome.target_status_id == "in_progress"
        assert work_item_repository.status_updates == [("issue-1", "in_progress")]

    @pytest.mark.asyncio
    async def test_drop_on_disallowed_zone_rejected(
        self, router: DropRouter, work_item_repository: WorkItemRepositoryStub
    ) -> None:
        work_item_repository.add_item("issue-1", "proj-1", "todo")

        outcome = await router.drop("issue-1", "proj-1", MULTI, zone_status_id="done")

        assert not outcome.success
        assert outcome.error == TRANSITION_NOT_ALLOWED_MESSAGE
        assert await work_item_repository.get_status_id("issue-1") == "todo"

    @pytest.mark.asyncio
    async def test_drop_on_empty_column_rejected(
        self, router: DropRouter, work_item_repository: WorkItemRepositoryStub
    ) -> None:
        work_item_repository.add_item("issue-1", "proj-1", "todo")

        outcome = await router.drop("issue-1", "proj-1", Column(id="c", name="Empty", position=0))

        assert not outcome.success
        assert outcome.error == EMPTY_COLUMN_MESSAGE
        assert work_item_repository.status_updates == []
