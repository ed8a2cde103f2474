"""Unit tests for WorkflowGraphLoader."""

from __future__ import annotations

import pytest

from boardflow.application.services.workflow_graph_loader import WorkflowGraphLoader
from boardflow.domain.errors import (
    InvalidRecordError,
    RepositoryError,
    WorkflowNotConfiguredError,
    WorkflowResolutionStage,
)
from boardflow.domain.models.status import StatusCategory
from boardflow.domain.models.workflow_graph import Transition
from boardflow.infrastructure.stubs import WorkflowDefinitionRepositoryStub


@pytest.fixture
def repository() -> WorkflowDefinitionRepositoryStub:
    return WorkflowDefinitionRepositoryStub()


@pytest.fixture
def loader(repository: WorkflowDefinitionRepositoryStub) -> WorkflowGraphLoader:
    return WorkflowGraphLoader(repository)


def _seed_statuses(repository: WorkflowDefinitionRepositoryStub, *status_ids: str) -> None:
    for status_id in status_ids:
        repository.add_status(status_id, status_id.upper(), StatusCategory.TODO)


class TestResolve:
    """Tests for a fully configured project."""

    @pytest.mark.asyncio
    async def test_resolves_statuses_and_transitions(
        self, graph_loader: WorkflowGraphLoader
    ) -> None:
        graph = await graph_loader.resolve("proj-1")

        assert [s.id for s in graph.statuses] == ["todo", "in_progress", "done"]
        assert graph.transitions == frozenset(
            {Transition("todo", "in_progress"), Transition("in_progress", "done")}
        )
        assert graph.status("in_progress").category == StatusCategory.IN_PROGRESS

    @pytest.mark.asyncio
    async def test_steps_ordered_by_position(
        self, repository: WorkflowDefinitionRepositoryStub, loader: WorkflowGraphLoader
    ) -> None:
        _seed_statuses(repository, "a", "b", "c")
        repository.assign_scheme("p", "s")
        repository.add_mapping("s", "wf")
        repository.add_workflow("wf")
        repository.add_step("wf", "step-c", "c", 2)
        repository.add_step("wf", "step-a", "a", 0)
        repository.add_step("wf", "step-b", "b", 1)

        graph = await loader.resolve("p")

        assert [s.id for s in graph.statuses] == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_default_mapping_preferred(
        self, repository: WorkflowDefinitionRepositoryStub, loader: WorkflowGraphLoader
    ) -> None:
        _seed_statuses(repository, "bug-open", "open")
        repository.assign_scheme("p", "s")
        repository.add_mapping("s", "wf-bug", issue_type_id="bug")
        repository.add_mapping("s", "wf-default")
        repository.add_workflow("wf-bug")
        repository.add_workflow("wf-default")
        repository.add_step("wf-bug", "s1", "bug-open", 0)
        repository.add_step("wf-default", "s2", "open", 0)

        graph = await loader.resolve("p")

        assert [s.id for s in graph.statuses] == ["open"]

    @pytest.mark.asyncio
    async def test_first_mapping_used_without_default(
        self, repository: WorkflowDefinitionRepositoryStub, loader: WorkflowGraphLoader
    ) -> None:
        _seed_statuses(repository, "bug-open")
        repository.assign_scheme("p", "s")
        repository.add_mapping("s", "wf-bug", issue_type_id="bug")
        repository.add_workflow("wf-bug")
        repository.add_step("wf-bug", "s1", "bug-open", 0)

        graph = await loader.resolve("p")

        assert [s.id for s in graph.statuses] == ["bug-open"]

    @pytest.mark.asyncio
    async def test_duplicates_and_dangling_transitions(
        self, repository: WorkflowDefinitionRepositoryStub, loader: WorkflowGraphLoader
    ) -> None:
        """Two steps on one status collapse; transitions to unknown steps drop."""
        _seed_statuses(repository, "a", "b")
        repository.assign_scheme("p", "s")
        repository.add_mapping("s", "wf")
        repository.add_workflow("wf")
        repository.add_step("wf", "s-a", "a", 0)
        repository.add_step("wf", "s-b", "b", 1)
        repository.add_step("wf", "s-a2", "a", 2)
        repository.add_transition("wf", "s-a", "s-b")
        repository.add_transition("wf", "s-a2", "s-b")
        repository.add_transition("wf", "s-b", "s-missing")

        graph = await loader.resolve("p")

        assert [s.id for s in graph.statuses] == ["a", "b"]
        assert graph.transitions == frozenset({Transition("a", "b")})

    @pytest.mark.asyncio
    async def test_step_with_unknown_status_is_skipped(
        self, repository: WorkflowDefinitionRepositoryStub, loader: WorkflowGraphLoader
    ) -> None:
        _seed_statuses(repository, "a")
        repository.assign_scheme("p", "s")
        repository.add_mapping("s", "wf")
        repository.add_workflow("wf")
        repository.add_step("wf", "s-a", "a", 0)
        repository.add_step("wf", "s-x", "deleted-status", 1)
        repository.add_transition("wf", "s-a", "s-x")

        graph = await loader.resolve("p")

        assert [s.id for s in graph.statuses] == ["a"]
        assert not graph.has_transitions


class TestResolveNotConfigured:
    """Each missing link fails with its own stage."""

    @pytest.mark.asyncio
    async def test_no_scheme(self, loader: WorkflowGraphLoader) -> None:
        with pytest.raises(WorkflowNotConfiguredError) as exc_info:
            await loader.resolve("unknown-project")

        assert exc_info.value.stage == WorkflowResolutionStage.SCHEME
        assert exc_info.value.project_id == "unknown-project"

    @pytest.mark.asyncio
    async def test_no_mapping(
        self, repository: WorkflowDefinitionRepositoryStub, loader: WorkflowGraphLoader
    ) -> None:
        repository.assign_scheme("p", "s")

        with pytest.raises(WorkflowNotConfiguredError) as exc_info:
            await loader.resolve("p")

        assert exc_info.value.stage == WorkflowResolutionStage.MAPPING

    @pytest.mark.asyncio
    async def test_no_workflow(
        self, repository: WorkflowDefinitionRepositoryStub, loader: WorkflowGraphLoader
    ) -> None:
        repository.assign_scheme("p", "s")
        repository.add_mapping("s", "wf-deleted")

        with pytest.raises(WorkflowNotConfiguredError) as exc_info:
            await loader.resolve("p")

        assert exc_info.value.stage == WorkflowResolutionStage.WORKFLOW

    @pytest.mark.asyncio
    async def test_no_steps(
        self, repository: WorkflowDefinitionRepositoryStub, loader: WorkflowGraphLoader
    ) -> None:
        repository.assign_scheme("p", "s")
        repository.add_mapping("s", "wf")
        repository.add_workflow("wf")

        with pytest.raises(WorkflowNotConfiguredError) as exc_info:
            await loader.resolve("p")

        assert exc_info.value.stage == WorkflowResolutionStage.STEPS


class TestResolveFailures:
    @pytest.mark.asyncio
    async def test_repository_error_propagates(
        self, workflow_repository: WorkflowDefinitionRepositoryStub, graph_loader: WorkflowGraphLoader
    ) -> None:
        """A store outage is never mistaken for a missing workflow."""
        workflow_repository.set_should_fail(True)

        with pytest.raises(RepositoryError):
            await graph_loader.resolve("proj-1")

    @pytest.mark.asyncio
    async def test_malformed_row_raises_invalid_record(
        self, repository: WorkflowDefinitionRepositoryStub, loader: WorkflowGraphLoader
    ) -> None:
        repository.assign_scheme("p", "s")
        repository.add_mapping("s", "wf")
        repository.add_workflow("wf")
        repository.add_step("wf", "s-a", "", 0)

        with pytest.raises(InvalidRecordError) as exc_info:
            await loader.resolve("p")

        assert exc_info.value.record_type == "workflow_step"


class TestLookupStatuses:
    @pytest.mark.asyncio
    async def test_order_kept_and_missing_skipped(
        self, repository: WorkflowDefinitionRepositoryStub, loader: WorkflowGraphLoader
    ) -> None:
        _seed_statuses(repository, "a", "b")

        statuses = await loader.lookup_statuses(["b", "missing", "a", "b"])

        assert [s.id for s in statuses] == ["b", "a"]

    @pytest.mark.asyncio
    async def test_empty_input_makes_no_call(
        self, repository: WorkflowDefinitionRepositoryStub, loader: WorkflowGraphLoader
    ) -> None:
        assert await loader.lookup_statuses([]) == []
        assert repository.call_count == 0
