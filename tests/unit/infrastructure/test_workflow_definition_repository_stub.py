"""Unit tests for WorkflowDefinitionRepositoryStub."""

import pytest

from boardflow.domain.errors import RepositoryError
from boardflow.infrastructure.stubs import WorkflowDefinitionRepositoryStub


@pytest.fixture
def stub() -> WorkflowDefinitionRepositoryStub:
    stub = WorkflowDefinitionRepositoryStub()
    stub.configure_project(
        "proj-1",
        statuses=[("todo", "To Do", "todo"), ("done", "Done", "done")],
        transitions=[("todo", "done")],
    )
    return stub


class TestConfigureProject:
    """Tests for the configure_project seeding helper."""

    @pytest.mark.asyncio
    async def test_builds_full_chain(self, stub: WorkflowDefinitionRepositoryStub) -> None:
        scheme_id = await stub.get_scheme_id_for_project("proj-1")
        mappings = await stub.list_scheme_mappings(scheme_id)
        workflow_id = mappings[0]["workflow_id"]

        assert mappings[0]["issue_type_id"] is None
        assert await stub.get_workflow(workflow_id) is not None
        assert [s["status_id"] for s in await stub.list_steps(workflow_id)] == ["todo", "done"]
        assert await stub.list_transitions(workflow_id) == [
            {"from_step_id": "step-todo", "to_step_id": "step-done"}
        ]

    @pytest.mark.asyncio
    async def test_get_statuses_skips_unknown(
        self, stub: WorkflowDefinitionRepositoryStub
    ) -> None:
        rows = await stub.get_statuses(["done", "missing", "todo"])

        assert [r["id"] for r in rows] == ["done", "todo"]
        assert rows[0]["category"] == "done"


class TestFailureAndReset:
    """should_fail, call counting and clear."""

    @pytest.mark.asyncio
    async def test_should_fail(self, stub: WorkflowDefinitionRepositoryStub) -> None:
        stub.set_should_fail(True)

        with pytest.raises(RepositoryError):
            await stub.get_scheme_id_for_project("proj-1")

    @pytest.mark.asyncio
    async def test_call_count_and_clear(self, stub: WorkflowDefinitionRepositoryStub) -> None:
        await stub.get_scheme_id_for_project("proj-1")
        await stub.get_workflow("wf-proj-1")
        assert stub.call_count == 2

        stub.clear()

        assert stub.call_count == 0
        assert await stub.get_scheme_id_for_project("proj-1") is None
