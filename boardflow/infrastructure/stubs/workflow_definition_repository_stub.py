"""Workflow definition repository stub for testing.

In-memory implementation of WorkflowDefinitionRepositoryProtocol.
Tests seed it either piece by piece (assign_scheme, add_mapping,
add_workflow, add_step, add_transition, add_status) or with
configure_project(), which builds a complete single-workflow setup.

WARNING: This stub is NOT for production use.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from boardflow.application.ports.workflow_definition_repository import (
    Row,
    WorkflowDefinitionRepositoryProtocol,
)
from boardflow.domain.errors.repository import RepositoryError
from boardflow.domain.models.status import StatusCategory


class WorkflowDefinitionRepositoryStub(WorkflowDefinitionRepositoryProtocol):
    """In-memory workflow definitions.

    Example:
        stub = WorkflowDefinitionRepositoryStub()
        stub.configure_project(
            "proj-1",
            statuses=[("todo", "To Do", "todo"), ("done", "Done", "done")],
            transitions=[("todo", "done")],
        )
        stub.clear()  # Reset for next test

    Attributes:
        call_count: Number of repository calls made.
    """

    def __init__(self, should_fail: bool = False) -> None:
        """Initialize the stub with empty storage.

        Args:
            should_fail: If True, every call raises RepositoryError.
        """
        self._project_schemes: dict[str, str] = {}
        self._mappings: dict[str, list[dict[str, Any]]] = {}
        self._workflows: dict[str, dict[str, Any]] = {}
        self._steps: dict[str, list[dict[str, Any]]] = {}
        self._transitions: dict[str, list[dict[str, Any]]] = {}
        self._statuses: dict[str, dict[str, Any]] = {}
        self._should_fail = should_fail
        self.call_count = 0

    def set_should_fail(self, should_fail: bool) -> None:
        """Configure whether every call raises RepositoryError."""
        self._should_fail = should_fail

    def _record_call(self) -> None:
        self.call_count += 1
        if self._should_fail:
            raise RepositoryError("Workflow definition store unavailable")

    # Seeding helpers

    def add_status(
        self,
        status_id: str,
        name: str,
        category: StatusCategory | str = StatusCategory.TODO,
        color: str = "",
    ) -> None:
        self._statuses[status_id] = {
            "id": status_id,
            "name": name,
            "category": str(category),
            "color": color,
        }

    def assign_scheme(self, project_id: str, scheme_id: str) -> None:
        self._project_schemes[project_id] = scheme_id

    def add_mapping(
        self, scheme_id: str, workflow_id: str, issue_type_id: str | None = None
    ) -> None:
        mappings = self._mappings.setdefault(scheme_id, [])
        mappings.append(
            {
                "id": f"{scheme_id}-map-{len(mappings)}",
                "scheme_id": scheme_id,
                "issue_type_id": issue_type_id,
                "workflow_id": workflow_id,
            }
        )

    def add_workflow(self, workflow_id: str, name: str = "Workflow") -> None:
        self._workflows[workflow_id] = {"id": workflow_id, "name": name}

    def add_step(self, workflow_id: str, step_id: str, status_id: str, position: int) -> None:
        self._steps.setdefault(workflow_id, []).append(
            {
                "id": step_id,
                "workflow_id": workflow_id,
                "status_id": status_id,
                "position": position,
            }
        )

    def add_transition(self, workflow_id: str, from_step_id: str, to_step_id: str) -> None:
        self._transitions.setdefault(workflow_id, []).append(
            {"from_step_id": from_step_id, "to_step_id": to_step_id}
        )

    def configure_project(
        self,
        project_id: str,
        statuses: Iterable[tuple[str, str, str]],
        transitions: Iterable[tuple[str, str]] = (),
        workflow_id: str | None = None,
    ) -> str:
        """Seed a scheme, default mapping, workflow, steps, and transitions.

        Args:
            project_id: Project to configure.
            statuses: (status_id, name, category) in step order.
            transitions: (from_status_id, to_status_id) pairs.
            workflow_id: Workflow id; derived from the project if omitted.

        Returns:
            The workflow id.
        """
        workflow_id = workflow_id or f"wf-{project_id}"
        scheme_id = f"scheme-{project_id}"
        self.assign_scheme(project_id, scheme_id)
        self.add_mapping(scheme_id, workflow_id)
        self.add_workflow(workflow_id)
        for position, (status_id, name, category) in enumerate(statuses):
            self.add_status(status_id, name, category)
            self.add_step(workflow_id, f"step-{status_id}", status_id, position)
        for from_status_id, to_status_id in transitions:
            self.add_transition(workflow_id, f"step-{from_status_id}", f"step-{to_status_id}")
        return workflow_id

    def clear(self) -> None:
        """Clear all definitions for test isolation."""
        self._project_schemes.clear()
        self._mappings.clear()
        self._workflows.clear()
        self._steps.clear()
        self._transitions.clear()
        self._statuses.clear()
        self.call_count = 0

    # WorkflowDefinitionRepositoryProtocol

    async def get_scheme_id_for_project(self, project_id: str) -> str | None:
        self._record_call()
        return self._project_schemes.get(project_id)

    async def list_scheme_mappings(self, scheme_id: str) -> list[Row]:
        self._record_call()
        return [dict(m) for m in self._mappings.get(scheme_id, [])]

    async def get_workflow(self, workflow_id: str) -> Row | None:
        self._record_call()
        workflow = self._workflows.get(workflow_id)
        return dict(workflow) if workflow is not None else None

    async def list_steps(self, workflow_id: str) -> list[Row]:
        self._record_call()
        steps = self._steps.get(workflow_id, [])
        return [dict(s) for s in sorted(steps, key=lambda s: s["position"])]

    async def list_transitions(self, workflow_id: str) -> list[Row]:
        self._record_call()
        return [dict(t) for t in self._transitions.get(workflow_id, [])]

    async def get_statuses(self, status_ids: Sequence[str]) -> list[Row]:
        self._record_call()
        return [dict(self._statuses[sid]) for sid in status_ids if sid in self._statuses]
