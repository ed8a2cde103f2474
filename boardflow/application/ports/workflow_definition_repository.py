"""Workflow definition repository port.

Read-only access to the workflow subsystem: schemes, scheme mappings,
workflows, workflow steps, step transitions, and statuses.

Row shapes (keys; extra keys are ignored):
- scheme mapping: id, scheme_id, issue_type_id (nullable), workflow_id
- workflow: id, name
- workflow step: id, workflow_id, status_id, position
- workflow transition: from_step_id, to_step_id
- status: id, name, color, category
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

Row = Mapping[str, Any]


class WorkflowDefinitionRepositoryProtocol(Protocol):
    """Protocol for workflow definition lookups.

    All methods raise RepositoryError when the backing store fails.
    "Not found" is reported as None or an empty list, never as an
    error, so callers can tell a missing configuration from an outage.
    """

    async def get_scheme_id_for_project(self, project_id: str) -> str | None:
        """Return the workflow scheme assigned to a project, if any."""
        ...

    async def list_scheme_mappings(self, scheme_id: str) -> list[Row]:
        """Return all issue-type-to-workflow mappings of a scheme."""
        ...

    async def get_workflow(self, workflow_id: str) -> Row | None:
        """Return a workflow row, or None if it does not exist."""
        ...

    async def list_steps(self, workflow_id: str) -> list[Row]:
        """Return the workflow's steps ordered by layout position."""
        ...

    async def list_transitions(self, workflow_id: str) -> list[Row]:
        """Return the workflow's step-to-step transitions."""
        ...

    async def get_statuses(self, status_ids: Sequence[str]) -> list[Row]:
        """Return status rows for the given ids (missing ids are omitted)."""
        ...
