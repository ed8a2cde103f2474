"""Work item repository port.

BoardFlow reads work item statuses and commits validated status
changes; it never edits any other work item field.
"""

from __future__ import annotations

from typing import Protocol


class WorkItemRepositoryProtocol(Protocol):
    """Protocol for work item status access."""

    async def list_status_ids_in_use(self, project_id: str) -> list[str]:
        """Return distinct status ids held by the project's work items.

        Order is the store's; callers de-duplicate defensively.
        """
        ...

    async def get_status_id(self, issue_id: str) -> str | None:
        """Return a work item's current status id, or None if not found."""
        ...

    async def update_status(self, issue_id: str, status_id: str) -> None:
        """Commit a new status for a work item."""
        ...
