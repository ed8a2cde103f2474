"""Work item repository stub for testing.

WARNING: This stub is NOT for production use.
"""

from __future__ import annotations

from boardflow.application.ports.work_item_repository import (
    WorkItemRepositoryProtocol,
)
from boardflow.domain.errors.repository import RepositoryError


class WorkItemRepositoryStub(WorkItemRepositoryProtocol):
    """In-memory work items holding a project and a status.

    Attributes:
        status_updates: (issue_id, status_id) pairs committed, in order.
    """

    def __init__(self, should_fail: bool = False) -> None:
        self._items: dict[str, dict[str, str]] = {}
        self._should_fail = should_fail
        self.status_updates: list[tuple[str, str]] = []

    def add_item(self, issue_id: str, project_id: str, status_id: str) -> None:
        self._items[issue_id] = {"project_id": project_id, "status_id": status_id}

    def set_should_fail(self, should_fail: bool) -> None:
        """Configure whether every call raises RepositoryError."""
        self._should_fail = should_fail

    def clear(self) -> None:
        """Clear all work items for test isolation."""
        self._items.clear()
        self.status_updates.clear()
        self._should_fail = False

    def _check(self) -> None:
        if self._should_fail:
            raise RepositoryError("Work item store unavailable")

    async def list_status_ids_in_use(self, project_id: str) -> list[str]:
        self._check()
        ids = [i["status_id"] for i in self._items.values() if i["project_id"] == project_id]
        return list(dict.fromkeys(ids))

    async def get_status_id(self, issue_id: str) -> str | None:
        self._check()
        item = self._items.get(issue_id)
        return item["status_id"] if item is not None else None

    async def update_status(self, issue_id: str, status_id: str) -> None:
        self._check()
        if issue_id not in self._items:
            raise RepositoryError(f"Work item {issue_id} not found")
        self._items[issue_id]["status_id"] = status_id
        self.status_updates.append((issue_id, status_id))
