"""Board column repository stub for testing.

In-memory implementation of BoardColumnRepositoryProtocol with
snapshot-based transactions, an optional (board, status) uniqueness
constraint, and per-method failure injection.

WARNING: This stub is NOT for production use.
"""

from __future__ import annotations

import copy
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from typing import Any
from uuid import uuid4

from boardflow.application.ports.board_column_repository import (
    BoardColumnRepositoryProtocol,
    Row,
)
from boardflow.domain.errors.board import ColumnNotFoundError
from boardflow.domain.errors.repository import (
    DuplicateColumnMappingError,
    RepositoryError,
)

_UPDATABLE_FIELDS = frozenset({"name", "position", "min_issues", "max_issues"})


class BoardColumnRepositoryStub(BoardColumnRepositoryProtocol):
    """In-memory board columns.

    Attributes:
        atomic: Whether transaction() rolls back on failure. Set False
            to simulate a store without transactions.
        enforce_unique_mapping: Reject a status mapped twice on one board.
        transactions_started: Number of transaction() blocks entered.
    """

    def __init__(self, atomic: bool = True, enforce_unique_mapping: bool = True) -> None:
        """Initialize the stub with empty storage.

        Args:
            atomic: Roll back writes when a transaction block raises.
            enforce_unique_mapping: Raise DuplicateColumnMappingError when a
                status is mapped to a second column of the same board.
        """
        self.atomic = atomic
        self.enforce_unique_mapping = enforce_unique_mapping
        self.transactions_started = 0
        self._columns: dict[str, dict[str, Any]] = {}
        self._mappings: dict[str, list[str]] = {}
        self._board_projects: dict[str, str] = {}
        self._failures: dict[str, int] = {}
        self._should_fail = False

    # Test helpers

    def add_board(self, board_id: str, project_id: str) -> None:
        """Register a board under a project."""
        self._board_projects[board_id] = project_id

    def seed_column(
        self,
        board_id: str,
        name: str,
        position: int,
        status_ids: tuple[str, ...] | list[str] = (),
        min_issues: int | None = None,
        max_issues: int | None = None,
        column_id: str | None = None,
    ) -> str:
        """Insert a column directly, bypassing failure injection."""
        column_id = column_id or str(uuid4())
        self._columns[column_id] = {
            "id": column_id,
            "board_id": board_id,
            "name": name,
            "position": position,
            "min_issues": min_issues,
            "max_issues": max_issues,
        }
        self._mappings[column_id] = list(status_ids)
        return column_id

    def set_should_fail(self, should_fail: bool) -> None:
        """Configure whether every call raises RepositoryError."""
        self._should_fail = should_fail

    def fail_on(self, method: str, after: int = 0) -> None:
        """Make `method` raise RepositoryError after `after` successful calls."""
        self._failures[method] = after

    def columns_for(self, board_id: str) -> list[Row]:
        """Return the board's stored columns synchronously (for assertions)."""
        return self._rows(board_id)

    def clear(self) -> None:
        """Clear all columns, boards, and failure settings for test isolation."""
        self._columns.clear()
        self._mappings.clear()
        self._board_projects.clear()
        self._failures.clear()
        self._should_fail = False
        self.transactions_started = 0

    def _check(self, method: str) -> None:
        if self._should_fail:
            raise RepositoryError("Board column store unavailable")
        remaining = self._failures.get(method)
        if remaining is None:
            return
        if remaining == 0:
            raise RepositoryError(f"Injected failure in {method}")
        self._failures[method] = remaining - 1

    def _rows(self, board_id: str) -> list[Row]:
        columns = [c for c in self._columns.values() if c["board_id"] == board_id]
        return [
            {**c, "status_ids": list(self._mappings.get(c["id"], []))}
            for c in sorted(columns, key=lambda c: c["position"])
        ]

    def _get(self, column_id: str) -> dict[str, Any]:
        column = self._columns.get(column_id)
        if column is None:
            raise ColumnNotFoundError(column_id)
        return column

    # BoardColumnRepositoryProtocol

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        self._check("transaction")
        self.transactions_started += 1
        snapshot = (copy.deepcopy(self._columns), copy.deepcopy(self._mappings))
        try:
            yield
        except BaseException:
            if self.atomic:
                self._columns, self._mappings = snapshot
            raise

    async def list_columns(self, board_id: str) -> list[Row]:
        self._check("list_columns")
        return self._rows(board_id)

    async def list_board_ids(self, project_id: str) -> list[str]:
        self._check("list_board_ids")
        return [b for b, p in self._board_projects.items() if p == project_id]

    async def create_column(
        self,
        board_id: str,
        name: str,
        position: int,
        min_issues: int | None = None,
        max_issues: int | None = None,
    ) -> str:
        self._check("create_column")
        column_id = str(uuid4())
        self._columns[column_id] = {
            "id": column_id,
            "board_id": board_id,
            "name": name,
            "position": position,
            "min_issues": min_issues,
            "max_issues": max_issues,
        }
        self._mappings[column_id] = []
        return column_id

    async def update_column(self, column_id: str, changes: Mapping[str, Any]) -> None:
        self._check("update_column")
        column = self._get(column_id)
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update column fields: {sorted(unknown)}")
        column.update(changes)

    async def delete_column(self, column_id: str) -> None:
        self._check("delete_column")
        self._columns.pop(column_id, None)
        self._mappings.pop(column_id, None)

    async def delete_board_columns(self, board_id: str) -> int:
        self._check("delete_board_columns")
        doomed = [cid for cid, c in self._columns.items() if c["board_id"] == board_id]
        for column_id in doomed:
            del self._columns[column_id]
            self._mappings.pop(column_id, None)
        return len(doomed)

    async def add_column_status(self, column_id: str, status_id: str) -> None:
        self._check("add_column_status")
        board_id = self._get(column_id)["board_id"]
        if self.enforce_unique_mapping:
            for other_id, status_ids in self._mappings.items():
                if (
                    status_id in status_ids
                    and self._columns[other_id]["board_id"] == board_id
                ):
                    raise DuplicateColumnMappingError(board_id, status_id)
        mapped = self._mappings.setdefault(column_id, [])
        if status_id not in mapped:
            mapped.append(status_id)

    async def remove_column_status(self, column_id: str, status_id: str) -> None:
        self._check("remove_column_status")
        mapped = self._mappings.get(column_id, [])
        if status_id in mapped:
            mapped.remove(status_id)
