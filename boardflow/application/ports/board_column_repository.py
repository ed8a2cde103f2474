"""Board column repository port.

Stores a board's columns and the statuses mapped to each column.

Column rows carry: id, board_id, name, position, min_issues,
max_issues, status_ids (mapped status ids, first mapped first).
"""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol

Row = Mapping[str, Any]


class BoardColumnRepositoryProtocol(Protocol):
    """Protocol for board column storage.

    Only the sync service and manual column configuration mutate
    columns. All methods raise RepositoryError when the store fails.

    Attributes:
        atomic: True if transaction() rolls back every write in the
            block when it raises. When False, a failure inside the
            block can leave earlier writes applied.
    """

    atomic: bool

    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Return a context manager grouping writes into one transaction.

        Writes issued inside the block are committed together when it
        exits normally and rolled back when it raises. Stores without
        transactions must document that the block is not atomic.
        """
        ...

    async def list_columns(self, board_id: str) -> list[Row]:
        """Return the board's columns ordered by position."""
        ...

    async def list_board_ids(self, project_id: str) -> list[str]:
        """Return the ids of all boards of a project."""
        ...

    async def create_column(
        self,
        board_id: str,
        name: str,
        position: int,
        min_issues: int | None = None,
        max_issues: int | None = None,
    ) -> str:
        """Create a column and return its id."""
        ...

    async def update_column(self, column_id: str, changes: Mapping[str, Any]) -> None:
        """Update name, position, min_issues and/or max_issues of a column.

        Raises:
            ColumnNotFoundError: If the column does not exist.
        """
        ...

    async def delete_column(self, column_id: str) -> None:
        """Delete a column and its status mappings."""
        ...

    async def delete_board_columns(self, board_id: str) -> int:
        """Delete every column of a board; return how many were deleted."""
        ...

    async def add_column_status(self, column_id: str, status_id: str) -> None:
        """Map a status to a column.

        Raises:
            DuplicateColumnMappingError: If the store enforces one column
                per (board, status) and the status is already mapped.
        """
        ...

    async def remove_column_status(self, column_id: str, status_id: str) -> None:
        """Unmap a status from a column."""
        ...
