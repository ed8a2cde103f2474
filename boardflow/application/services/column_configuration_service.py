"""Manual column configuration.

User-driven edits to a board's columns: add, rename, delete, reorder,
map and unmap statuses, set WIP limits, and lay out a new board from a
template. Every edit keeps column positions contiguous (0..n-1) and
keeps each status on at most one column.

Edits run under the same per-board guard as regenerate and sync so a
manual edit cannot interleave with an automatic rebuild.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum

from boardflow.application.ports.board_column_repository import (
    BoardColumnRepositoryProtocol,
)
from boardflow.application.services.base import LoggingMixin
from boardflow.application.services.board_columns import create_column, load_columns
from boardflow.application.services.board_operation_guard import BoardOperationGuard
from boardflow.domain.errors.board import (
    ColumnNotEmptyError,
    ColumnNotFoundError,
    InvalidColumnConfigurationError,
)
from boardflow.domain.models.board_column import Column
from boardflow.domain.models.status import Status
from boardflow.domain.services.column_planner import BoardTemplate, plan_default_columns


class MoveDirection(StrEnum):
    """Direction to move a column on the board."""

    UP = "up"
    DOWN = "down"


def _find(columns: Sequence[Column], column_id: str) -> Column:
    for column in columns:
        if column.id == column_id:
            return column
    raise ColumnNotFoundError(column_id)


def _validate_limits(min_issues: int | None, max_issues: int | None) -> None:
    for label, value in (("min_issues", min_issues), ("max_issues", max_issues)):
        if value is not None and value < 0:
            raise InvalidColumnConfigurationError(f"{label} must be non-negative, got {value}")
    if min_issues is not None and max_issues is not None and min_issues > max_issues:
        raise InvalidColumnConfigurationError(
            f"min_issues ({min_issues}) must not exceed max_issues ({max_issues})"
        )


class ColumnConfigurationService(LoggingMixin):
    """Applies manual column edits to boards."""

    def __init__(
        self,
        column_repository: BoardColumnRepositoryProtocol,
        guard: BoardOperationGuard | None = None,
    ) -> None:
        self._columns = column_repository
        self._guard = guard or BoardOperationGuard()
        self._init_logger(component="board")

    async def list_columns(self, board_id: str) -> list[Column]:
        """Return the board's columns ordered by position."""
        return await load_columns(self._columns, board_id)

    async def add_column(self, board_id: str, name: str) -> Column:
        """Append an empty column named `name` (surrounding whitespace stripped).

        Raises:
            InvalidColumnConfigurationError: If the name is blank.
        """
        clean = name.strip()
        if not clean:
            raise InvalidColumnConfigurationError("Column name must not be blank")

        async with self._guard.hold(board_id):
            columns = await load_columns(self._columns, board_id)
            column_id = await self._columns.create_column(board_id, clean, len(columns))

        self._log_operation("add_column", board_id=board_id).info(
            "column_added", column_id=column_id, position=len(columns)
        )
        return Column(id=column_id, name=clean, position=len(columns))

    async def rename_column(self, board_id: str, column_id: str, name: str) -> None:
        """Rename a column.

        Raises:
            ColumnNotFoundError: If the column is not on the board.
            InvalidColumnConfigurationError: If the name is blank.
        """
        clean = name.strip()
        if not clean:
            raise InvalidColumnConfigurationError("Column name must not be blank")

        async with self._guard.hold(board_id):
            _find(await load_columns(self._columns, board_id), column_id)
            await self._columns.update_column(column_id, {"name": clean})

        self._log_operation("rename_column", board_id=board_id).info(
            "column_renamed", column_id=column_id
        )

    async def delete_column(self, board_id: str, column_id: str) -> None:
        """Delete an empty column and close the gap it leaves.

        Raises:
            ColumnNotFoundError: If the column is not on the board.
            ColumnNotEmptyError: If statuses are still mapped to it.
        """
        async with self._guard.hold(board_id):
            columns = await load_columns(self._columns, board_id)
            column = _find(columns, column_id)
            if column.status_ids:
                raise ColumnNotEmptyError(column_id, len(column.status_ids))

            remaining = [c for c in columns if c.id != column_id]
            async with self._columns.transaction():
                await self._columns.delete_column(column_id)
                await self._renumber(remaining)

        self._log_operation("delete_column", board_id=board_id).info(
            "column_deleted", column_id=column_id
        )

    async def move_column(
        self, board_id: str, column_id: str, direction: MoveDirection | str
    ) -> bool:
        """Swap a column with its neighbour.

        Returns:
            False if the column is already first (up) or last (down).

        Raises:
            ColumnNotFoundError: If the column is not on the board.
            InvalidColumnConfigurationError: If direction is not up/down.
        """
        try:
            step = -1 if MoveDirection(direction) is MoveDirection.UP else 1
        except ValueError:
            raise InvalidColumnConfigurationError(
                f"direction must be 'up' or 'down', got {direction!r}"
            ) from None

        async with self._guard.hold(board_id):
            columns = await load_columns(self._columns, board_id)
            index = columns.index(_find(columns, column_id))
            target = index + step
            if not 0 <= target < len(columns):
                return False

            columns[index], columns[target] = columns[target], columns[index]
            async with self._columns.transaction():
                await self._renumber(columns)

        self._log_operation("move_column", board_id=board_id).info(
            "column_moved", column_id=column_id, position=target
        )
        return True

    async def add_status_to_column(self, board_id: str, column_id: str, status_id: str) -> None:
        """Map a status to a column.

        Mapping a status that is already on this column is a no-op.

        Raises:
            ColumnNotFoundError: If the column is not on the board.
            InvalidColumnConfigurationError: If the status is on another column.
        """
        async with self._guard.hold(board_id):
            columns = await load_columns(self._columns, board_id)
            column = _find(columns, column_id)
            if status_id in column.status_set:
                return
            holder = next((c for c in columns if status_id in c.status_set), None)
            if holder is not None:
                raise InvalidColumnConfigurationError(
                    f"Status {status_id} is already mapped to column {holder.name!r}"
                )
            await self._columns.add_column_status(column_id, status_id)

        self._log_operation("add_status_to_column", board_id=board_id).info(
            "column_status_added", column_id=column_id, status_id=status_id
        )

    async def remove_status_from_column(
        self, board_id: str, column_id: str, status_id: str
    ) -> None:
        """Unmap a status from a column. Unmapped statuses are ignored.

        Raises:
            ColumnNotFoundError: If the column is not on the board.
        """
        async with self._guard.hold(board_id):
            column = _find(await load_columns(self._columns, board_id), column_id)
            if status_id not in column.status_set:
                return
            await self._columns.remove_column_status(column_id, status_id)

        self._log_operation("remove_status_from_column", board_id=board_id).info(
            "column_status_removed", column_id=column_id, status_id=status_id
        )

    async def set_wip_limits(
        self,
        board_id: str,
        column_id: str,
        min_issues: int | None,
        max_issues: int | None,
    ) -> None:
        """Set or clear a column's WIP limits (None clears a limit).

        Raises:
            ColumnNotFoundError: If the column is not on the board.
            InvalidColumnConfigurationError: If a limit is negative or
                min exceeds max.
        """
        _validate_limits(min_issues, max_issues)
        async with self._guard.hold(board_id):
            _find(await load_columns(self._columns, board_id), column_id)
            await self._columns.update_column(
                column_id, {"min_issues": min_issues, "max_issues": max_issues}
            )

        self._log_operation("set_wip_limits", board_id=board_id).info(
            "column_wip_limits_set",
            column_id=column_id,
            min_issues=min_issues,
            max_issues=max_issues,
        )

    async def create_default_columns(
        self,
        board_id: str,
        statuses: Sequence[Status],
        template: BoardTemplate | str = BoardTemplate.SCRUM,
    ) -> list[str]:
        """Lay out a new, empty board from a template.

        Returns:
            Ids of the created columns in position order.

        Raises:
            InvalidColumnConfigurationError: If the board already has
                columns or the template is unknown.
        """
        try:
            board_template = BoardTemplate(template)
        except ValueError:
            raise InvalidColumnConfigurationError(f"Unknown board template {template!r}") from None

        async with self._guard.hold(board_id):
            if await load_columns(self._columns, board_id):
                raise InvalidColumnConfigurationError(
                    f"Board {board_id} already has columns"
                )
            async with self._columns.transaction():
                column_ids = [
                    await create_column(self._columns, board_id, spec)
                    for spec in plan_default_columns(statuses, board_template)
                ]

        self._log_operation("create_default_columns", board_id=board_id).info(
            "default_columns_created",
            template=board_template.value,
            column_count=len(column_ids),
        )
        return column_ids

    async def _renumber(self, ordered: Sequence[Column]) -> None:
        for position, column in enumerate(ordered):
            if column.position != position:
                await self._columns.update_column(column.id, {"position": position})
