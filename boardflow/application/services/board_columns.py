"""Shared column reads and writes for board services."""

from __future__ import annotations

from boardflow.application.dtos.rows import ColumnRow, parse_rows
from boardflow.application.ports.board_column_repository import (
    BoardColumnRepositoryProtocol,
)
from boardflow.domain.models.board_column import Column
from boardflow.domain.models.board_sync import ColumnSpec


async def load_columns(
    repository: BoardColumnRepositoryProtocol, board_id: str
) -> list[Column]:
    """Load and validate a board's columns, ordered by position.

    Positions are returned as stored; they are not required to be
    contiguous here so that a board with legacy gaps can still be
    analysed and repaired.
    """
    rows = parse_rows(ColumnRow, await repository.list_columns(board_id))
    return sorted((row.to_domain() for row in rows), key=lambda c: c.position)


async def create_column(
    repository: BoardColumnRepositoryProtocol,
    board_id: str,
    spec: ColumnSpec,
    position: int | None = None,
) -> str:
    """Create a column from a spec and map its statuses.

    Args:
        repository: Column repository.
        board_id: Board to create the column on.
        spec: Desired column.
        position: Overrides spec.position when given.

    Returns:
        The new column id.
    """
    column_id = await repository.create_column(
        board_id,
        spec.name,
        spec.position if position is None else position,
        min_issues=spec.min_issues,
        max_issues=spec.max_issues,
    )
    for status_id in spec.status_ids:
        await repository.add_column_status(column_id, status_id)
    return column_id
