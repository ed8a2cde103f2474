"""Board column domain models.

A board's columns form an ordered partition: every column has a
position, and within one board the positions are exactly 0..n-1.
Each column maps one or more statuses; the first mapped status is the
column's default drop target.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import StrEnum

# Fraction of max_issues at which a column is flagged as nearly full
WIP_WARNING_RATIO: float = 0.8


class WipState(StrEnum):
    """Fill level of a column relative to its WIP limit."""

    NORMAL = "normal"
    WARNING = "warning"
    EXCEEDED = "exceeded"


@dataclass(frozen=True, eq=True)
class Column:
    """A board column bound to zero or more statuses.

    Attributes:
        id: Unique column identifier.
        name: Display name.
        position: Zero-based position on the board.
        status_ids: Mapped status ids, first mapped first.
        min_issues: Optional soft lower WIP limit.
        max_issues: Optional soft upper WIP limit.
    """

    id: str
    name: str
    position: int
    status_ids: tuple[str, ...] = ()
    min_issues: int | None = None
    max_issues: int | None = None

    def __post_init__(self) -> None:
        """Validate column invariants."""
        if self.position < 0:
            raise ValueError(
                f"Column {self.id} position must be non-negative, got {self.position}"
            )
        if len(set(self.status_ids)) != len(self.status_ids):
            raise ValueError(f"Column {self.id} maps the same status more than once")
        for label, value in (("min_issues", self.min_issues), ("max_issues", self.max_issues)):
            if value is not None and value < 0:
                raise ValueError(f"Column {self.id} {label} must be non-negative")
        if (
            self.min_issues is not None
            and self.max_issues is not None
            and self.min_issues > self.max_issues
        ):
            raise ValueError(
                f"Column {self.id} min_issues ({self.min_issues}) exceeds "
                f"max_issues ({self.max_issues})"
            )

    @property
    def status_set(self) -> frozenset[str]:
        """Return mapped status ids as a set."""
        return frozenset(self.status_ids)

    @property
    def is_empty(self) -> bool:
        """Return True if no status is mapped to this column."""
        return not self.status_ids

    def with_position(self, position: int) -> Column:
        """Return a copy of this column at a new position."""
        return replace(self, position=position)

    def wip_state(self, issue_count: int) -> WipState:
        """Classify issue_count against this column's max_issues."""
        if not self.max_issues:
            return WipState.NORMAL
        if issue_count >= self.max_issues:
            return WipState.EXCEEDED
        if issue_count >= self.max_issues * WIP_WARNING_RATIO:
            return WipState.WARNING
        return WipState.NORMAL


@dataclass(frozen=True)
class BoardColumnPartition:
    """All columns of one board, ordered by position.

    Attributes:
        board_id: The board these columns belong to.
        columns: Columns ordered by position (0..n-1, no gaps).
    """

    board_id: str
    columns: tuple[Column, ...] = ()

    def __post_init__(self) -> None:
        """Validate contiguous positions and unique column ids."""
        positions = [c.position for c in self.columns]
        if positions != list(range(len(self.columns))):
            raise ValueError(
                f"Board {self.board_id} column positions must be 0..n-1 in order, "
                f"got {positions}"
            )
        ids = [c.id for c in self.columns]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Board {self.board_id} has duplicate column ids")

    @classmethod
    def from_columns(cls, board_id: str, columns: Iterable[Column]) -> BoardColumnPartition:
        """Build a partition from columns in any order."""
        return cls(
            board_id=board_id,
            columns=tuple(sorted(columns, key=lambda c: c.position)),
        )

    @classmethod
    def renumbered(cls, board_id: str, columns: Iterable[Column]) -> BoardColumnPartition:
        """Build a partition, compacting positions to 0..n-1 in current order.

        Use after a column has been removed or moved.
        """
        ordered = sorted(columns, key=lambda c: c.position)
        return cls(
            board_id=board_id,
            columns=tuple(c.with_position(i) for i, c in enumerate(ordered)),
        )

    def __len__(self) -> int:
        return len(self.columns)

    def mapped_status_ids(self) -> frozenset[str]:
        """Return every status id mapped to any column."""
        return frozenset(sid for column in self.columns for sid in column.status_ids)

    def column(self, column_id: str) -> Column | None:
        """Return the column with the given id, if present."""
        for column in self.columns:
            if column.id == column_id:
                return column
        return None

    def column_for_status(self, status_id: str) -> Column | None:
        """Return the column a status is mapped to, if any."""
        for column in self.columns:
            if status_id in column.status_ids:
                return column
        return None
