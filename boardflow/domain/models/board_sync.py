"""Column regeneration and sync models.

Regeneration is planned before it is applied: the planner turns a
workflow graph and the current partition into a PartitionPlan, and
the sync service applies the plan inside one repository transaction.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WipLimits:
    """WIP limits carried over to a regenerated column."""

    min_issues: int | None = None
    max_issues: int | None = None


@dataclass(frozen=True)
class ColumnSpec:
    """Desired column in a plan (not yet persisted).

    Attributes:
        name: Column name.
        position: Target position on the board.
        status_ids: Statuses to map, first mapped first.
        min_issues: Lower WIP limit to set.
        max_issues: Upper WIP limit to set.
    """

    name: str
    position: int
    status_ids: tuple[str, ...]
    min_issues: int | None = None
    max_issues: int | None = None

    def __post_init__(self) -> None:
        if self.position < 0:
            raise ValueError(f"Column spec position must be non-negative, got {self.position}")


@dataclass(frozen=True)
class PartitionPlan:
    """Full replacement of a board's columns.

    Attributes:
        board_id: Board the plan applies to.
        remove_column_ids: Existing columns to delete.
        create: Columns to create, ordered by position 0..n-1.
    """

    board_id: str
    remove_column_ids: tuple[str, ...]
    create: tuple[ColumnSpec, ...]

    def __post_init__(self) -> None:
        positions = [spec.position for spec in self.create]
        if positions != list(range(len(self.create))):
            raise ValueError(f"Plan positions must be 0..n-1, got {positions}")


@dataclass(frozen=True)
class SyncPlan:
    """Incremental change to a board's columns.

    Attributes:
        board_id: Board the plan applies to.
        append: Single-status columns to add after the existing ones.
        remove_column_ids: Orphaned columns to delete.
        reposition: (column_id, position) moves that close gaps left by removals.
    """

    board_id: str
    append: tuple[ColumnSpec, ...]
    remove_column_ids: tuple[str, ...]
    reposition: tuple[tuple[str, int], ...] = ()

    @property
    def is_noop(self) -> bool:
        """Return True if the plan changes nothing."""
        return not (self.append or self.remove_column_ids or self.reposition)


@dataclass(frozen=True)
class RegenerationResult:
    """Outcome of a full column regeneration."""

    columns_created: int
    columns_removed: int


@dataclass(frozen=True)
class SyncResult:
    """Outcome of an incremental column sync."""

    added: int
    removed: int

    @classmethod
    def nothing(cls) -> SyncResult:
        return cls(added=0, removed=0)
