"""Alignment analysis result models."""

from __future__ import annotations

from dataclasses import dataclass

from boardflow.domain.models.status import Status

NO_INCOMING_TRANSITIONS_MESSAGE = (
    "No workflow transitions lead to this column from previous columns."
)
NO_OUTGOING_TRANSITIONS_MESSAGE = (
    "No workflow transitions lead from this column to next columns."
)


@dataclass(frozen=True)
class AlignmentWarning:
    """Structural warnings for one column. Recomputed on demand, never stored.

    Attributes:
        column_id: The column the warnings apply to.
        messages: Warning messages in check order.
    """

    column_id: str
    messages: tuple[str, ...]


@dataclass(frozen=True)
class StatusTransitionInfo:
    """Direct neighbours of one status in the workflow graph.

    Attributes:
        status_id: The status described.
        can_reach: Names of statuses reachable in one transition.
        reachable_from: Names of statuses with a transition into this one.
    """

    status_id: str
    can_reach: tuple[str, ...]
    reachable_from: tuple[str, ...]


@dataclass(frozen=True)
class AlignmentReport:
    """Alignment of a board against its project's workflow.

    Attributes:
        board_id: The analysed board.
        workflow_configured: False if the project has no resolvable workflow.
        warnings: Warnings keyed by column id; columns without warnings are absent.
        unmapped_statuses: Statuses in a transition but on no column, graph order.
    """

    board_id: str
    workflow_configured: bool
    warnings: dict[str, list[str]]
    unmapped_statuses: tuple[Status, ...]

    @property
    def has_warnings(self) -> bool:
        """Return True if any column has a warning."""
        return bool(self.warnings)
