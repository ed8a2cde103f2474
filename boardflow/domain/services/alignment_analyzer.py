"""Column alignment analysis.

Checks a board's column order against the workflow graph. A column is
aligned when at least one of its statuses can be entered directly from
some earlier column and can leave directly to some later column.

The check is single-hop: a path through an intermediate status that
is not on an earlier (or later) column does not count. A board whose
middle status is unmapped is therefore flagged even though work items
could eventually get through.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from boardflow.domain.models.alignment import (
    NO_INCOMING_TRANSITIONS_MESSAGE,
    NO_OUTGOING_TRANSITIONS_MESSAGE,
    AlignmentWarning,
    StatusTransitionInfo,
)
from boardflow.domain.models.board_column import Column
from boardflow.domain.models.status import Status
from boardflow.domain.models.workflow_graph import WorkflowGraph

UNKNOWN_STATUS_NAME = "Unknown"


def _ordered(columns: Iterable[Column]) -> list[Column]:
    return sorted(columns, key=lambda c: c.position)


def analyze(columns: Iterable[Column], graph: WorkflowGraph) -> dict[str, list[str]]:
    """Report per-column alignment warnings.

    Args:
        columns: The board's columns (ordered by position).
        graph: The project's workflow graph.

    Returns:
        Warning messages keyed by column id. Columns without warnings
        are absent. Empty when the graph has no transitions.
    """
    return {w.column_id: list(w.messages) for w in alignment_warnings(columns, graph)}


def alignment_warnings(
    columns: Iterable[Column], graph: WorkflowGraph
) -> list[AlignmentWarning]:
    """Compute alignment warnings as AlignmentWarning values, in column order.

    Columns with no mapped statuses never produce a warning.
    """
    if not graph.has_transitions:
        return []

    ordered = _ordered(columns)
    count = len(ordered)
    warnings: list[AlignmentWarning] = []

    for index, column in enumerate(ordered):
        statuses = column.status_set
        if not statuses:
            continue

        messages: list[str] = []

        if index > 0:
            previous = _union(ordered[:index])
            has_incoming = any(
                t.to_status_id in statuses and t.from_status_id in previous
                for t in graph.transitions
            )
            if not has_incoming:
                messages.append(NO_INCOMING_TRANSITIONS_MESSAGE)

        if index < count - 1:
            following = _union(ordered[index + 1 :])
            has_outgoing = any(
                t.from_status_id in statuses and t.to_status_id in following
                for t in graph.transitions
            )
            if not has_outgoing:
                messages.append(NO_OUTGOING_TRANSITIONS_MESSAGE)

        if messages:
            warnings.append(AlignmentWarning(column_id=column.id, messages=tuple(messages)))

    return warnings


def unmapped_statuses(
    columns: Iterable[Column], graph: WorkflowGraph
) -> tuple[Status, ...]:
    """Return statuses that take part in a transition but sit on no column.

    Args:
        columns: The board's columns.
        graph: The project's workflow graph.

    Returns:
        Unmapped statuses in graph order.
    """
    mapped = _union(columns)
    in_transitions = graph.transition_status_ids()
    return tuple(
        s for s in graph.statuses if s.id in in_transitions and s.id not in mapped
    )


def status_transition_info(
    statuses: Sequence[Status], graph: WorkflowGraph
) -> dict[str, StatusTransitionInfo]:
    """Describe the direct neighbours of each status.

    Names are resolved against `statuses` first and the graph second;
    ids found in neither render as "Unknown".

    Returns:
        StatusTransitionInfo keyed by status id, empty when the graph
        has no transitions.
    """
    if not graph.has_transitions:
        return {}

    names = {s.id: s.name for s in graph.statuses}
    names.update({s.id: s.name for s in statuses})

    # Sort for a stable presentation order; the transition set is unordered
    edges = sorted(graph.transitions)
    info: dict[str, StatusTransitionInfo] = {}
    for status in statuses:
        can_reach = tuple(
            names.get(t.to_status_id, UNKNOWN_STATUS_NAME)
            for t in edges
            if t.from_status_id == status.id
        )
        reachable_from = tuple(
            names.get(t.from_status_id, UNKNOWN_STATUS_NAME)
            for t in edges
            if t.to_status_id == status.id
        )
        info[status.id] = StatusTransitionInfo(
            status_id=status.id,
            can_reach=can_reach,
            reachable_from=reachable_from,
        )
    return info


def _union(columns: Iterable[Column]) -> set[str]:
    return {sid for column in columns for sid in column.status_ids}
