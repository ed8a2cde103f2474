"""Column planning for regeneration, sync, and board templates.

Planning is separated from applying. Each function here computes the
desired column layout from a workflow graph and the board's current
columns; the application layer then applies the plan through the
repository. Because plans are computed without touching the store, a
failure while planning can never leave a board half-rebuilt.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import StrEnum

from boardflow.domain.models.board_column import Column
from boardflow.domain.models.board_sync import (
    ColumnSpec,
    PartitionPlan,
    SyncPlan,
    WipLimits,
)
from boardflow.domain.models.status import Status, StatusCategory
from boardflow.domain.models.workflow_graph import WorkflowGraph


class BoardTemplate(StrEnum):
    """Starting column layouts for a new board."""

    SCRUM = "scrum"
    KANBAN = "kanban"
    BASIC = "basic"


# (name, category, max_issues) per template column
_TEMPLATE_COLUMNS: dict[BoardTemplate, tuple[tuple[str, StatusCategory, int | None], ...]] = {
    BoardTemplate.SCRUM: (
        ("To Do", StatusCategory.TODO, None),
        ("In Progress", StatusCategory.IN_PROGRESS, 5),
        ("Done", StatusCategory.DONE, None),
    ),
    BoardTemplate.KANBAN: (
        ("Backlog", StatusCategory.TODO, None),
        ("Selected for Development", StatusCategory.TODO, 10),
        ("In Progress", StatusCategory.IN_PROGRESS, 5),
        ("In Review", StatusCategory.IN_PROGRESS, 3),
        ("Done", StatusCategory.DONE, None),
    ),
    BoardTemplate.BASIC: (
        ("To Do", StatusCategory.TODO, None),
        ("In Progress", StatusCategory.IN_PROGRESS, None),
        ("Done", StatusCategory.DONE, None),
    ),
}


def _name_key(name: str) -> str:
    return name.casefold()


def combined_statuses(
    graph: WorkflowGraph, extra_statuses: Iterable[Status]
) -> list[Status]:
    """Return graph statuses followed by extra statuses not in the graph.

    Extra statuses are the ones work items currently sit on. Appending
    them keeps those items visible after a regeneration even when the
    workflow no longer declares their status. Both parts are
    de-duplicated and keep their own order.
    """
    combined: dict[str, Status] = {s.id: s for s in graph.statuses}
    for status in extra_statuses:
        combined.setdefault(status.id, status)
    return list(combined.values())


def wip_limits_by_name(columns: Iterable[Column]) -> dict[str, WipLimits]:
    """Map case-folded column names to their WIP limits.

    When two columns share a name, the one at the lower position wins.
    Columns with neither limit set are still recorded, so a later
    lookup distinguishes "no limits" from "no such column".
    """
    limits: dict[str, WipLimits] = {}
    for column in sorted(columns, key=lambda c: c.position):
        limits.setdefault(
            _name_key(column.name),
            WipLimits(min_issues=column.min_issues, max_issues=column.max_issues),
        )
    return limits


def plan_regeneration(
    board_id: str,
    graph: WorkflowGraph,
    existing_columns: Sequence[Column],
    extra_statuses: Iterable[Status] = (),
    preserve_wip_limits: bool = True,
) -> PartitionPlan:
    """Plan a full rebuild of a board's columns from the workflow.

    Every existing column is removed. One column is created per status
    in combined_statuses(), named after the status, mapping exactly that
    status, at consecutive positions from 0. WIP limits are carried over
    from an existing column with the same name (case-insensitive).

    Limits follow the column name, not its identity: if a status is
    renamed between runs, its column's limits are lost.

    Args:
        board_id: Board to rebuild.
        graph: The project's workflow graph.
        existing_columns: The board's current columns.
        extra_statuses: Statuses in use by work items.
        preserve_wip_limits: Carry limits over by name when True.

    Returns:
        PartitionPlan replacing all existing columns.
    """
    limits = wip_limits_by_name(existing_columns) if preserve_wip_limits else {}

    create: list[ColumnSpec] = []
    for position, status in enumerate(combined_statuses(graph, extra_statuses)):
        carried = limits.get(_name_key(status.name), WipLimits())
        create.append(
            ColumnSpec(
                name=status.name,
                position=position,
                status_ids=(status.id,),
                min_issues=carried.min_issues,
                max_issues=carried.max_issues,
            )
        )

    return PartitionPlan(
        board_id=board_id,
        remove_column_ids=tuple(c.id for c in existing_columns),
        create=tuple(create),
    )


def plan_sync(
    board_id: str,
    graph: WorkflowGraph,
    existing_columns: Sequence[Column],
    remove_orphans: bool = False,
) -> SyncPlan:
    """Plan an incremental reconciliation of a board with the workflow.

    Each graph status not mapped to any column gets a new single-status
    column appended after the existing ones. With remove_orphans, a
    column is removed when it maps at least one status and none of its
    statuses are in the graph any more; empty columns and columns with
    any surviving status are kept. Remaining columns are renumbered so
    positions stay contiguous.
    """
    ordered = sorted(existing_columns, key=lambda c: c.position)
    graph_ids = graph.status_ids

    removed: list[str] = []
    if remove_orphans:
        removed = [
            c.id
            for c in ordered
            if c.status_ids and not (c.status_set & graph_ids)
        ]

    survivors = [c for c in ordered if c.id not in removed]
    reposition = tuple(
        (c.id, index) for index, c in enumerate(survivors) if c.position != index
    )

    mapped = {sid for c in ordered for sid in c.status_ids}
    append: list[ColumnSpec] = []
    next_position = len(survivors)
    for status in graph.statuses:
        if status.id in mapped:
            continue
        append.append(
            ColumnSpec(name=status.name, position=next_position, status_ids=(status.id,))
        )
        next_position += 1

    return SyncPlan(
        board_id=board_id,
        append=tuple(append),
        remove_column_ids=tuple(removed),
        reposition=reposition,
    )


def plan_default_columns(
    statuses: Sequence[Status], template: BoardTemplate = BoardTemplate.SCRUM
) -> tuple[ColumnSpec, ...]:
    """Plan the starting columns of a new board.

    Columns are filled with the statuses of their category. Where a
    template has two columns for one category (kanban's Backlog and
    Selected for Development, In Progress and In Review) the statuses go
    to the first of them and the second starts empty, so that no status
    is mapped to two columns.
    """
    assigned: set[StatusCategory] = set()
    specs: list[ColumnSpec] = []
    for position, (name, category, max_issues) in enumerate(_TEMPLATE_COLUMNS[template]):
        status_ids: tuple[str, ...] = ()
        if category not in assigned:
            status_ids = tuple(s.id for s in statuses if s.category == category)
            assigned.add(category)
        specs.append(
            ColumnSpec(
                name=name,
                position=position,
                status_ids=status_ids,
                max_issues=max_issues,
            )
        )
    return tuple(specs)
