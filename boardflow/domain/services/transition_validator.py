"""Work item transition validation against a workflow graph."""

from __future__ import annotations

from boardflow.domain.models.move_validation import MoveValidation
from boardflow.domain.models.status import Status
from boardflow.domain.models.workflow_graph import WorkflowGraph


def validate_move(
    from_status_id: str, to_status_id: str, graph: WorkflowGraph
) -> MoveValidation:
    """Decide whether a work item may move between two statuses.

    A move to the same status is a no-op and always valid. Otherwise
    the move is valid only if the graph has a direct transition from
    `from_status_id` to `to_status_id`; reachability through other
    statuses does not count.
    """
    if from_status_id == to_status_id:
        return MoveValidation.allowed()
    if graph.has_edge(from_status_id, to_status_id):
        return MoveValidation.allowed()
    return MoveValidation.not_allowed()


def available_targets(from_status_id: str, graph: WorkflowGraph) -> list[Status]:
    """Return the statuses a work item can move to in one transition."""
    return graph.targets_of(from_status_id)
