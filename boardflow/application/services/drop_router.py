"""Routing of board drops to target statuses.

A column can map several statuses. When a work item is dropped on
such a column the router picks which status the item moves to:

1. A column with exactly one status: that status.
2. A drop on a sub-status zone of the column: the zone's status.
3. Otherwise the column's configured default status if one is set,
   else its first mapped status.

The move is then validated and committed through the transition
validation service, which re-checks the workflow at the write.
"""

from __future__ import annotations

from collections.abc import Mapping

from boardflow.application.services.base import LoggingMixin
from boardflow.application.services.transition_validation_service import (
    TransitionValidationService,
)
from boardflow.domain.models.board_column import Column
from boardflow.domain.models.move_validation import MoveOutcome

EMPTY_COLUMN_MESSAGE = "This column has no statuses mapped"


def resolve_drop_status(
    column: Column,
    zone_status_id: str | None = None,
    default_status_id: str | None = None,
) -> str | None:
    """Return the status a drop on the column resolves to.

    Zone and default ids that the column does not map are ignored.
    Returns None for a column with no statuses.
    """
    if not column.status_ids:
        return None
    if len(column.status_ids) == 1:
        return column.status_ids[0]
    if zone_status_id is not None and zone_status_id in column.status_set:
        return zone_status_id
    if default_status_id is not None and default_status_id in column.status_set:
        return default_status_id
    return column.status_ids[0]


class DropRouter(LoggingMixin):
    """Turns a drop on a column into a validated status change.

    Attributes:
        default_status_ids: Per-column default target (column id ->
            status id) used for ambiguous drops on multi-status columns.
    """

    def __init__(
        self,
        validation_service: TransitionValidationService,
        default_status_ids: Mapping[str, str] | None = None,
    ) -> None:
        self._validation = validation_service
        self.default_status_ids: dict[str, str] = dict(default_status_ids or {})
        self._init_logger(component="board")

    def resolve_target(self, column: Column, zone_status_id: str | None = None) -> str | None:
        """Resolve the target status for a drop on the column."""
        if zone_status_id is not None and zone_status_id not in column.status_set:
            self._log_operation("resolve_target", column_id=column.id).warning(
                "drop_zone_not_on_column", zone_status_id=zone_status_id
            )
        return resolve_drop_status(
            column,
            zone_status_id=zone_status_id,
            default_status_id=self.default_status_ids.get(column.id),
        )

    async def drop(
        self,
        issue_id: str,
        project_id: str,
        column: Column,
        zone_status_id: str | None = None,
    ) -> MoveOutcome:
        """Move a dropped work item to the column's target status.

        Returns:
            MoveOutcome. On rejection the item's status is unchanged and
            the outcome carries the reason.
        """
        log = self._log_operation(
            "drop", issue_id=issue_id, project_id=project_id, column_id=column.id
        )
        target = self.resolve_target(column, zone_status_id)
        if target is None:
            log.info("drop_rejected", reason="empty_column")
            return MoveOutcome(success=False, error=EMPTY_COLUMN_MESSAGE)

        outcome = await self._validation.execute_transition(issue_id, project_id, target)
        if not outcome.success:
            log.info("drop_rejected", target_status_id=target, error=outcome.error)
        return outcome
