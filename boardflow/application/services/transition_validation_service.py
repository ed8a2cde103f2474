"""Transition validation service.

Validates work item status changes against the project's workflow and
commits them through the work item repository. Validation fails
closed: if the workflow graph cannot be obtained the move is refused
with a distinguishable reason instead of being allowed unchecked.

execute_transition re-reads the item's current status and validates
again immediately before writing. Client-side checks (a board
highlighting allowed drop targets) are advisory; this is the
authoritative check at the write boundary.
"""

from __future__ import annotations

from boardflow.application.ports.work_item_repository import (
    WorkItemRepositoryProtocol,
)
from boardflow.application.services.base import LoggingMixin
from boardflow.application.services.workflow_graph_loader import WorkflowGraphLoader
from boardflow.domain.errors.repository import InvalidRecordError, RepositoryError
from boardflow.domain.errors.workflow import WorkflowNotConfiguredError
from boardflow.domain.models.move_validation import MoveOutcome, MoveValidation
from boardflow.domain.models.status import Status
from boardflow.domain.models.workflow_graph import WorkflowGraph
from boardflow.domain.services import transition_validator


class TransitionValidationService(LoggingMixin):
    """Validates and executes work item transitions."""

    def __init__(
        self,
        graph_loader: WorkflowGraphLoader,
        work_item_repository: WorkItemRepositoryProtocol,
    ) -> None:
        self._graph_loader = graph_loader
        self._work_items = work_item_repository
        self._init_logger(component="workflow")

    async def validate_move(
        self, project_id: str, from_status_id: str, to_status_id: str
    ) -> MoveValidation:
        """Validate a status change for the project's workflow.

        Moving to the current status is always valid and needs no
        workflow lookup.

        Returns:
            MoveValidation. Invalid results carry the reason:
            TRANSITION_NOT_ALLOWED when the workflow has no direct
            transition, WORKFLOW_NOT_CONFIGURED or VALIDATION_FAILED
            when the workflow could not be obtained.
        """
        if from_status_id == to_status_id:
            return MoveValidation.allowed()

        log = self._log_operation(
            "validate_move",
            project_id=project_id,
            from_status_id=from_status_id,
            to_status_id=to_status_id,
        )
        try:
            graph = await self._graph_loader.resolve(project_id)
        except WorkflowNotConfiguredError as exc:
            log.warning("move_rejected", reason="workflow_not_configured", stage=exc.stage.value)
            return MoveValidation.not_configured(exc.guidance)
        except (RepositoryError, InvalidRecordError, OSError, TimeoutError) as exc:
            log.warning(
                "move_rejected",
                reason="validation_failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return MoveValidation.failed()

        validation = transition_validator.validate_move(from_status_id, to_status_id, graph)
        if not validation.valid:
            log.info("move_rejected", reason=validation.reason)
        return validation

    async def validate_issue_move(
        self, issue_id: str, project_id: str, to_status_id: str
    ) -> MoveValidation:
        """Validate moving a work item from its current status.

        Fails closed when the item's status cannot be read.
        """
        log = self._log_operation("validate_issue_move", issue_id=issue_id)
        try:
            current = await self._work_items.get_status_id(issue_id)
        except RepositoryError as exc:
            log.warning("move_rejected", reason="validation_failed", error=str(exc))
            return MoveValidation.failed()

        if current is None:
            log.info("move_rejected", reason="issue_not_found")
            return MoveValidation.issue_not_found()
        return await self.validate_move(project_id, current, to_status_id)

    async def execute_transition(
        self, issue_id: str, project_id: str, to_status_id: str
    ) -> MoveOutcome:
        """Validate and commit a work item status change.

        The item keeps its status unless validation passes and the
        write succeeds.
        """
        log = self._log_operation(
            "execute_transition",
            issue_id=issue_id,
            project_id=project_id,
            to_status_id=to_status_id,
        )
        validation = await self.validate_issue_move(issue_id, project_id, to_status_id)
        if not validation.valid:
            return MoveOutcome(success=False, target_status_id=to_status_id, error=validation.error)

        try:
            await self._work_items.update_status(issue_id, to_status_id)
        except RepositoryError as exc:
            log.error("transition_commit_failed", error=str(exc))
            return MoveOutcome(success=False, target_status_id=to_status_id, error=str(exc))

        log.info("transition_executed")
        return MoveOutcome(success=True, target_status_id=to_status_id)

    async def available_targets(self, project_id: str, from_status_id: str) -> list[Status]:
        """Return the statuses an item on from_status_id can move to.

        Raises:
            WorkflowNotConfiguredError: If the project has no workflow.
            RepositoryError: If the workflow lookup fails.
        """
        graph: WorkflowGraph = await self._graph_loader.resolve(project_id)
        return transition_validator.available_targets(from_status_id, graph)
