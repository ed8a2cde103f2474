"""Board alignment reporting.

Loads a board's columns and its project's workflow and reports
columns that no transition enters or leaves, plus workflow statuses
missing from the board.
"""

from __future__ import annotations

from boardflow.application.ports.board_column_repository import (
    BoardColumnRepositoryProtocol,
)
from boardflow.application.services.base import LoggingMixin
from boardflow.application.services.board_columns import load_columns
from boardflow.application.services.workflow_graph_loader import WorkflowGraphLoader
from boardflow.domain.errors.workflow import WorkflowNotConfiguredError
from boardflow.domain.models.alignment import AlignmentReport, StatusTransitionInfo
from boardflow.domain.services.alignment_analyzer import (
    analyze,
    status_transition_info,
    unmapped_statuses,
)


class BoardAlignmentService(LoggingMixin):
    """Read-only alignment checks for boards. Never mutates columns."""

    def __init__(
        self,
        graph_loader: WorkflowGraphLoader,
        column_repository: BoardColumnRepositoryProtocol,
    ) -> None:
        self._graph_loader = graph_loader
        self._columns = column_repository
        self._init_logger(component="board")

    async def report(self, board_id: str, project_id: str) -> AlignmentReport:
        """Build the alignment report for a board.

        A project without a workflow yields a report with
        workflow_configured=False and no warnings.

        Raises:
            RepositoryError: If a repository call fails.
        """
        log = self._log_operation("report", board_id=board_id, project_id=project_id)
        columns = await load_columns(self._columns, board_id)
        try:
            graph = await self._graph_loader.resolve(project_id)
        except WorkflowNotConfiguredError as exc:
            log.info("alignment_skipped_not_configured", stage=exc.stage.value)
            return AlignmentReport(
                board_id=board_id,
                workflow_configured=False,
                warnings={},
                unmapped_statuses=(),
            )

        report = AlignmentReport(
            board_id=board_id,
            workflow_configured=True,
            warnings=analyze(columns, graph),
            unmapped_statuses=unmapped_statuses(columns, graph),
        )
        log.info(
            "alignment_reported",
            columns_with_warnings=len(report.warnings),
            unmapped_count=len(report.unmapped_statuses),
        )
        return report

    async def transition_info(self, project_id: str) -> dict[str, StatusTransitionInfo]:
        """Return direct transition neighbours for each workflow status.

        Raises:
            WorkflowNotConfiguredError: If the project has no workflow.
        """
        graph = await self._graph_loader.resolve(project_id)
        return status_transition_info(graph.statuses, graph)
