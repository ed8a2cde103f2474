"""Board sync service: regenerate and sync board columns from workflow.

Two modes share the same workflow graph:

- regenerate replaces every column of a board with one column per
  workflow status (plus any status work items still sit on). It is
  planned first and applied inside a single repository transaction, so
  a failure while planning never touches the board.
- sync appends a column for each workflow status that is not on the
  board yet and, optionally, removes columns whose statuses all left
  the workflow. It never resets the board.

Both run under the per-board operation guard and are bounded by the
configured repository timeout.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import TypeVar

from boardflow.application.ports.board_column_repository import (
    BoardColumnRepositoryProtocol,
)
from boardflow.application.ports.work_item_repository import (
    WorkItemRepositoryProtocol,
)
from boardflow.application.services.base import LoggingMixin
from boardflow.application.services.board_columns import create_column, load_columns
from boardflow.application.services.board_operation_guard import BoardOperationGuard
from boardflow.application.services.workflow_graph_loader import WorkflowGraphLoader
from boardflow.config.board_sync_config import (
    DEFAULT_BOARD_SYNC_CONFIG,
    BoardSyncConfig,
)
from boardflow.domain.errors.board import BoardOperationInProgressError
from boardflow.domain.errors.repository import (
    DuplicateColumnMappingError,
    PartialRegenerationError,
    RepositoryError,
)
from boardflow.domain.errors.workflow import WorkflowNotConfiguredError
from boardflow.domain.models.board_sync import (
    ColumnSpec,
    PartitionPlan,
    RegenerationResult,
    SyncPlan,
    SyncResult,
)
from boardflow.domain.models.status import Status
from boardflow.domain.services.column_planner import plan_regeneration, plan_sync

T = TypeVar("T")


@dataclass
class _ApplyProgress:
    """Writes made by a regeneration apply phase so far."""

    removed: int = 0
    created: int = 0

    @property
    def started(self) -> bool:
        return bool(self.removed or self.created)


class BoardSyncService(LoggingMixin):
    """Keeps a board's columns aligned with its project's workflow.

    Only this service and ColumnConfigurationService mutate columns.
    """

    def __init__(
        self,
        graph_loader: WorkflowGraphLoader,
        column_repository: BoardColumnRepositoryProtocol,
        work_item_repository: WorkItemRepositoryProtocol,
        guard: BoardOperationGuard | None = None,
        config: BoardSyncConfig = DEFAULT_BOARD_SYNC_CONFIG,
    ) -> None:
        """Initialize the service.

        Args:
            graph_loader: Resolves project workflow graphs.
            column_repository: Board column storage.
            work_item_repository: Source of statuses in use.
            guard: Per-board operation guard. Created from config if omitted.
            config: Sync defaults and timeouts.
        """
        self._graph_loader = graph_loader
        self._columns = column_repository
        self._work_items = work_item_repository
        self._config = config
        self._guard = guard or BoardOperationGuard(config.lock_timeout_seconds)
        self._init_logger(component="board")

    async def regenerate(
        self,
        board_id: str,
        project_id: str,
        preserve_wip_limits: bool | None = None,
    ) -> RegenerationResult:
        """Replace a board's columns with one column per workflow status.

        Args:
            board_id: Board to rebuild.
            project_id: Project whose workflow drives the board.
            preserve_wip_limits: Carry WIP limits over by column name.
                Defaults to the configured value.

        Returns:
            RegenerationResult with created and removed column counts.

        Raises:
            WorkflowNotConfiguredError: If the project has no workflow.
            BoardOperationInProgressError: If the board is busy.
            PartialRegenerationError: If the store failed mid-apply and
                could not roll back.
            RepositoryError: If a repository call failed or timed out.
        """
        preserve = (
            self._config.preserve_wip_limits
            if preserve_wip_limits is None
            else preserve_wip_limits
        )
        log = self._log_operation(
            "regenerate",
            board_id=board_id,
            project_id=project_id,
            preserve_wip_limits=preserve,
        )
        log.info("regeneration_started")

        progress = _ApplyProgress()
        async with self._guard.hold(board_id):
            try:
                result = await self._bounded(
                    self._regenerate(board_id, project_id, preserve, progress),
                    "regenerate",
                )
            except PartialRegenerationError:
                raise
            except RepositoryError as exc:
                # Covers failures and timeouts alike: a cancelled apply
                # phase leaves its progress behind.
                if self._columns.atomic or not progress.started:
                    raise
                log.error(
                    "regeneration_partially_applied",
                    columns_removed=progress.removed,
                    columns_created=progress.created,
                    error=str(exc),
                )
                raise PartialRegenerationError(
                    board_id, progress.removed, progress.created, cause=str(exc)
                ) from exc

        log.info(
            "regeneration_completed",
            columns_created=result.columns_created,
            columns_removed=result.columns_removed,
        )
        return result

    async def sync(
        self,
        board_id: str,
        project_id: str,
        remove_orphans: bool | None = None,
    ) -> SyncResult:
        """Add columns for unmapped workflow statuses.

        A project without a workflow is not an error here: nothing is
        changed and SyncResult(0, 0) is returned.

        Args:
            board_id: Board to sync.
            project_id: Project whose workflow drives the board.
            remove_orphans: Also remove columns whose statuses all left
                the workflow. Defaults to the configured value.

        Raises:
            BoardOperationInProgressError: If the board is busy.
            RepositoryError: If a repository call failed or timed out.
        """
        remove = self._config.remove_orphans if remove_orphans is None else remove_orphans
        log = self._log_operation(
            "sync", board_id=board_id, project_id=project_id, remove_orphans=remove
        )

        async with self._guard.hold(board_id):
            result = await self._bounded(self._sync(board_id, project_id, remove), "sync")

        log.info("sync_completed", added=result.added, removed=result.removed)
        return result

    async def regenerate_project_boards(self, project_id: str) -> int:
        """Regenerate every board of a project.

        Run after a workflow is published. A board that fails with a
        repository error or is busy is logged and skipped.

        Returns:
            Number of boards regenerated.

        Raises:
            WorkflowNotConfiguredError: If the project has no workflow.
        """
        log = self._log_operation("regenerate_project_boards", project_id=project_id)
        board_ids = await self._columns.list_board_ids(project_id)

        updated = 0
        for board_id in board_ids:
            try:
                await self.regenerate(board_id, project_id)
            except (RepositoryError, BoardOperationInProgressError) as exc:
                log.warning(
                    "board_regeneration_skipped",
                    board_id=board_id,
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                continue
            updated += 1

        log.info("project_boards_regenerated", boards_total=len(board_ids), boards_updated=updated)
        return updated

    async def _bounded(self, operation: Awaitable[T], name: str) -> T:
        timeout = self._config.repository_timeout_seconds
        try:
            return await asyncio.wait_for(operation, timeout=timeout)
        except TimeoutError:
            raise RepositoryError(f"{name} timed out after {timeout}s") from None

    async def _regenerate(
        self,
        board_id: str,
        project_id: str,
        preserve_wip_limits: bool,
        progress: _ApplyProgress,
    ) -> RegenerationResult:
        graph = await self._graph_loader.resolve(project_id)

        in_use = await self._work_items.list_status_ids_in_use(project_id)
        extra_ids = [
            sid for sid in dict.fromkeys(in_use) if sid and sid not in graph.status_ids
        ]
        found = {s.id: s for s in await self._graph_loader.lookup_statuses(extra_ids)}
        extra = [found.get(sid) or Status.unresolved(sid) for sid in extra_ids]

        existing = await load_columns(self._columns, board_id)
        plan = plan_regeneration(
            board_id,
            graph,
            existing,
            extra_statuses=extra,
            preserve_wip_limits=preserve_wip_limits,
        )
        self._log_operation("regenerate", board_id=board_id).debug(
            "regeneration_planned",
            graph_statuses=len(graph.statuses),
            in_use_statuses=len(extra),
            remove=len(plan.remove_column_ids),
            create=len(plan.create),
        )

        await self._apply_partition_plan(plan, progress)
        return RegenerationResult(
            columns_created=len(plan.create),
            columns_removed=len(plan.remove_column_ids),
        )

    async def _apply_partition_plan(
        self, plan: PartitionPlan, progress: _ApplyProgress
    ) -> None:
        async with self._columns.transaction():
            progress.removed = await self._columns.delete_board_columns(plan.board_id)
            for spec in plan.create:
                await create_column(self._columns, plan.board_id, spec)
                progress.created += 1

    async def _sync(self, board_id: str, project_id: str, remove_orphans: bool) -> SyncResult:
        log = self._log_operation("sync", board_id=board_id, project_id=project_id)
        try:
            graph = await self._graph_loader.resolve(project_id)
        except WorkflowNotConfiguredError as exc:
            log.info("sync_skipped_not_configured", stage=exc.stage.value)
            return SyncResult.nothing()

        existing = await load_columns(self._columns, board_id)
        plan = plan_sync(board_id, graph, existing, remove_orphans=remove_orphans)
        if plan.is_noop:
            return SyncResult.nothing()
        return await self._apply_sync_plan(plan, len(existing) - len(plan.remove_column_ids))

    async def _apply_sync_plan(self, plan: SyncPlan, next_position: int) -> SyncResult:
        log = self._log_operation("sync", board_id=plan.board_id)
        added = 0
        removed = 0
        async with self._columns.transaction():
            for column_id in plan.remove_column_ids:
                await self._columns.delete_column(column_id)
                removed += 1
                log.info("sync_column_removed", column_id=column_id)

            for column_id, position in plan.reposition:
                await self._columns.update_column(column_id, {"position": position})

            for spec in plan.append:
                column_id = await self._append_column(plan.board_id, spec, next_position)
                if column_id is None:
                    continue
                added += 1
                next_position += 1
                log.info(
                    "sync_column_added",
                    column_id=column_id,
                    status_ids=list(spec.status_ids),
                )
        return SyncResult(added=added, removed=removed)

    async def _append_column(
        self, board_id: str, spec: ColumnSpec, position: int
    ) -> str | None:
        """Append one column; None if another writer mapped its status first."""
        column_id = await self._columns.create_column(board_id, spec.name, position)
        try:
            for status_id in spec.status_ids:
                await self._columns.add_column_status(column_id, status_id)
        except DuplicateColumnMappingError as exc:
            await self._columns.delete_column(column_id)
            self._log_operation("sync", board_id=board_id).info(
                "sync_status_already_mapped", status_id=exc.status_id
            )
            return None
        return column_id
