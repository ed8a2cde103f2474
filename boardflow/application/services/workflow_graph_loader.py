"""Workflow graph loader.

Resolves a project's workflow into a normalized WorkflowGraph:

    project -> workflow scheme -> scheme mapping -> workflow
            -> ordered steps -> step transitions -> status transitions

The default scheme mapping (no issue-type qualifier) is preferred;
otherwise the first mapping of the scheme is used. Each stage that
yields nothing raises WorkflowNotConfiguredError naming that stage, so
the caller can show a specific fix instead of a generic failure.
"""

from __future__ import annotations

from collections.abc import Sequence

from boardflow.application.dtos.rows import (
    SchemeMappingRow,
    StatusRow,
    WorkflowRow,
    WorkflowStepRow,
    WorkflowTransitionRow,
    parse_row,
    parse_rows,
)
from boardflow.application.ports.workflow_definition_repository import (
    WorkflowDefinitionRepositoryProtocol,
)
from boardflow.application.services.base import LoggingMixin
from boardflow.domain.errors.workflow import (
    WorkflowNotConfiguredError,
    WorkflowResolutionStage,
)
from boardflow.domain.models.status import Status
from boardflow.domain.models.workflow_graph import Transition, WorkflowGraph


def _unique(ids: Sequence[str]) -> list[str]:
    return list(dict.fromkeys(ids))


class WorkflowGraphLoader(LoggingMixin):
    """Loads workflow graphs through the workflow definition repository.

    Graphs are loaded fresh on every call; nothing is cached.
    """

    def __init__(self, repository: WorkflowDefinitionRepositoryProtocol) -> None:
        """Initialize the loader.

        Args:
            repository: Read-only workflow definition repository.
        """
        self._repository = repository
        self._init_logger(component="workflow")

    async def resolve(self, project_id: str) -> WorkflowGraph:
        """Resolve the project's workflow graph.

        Args:
            project_id: Project whose workflow to load.

        Returns:
            WorkflowGraph with statuses in step layout order.

        Raises:
            WorkflowNotConfiguredError: If the scheme, mapping, workflow,
                or steps are missing.
            RepositoryError: If a lookup fails.
            InvalidRecordError: If a returned row is malformed.
        """
        log = self._log_operation("resolve", project_id=project_id)

        scheme_id = await self._repository.get_scheme_id_for_project(project_id)
        if not scheme_id:
            raise self._not_configured(project_id, WorkflowResolutionStage.SCHEME)

        mappings = parse_rows(
            SchemeMappingRow, await self._repository.list_scheme_mappings(scheme_id)
        )
        if not mappings:
            raise self._not_configured(project_id, WorkflowResolutionStage.MAPPING)
        mapping = next((m for m in mappings if m.is_default), mappings[0])

        workflow_row = await self._repository.get_workflow(mapping.workflow_id)
        if workflow_row is None:
            raise self._not_configured(project_id, WorkflowResolutionStage.WORKFLOW)
        workflow = parse_row(WorkflowRow, workflow_row)

        steps = parse_rows(WorkflowStepRow, await self._repository.list_steps(workflow.id))
        if not steps:
            raise self._not_configured(project_id, WorkflowResolutionStage.STEPS)
        # Stable sort: steps sharing a position keep repository order
        steps.sort(key=lambda step: step.position)

        step_to_status = {step.id: step.status_id for step in steps}
        status_ids = _unique([step.status_id for step in steps])
        statuses = await self.lookup_statuses(status_ids)
        known = {status.id for status in statuses}

        transitions: list[Transition] = []
        dropped = 0
        for row in parse_rows(
            WorkflowTransitionRow, await self._repository.list_transitions(workflow.id)
        ):
            from_status = step_to_status.get(row.from_step_id)
            to_status = step_to_status.get(row.to_step_id)
            if from_status in known and to_status in known:
                transitions.append(Transition(from_status, to_status))
            else:
                dropped += 1

        graph = WorkflowGraph.build(statuses, transitions)
        log.debug(
            "workflow_graph_resolved",
            workflow_id=workflow.id,
            scheme_id=scheme_id,
            default_mapping=mapping.is_default,
            status_count=len(graph.statuses),
            transition_count=graph.transition_count,
            dropped_transitions=dropped,
        )
        return graph

    async def lookup_statuses(self, status_ids: Sequence[str]) -> list[Status]:
        """Load statuses by id, in the order given.

        Ids with no status row are skipped and logged.

        Raises:
            RepositoryError: If the lookup fails.
            InvalidRecordError: If a returned row is malformed.
        """
        if not status_ids:
            return []
        ids = _unique(status_ids)
        rows = parse_rows(StatusRow, await self._repository.get_statuses(ids))
        by_id = {row.id: row.to_domain() for row in rows}

        missing = [sid for sid in ids if sid not in by_id]
        if missing:
            self._log_operation("lookup_statuses").warning(
                "statuses_not_found", status_ids=missing
            )
        return [by_id[sid] for sid in ids if sid in by_id]

    def _not_configured(
        self, project_id: str, stage: WorkflowResolutionStage
    ) -> WorkflowNotConfiguredError:
        self._log_operation("resolve", project_id=project_id).info(
            "workflow_not_configured", stage=stage.value
        )
        return WorkflowNotConfiguredError(project_id, stage)
