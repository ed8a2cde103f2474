"""PostgreSQL workflow definition repository.

Reads projects.workflow_scheme_id, workflow_scheme_mappings,
workflows, workflow_steps, workflow_transitions, and issue_statuses.
Steps without a status and transitions without a source step (global
transitions) are filtered out in SQL.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import text

from boardflow.application.ports.workflow_definition_repository import (
    Row,
    WorkflowDefinitionRepositoryProtocol,
)
from boardflow.infrastructure.adapters.persistence.base import PostgresRepository


class PostgresWorkflowDefinitionRepository(
    PostgresRepository, WorkflowDefinitionRepositoryProtocol
):
    """Read-only workflow definitions from PostgreSQL."""

    async def get_scheme_id_for_project(self, project_id: str) -> str | None:
        with self._translate_errors("get_scheme_id_for_project"):
            async with self._session() as session:
                result = await session.execute(
                    text("""
                        SELECT workflow_scheme_id::text
                        FROM projects
                        WHERE id::text = :project_id
                    """),
                    {"project_id": project_id},
                )
                return result.scalar_one_or_none()

    async def list_scheme_mappings(self, scheme_id: str) -> list[Row]:
        with self._translate_errors("list_scheme_mappings"):
            async with self._session() as session:
                result = await session.execute(
                    text("""
                        SELECT id::text AS id,
                               scheme_id::text AS scheme_id,
                               issue_type_id::text AS issue_type_id,
                               workflow_id::text AS workflow_id
                        FROM workflow_scheme_mappings
                        WHERE scheme_id::text = :scheme_id
                        ORDER BY created_at
                    """),
                    {"scheme_id": scheme_id},
                )
                return [dict(row) for row in result.mappings().all()]

    async def get_workflow(self, workflow_id: str) -> Row | None:
        with self._translate_errors("get_workflow"):
            async with self._session() as session:
                result = await session.execute(
                    text("""
                        SELECT id::text AS id, name
                        FROM workflows
                        WHERE id::text = :workflow_id
                    """),
                    {"workflow_id": workflow_id},
                )
                row = result.mappings().one_or_none()
                return dict(row) if row is not None else None

    async def list_steps(self, workflow_id: str) -> list[Row]:
        with self._translate_errors("list_steps"):
            async with self._session() as session:
                result = await session.execute(
                    text("""
                        SELECT id::text AS id,
                               workflow_id::text AS workflow_id,
                               status_id::text AS status_id,
                               COALESCE(step_order, 0) AS position
                        FROM workflow_steps
                        WHERE workflow_id::text = :workflow_id
                          AND status_id IS NOT NULL
                        ORDER BY step_order NULLS LAST, created_at
                    """),
                    {"workflow_id": workflow_id},
                )
                return [dict(row) for row in result.mappings().all()]

    async def list_transitions(self, workflow_id: str) -> list[Row]:
        with self._translate_errors("list_transitions"):
            async with self._session() as session:
                result = await session.execute(
                    text("""
                        SELECT from_step_id::text AS from_step_id,
                               to_step_id::text AS to_step_id
                        FROM workflow_transitions
                        WHERE workflow_id::text = :workflow_id
                          AND from_step_id IS NOT NULL
                    """),
                    {"workflow_id": workflow_id},
                )
                return [dict(row) for row in result.mappings().all()]

    async def get_statuses(self, status_ids: Sequence[str]) -> list[Row]:
        if not status_ids:
            return []
        with self._translate_errors("get_statuses"):
            async with self._session() as session:
                result = await session.execute(
                    text("""
                        SELECT id::text AS id,
                               name,
                               color,
                               COALESCE(category, 'todo') AS category
                        FROM issue_statuses
                        WHERE id::text = ANY(:status_ids)
                    """),
                    {"status_ids": list(status_ids)},
                )
                return [dict(row) for row in result.mappings().all()]
