"""PostgreSQL work item repository (issues table, status column only)."""

from __future__ import annotations

from sqlalchemy import text

from boardflow.application.ports.work_item_repository import (
    WorkItemRepositoryProtocol,
)
from boardflow.domain.errors.repository import RepositoryError
from boardflow.infrastructure.adapters.persistence.base import PostgresRepository


class PostgresWorkItemRepository(PostgresRepository, WorkItemRepositoryProtocol):
    """Reads and updates issue statuses in PostgreSQL."""

    async def list_status_ids_in_use(self, project_id: str) -> list[str]:
        with self._translate_errors("list_status_ids_in_use"):
            async with self._session() as session:
                result = await session.execute(
                    text("""
                        SELECT DISTINCT status_id::text
                        FROM issues
                        WHERE project_id::text = :project_id
                          AND status_id IS NOT NULL
                    """),
                    {"project_id": project_id},
                )
                return list(result.scalars().all())

    async def get_status_id(self, issue_id: str) -> str | None:
        with self._translate_errors("get_status_id"):
            async with self._session() as session:
                result = await session.execute(
                    text("SELECT status_id::text FROM issues WHERE id::text = :issue_id"),
                    {"issue_id": issue_id},
                )
                return result.scalar_one_or_none()

    async def update_status(self, issue_id: str, status_id: str) -> None:
        with self._translate_errors("update_status"):
            async with self._session() as session:
                result = await session.execute(
                    text("""
                        UPDATE issues
                        SET status_id = CAST(:status_id AS uuid), updated_at = now()
                        WHERE id::text = :issue_id
                    """),
                    {"issue_id": issue_id, "status_id": status_id},
                )
        if result.rowcount == 0:
            raise RepositoryError(f"Work item {issue_id} not found")
