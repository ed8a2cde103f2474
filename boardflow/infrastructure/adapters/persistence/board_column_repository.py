"""PostgreSQL board column repository.

Columns live in board_columns, status mappings in
board_column_statuses. Status mappings are inserted under a savepoint
so that a duplicate mapping does not abort the enclosing transaction.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from boardflow.application.ports.board_column_repository import (
    BoardColumnRepositoryProtocol,
    Row,
)
from boardflow.domain.errors.board import ColumnNotFoundError
from boardflow.domain.errors.repository import DuplicateColumnMappingError
from boardflow.infrastructure.adapters.persistence.base import PostgresRepository

UPDATABLE_COLUMN_FIELDS = frozenset({"name", "position", "min_issues", "max_issues"})


class PostgresBoardColumnRepository(PostgresRepository, BoardColumnRepositoryProtocol):
    """Board columns in PostgreSQL. transaction() is atomic."""

    atomic = True

    async def list_columns(self, board_id: str) -> list[Row]:
        with self._translate_errors("list_columns"):
            async with self._session() as session:
                result = await session.execute(
                    text("""
                        SELECT c.id::text AS id,
                               c.board_id::text AS board_id,
                               c.name,
                               COALESCE(c.position, 0) AS position,
                               c.min_issues,
                               c.max_issues,
                               array_remove(
                                   array_agg(s.status_id::text ORDER BY s.created_at),
                                   NULL
                               ) AS status_ids
                        FROM board_columns c
                        LEFT JOIN board_column_statuses s ON s.column_id = c.id
                        WHERE c.board_id::text = :board_id
                        GROUP BY c.id
                        ORDER BY c.position NULLS LAST, c.created_at
                    """),
                    {"board_id": board_id},
                )
                return [dict(row) for row in result.mappings().all()]

    async def list_board_ids(self, project_id: str) -> list[str]:
        with self._translate_errors("list_board_ids"):
            async with self._session() as session:
                result = await session.execute(
                    text("""
                        SELECT id::text
                        FROM boards
                        WHERE project_id::text = :project_id
                        ORDER BY created_at
                    """),
                    {"project_id": project_id},
                )
                return list(result.scalars().all())

    async def create_column(
        self,
        board_id: str,
        name: str,
        position: int,
        min_issues: int | None = None,
        max_issues: int | None = None,
    ) -> str:
        with self._translate_errors("create_column"):
            async with self._session() as session:
                result = await session.execute(
                    text("""
                        INSERT INTO board_columns
                            (board_id, name, position, min_issues, max_issues)
                        VALUES
                            (CAST(:board_id AS uuid), :name, :position,
                             :min_issues, :max_issues)
                        RETURNING id::text
                    """),
                    {
                        "board_id": board_id,
                        "name": name,
                        "position": position,
                        "min_issues": min_issues,
                        "max_issues": max_issues,
                    },
                )
                return result.scalar_one()

    async def update_column(self, column_id: str, changes: Mapping[str, Any]) -> None:
        unknown = set(changes) - UPDATABLE_COLUMN_FIELDS
        if unknown:
            raise ValueError(f"Cannot update column fields: {sorted(unknown)}")
        if not changes:
            return
        # Field names are restricted to UPDATABLE_COLUMN_FIELDS above
        assignments = ", ".join(f"{field} = :{field}" for field in sorted(changes))
        with self._translate_errors("update_column"):
            async with self._session() as session:
                result = await session.execute(
                    text(f"""
                        UPDATE board_columns
                        SET {assignments}, updated_at = now()
                        WHERE id::text = :column_id
                    """),
                    {**changes, "column_id": column_id},
                )
        if result.rowcount == 0:
            raise ColumnNotFoundError(column_id)

    async def delete_column(self, column_id: str) -> None:
        with self._translate_errors("delete_column"):
            async with self._session() as session:
                await session.execute(
                    text("DELETE FROM board_column_statuses WHERE column_id::text = :column_id"),
                    {"column_id": column_id},
                )
                await session.execute(
                    text("DELETE FROM board_columns WHERE id::text = :column_id"),
                    {"column_id": column_id},
                )

    async def delete_board_columns(self, board_id: str) -> int:
        with self._translate_errors("delete_board_columns"):
            async with self._session() as session:
                await session.execute(
                    text("""
                        DELETE FROM board_column_statuses
                        WHERE column_id IN (
                            SELECT id FROM board_columns WHERE board_id::text = :board_id
                        )
                    """),
                    {"board_id": board_id},
                )
                result = await session.execute(
                    text("DELETE FROM board_columns WHERE board_id::text = :board_id"),
                    {"board_id": board_id},
                )
                return result.rowcount

    async def add_column_status(self, column_id: str, status_id: str) -> None:
        with self._translate_errors("add_column_status"):
            async with self._session() as session:
                board_id = (
                    await session.execute(
                        text("SELECT board_id::text FROM board_columns WHERE id::text = :column_id"),
                        {"column_id": column_id},
                    )
                ).scalar_one_or_none()
                if board_id is None:
                    raise ColumnNotFoundError(column_id)

                already_mapped = (
                    await session.execute(
                        text("""
                            SELECT 1
                            FROM board_column_statuses s
                            JOIN board_columns c ON c.id = s.column_id
                            WHERE c.board_id::text = :board_id
                              AND s.status_id::text = :status_id
                            LIMIT 1
                        """),
                        {"board_id": board_id, "status_id": status_id},
                    )
                ).scalar_one_or_none()
                if already_mapped is not None:
                    raise DuplicateColumnMappingError(board_id, status_id)

                try:
                    async with session.begin_nested():
                        await session.execute(
                            text("""
                                INSERT INTO board_column_statuses (column_id, status_id)
                                VALUES (CAST(:column_id AS uuid), CAST(:status_id AS uuid))
                            """),
                            {"column_id": column_id, "status_id": status_id},
                        )
                except IntegrityError as exc:
                    raise DuplicateColumnMappingError(board_id, status_id) from exc

    async def remove_column_status(self, column_id: str, status_id: str) -> None:
        with self._translate_errors("remove_column_status"):
            async with self._session() as session:
                await session.execute(
                    text("""
                        DELETE FROM board_column_statuses
                        WHERE column_id::text = :column_id
                          AND status_id::text = :status_id
                    """),
                    {"column_id": column_id, "status_id": status_id},
                )
