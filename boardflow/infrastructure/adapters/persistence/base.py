"""Shared session handling for PostgreSQL repositories.

Each repository call runs in its own session and transaction unless a
transaction() block is active in the current task, in which case the
call joins that block's session. SQLAlchemy errors never leave a
repository, nor do the raw socket errors the driver raises when the
database cannot be reached: both are re-raised as RepositoryError.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager
from contextvars import ContextVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from boardflow.domain.errors.repository import RepositoryError

logger = get_logger()


class PostgresRepository:
    """Base for repositories backed by an async session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize the repository.

        Args:
            session_factory: SQLAlchemy async session factory.
        """
        self._session_factory = session_factory
        self._active_session: ContextVar[AsyncSession | None] = ContextVar(
            f"{type(self).__name__}_session_{id(self)}", default=None
        )

    @contextmanager
    def _translate_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except (SQLAlchemyError, OSError, TimeoutError) as exc:
            logger.warning(
                "repository_call_failed",
                repository=type(self).__name__,
                operation=operation,
                error=str(exc),
            )
            raise RepositoryError(f"{operation} failed: {exc}") from exc

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        """Yield the active transaction's session or a new committed one."""
        active = self._active_session.get()
        if active is not None:
            yield active
            return
        async with self._session_factory() as session, session.begin():
            yield session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Group repository calls into one database transaction.

        A nested block joins the outer transaction.
        """
        if self._active_session.get() is not None:
            yield
            return
        with self._translate_errors("transaction"):
            async with self._session_factory() as session, session.begin():
                token = self._active_session.set(session)
                try:
                    yield
                finally:
                    self._active_session.reset(token)
