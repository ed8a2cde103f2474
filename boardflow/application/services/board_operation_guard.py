"""Per-board guard for column operations.

Regenerate and sync read a board's columns, plan, then write. Two of
them running on one board at once can both decide a status is
unmapped and create duplicate columns, or one can observe the other's
half-rebuilt board. The guard admits one such operation per board at a
time within this process.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from structlog import get_logger

from boardflow.domain.errors.board import BoardOperationInProgressError

logger = get_logger()


class BoardOperationGuard:
    """Admits one column operation per board at a time.

    Attributes:
        lock_timeout_seconds: How long to wait for a busy board.
            0 fails immediately with BoardOperationInProgressError.
    """

    def __init__(self, lock_timeout_seconds: float = 0.0) -> None:
        if lock_timeout_seconds < 0:
            raise ValueError("lock_timeout_seconds must be non-negative")
        self.lock_timeout_seconds = lock_timeout_seconds
        self._locks: dict[str, asyncio.Lock] = {}
        # Holders plus waiters per board; the lock is dropped at zero.
        self._users: dict[str, int] = {}

    @property
    def tracked_boards(self) -> int:
        """Number of boards with an operation holding or waiting."""
        return len(self._locks)

    def is_busy(self, board_id: str) -> bool:
        """Return True if an operation currently holds the board."""
        lock = self._locks.get(board_id)
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def hold(self, board_id: str) -> AsyncIterator[None]:
        """Hold the board for the duration of the block.

        Raises:
            BoardOperationInProgressError: If the board stays busy past
                lock_timeout_seconds.
        """
        lock = self._locks.setdefault(board_id, asyncio.Lock())
        self._users[board_id] = self._users.get(board_id, 0) + 1
        try:
            await self._acquire(board_id, lock)
            try:
                yield
            finally:
                lock.release()
        finally:
            self._users[board_id] -= 1
            if not self._users[board_id]:
                del self._users[board_id]
                del self._locks[board_id]

    async def _acquire(self, board_id: str, lock: asyncio.Lock) -> None:
        if self.lock_timeout_seconds == 0:
            if lock.locked():
                logger.info("board_operation_rejected_busy", board_id=board_id)
                raise BoardOperationInProgressError(board_id)
            await lock.acquire()
            return

        try:
            await asyncio.wait_for(lock.acquire(), timeout=self.lock_timeout_seconds)
        except TimeoutError:
            logger.info(
                "board_operation_rejected_busy",
                board_id=board_id,
                waited_seconds=self.lock_timeout_seconds,
            )
            raise BoardOperationInProgressError(board_id) from None
