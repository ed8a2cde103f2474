"""Unit tests for the per-board operation guard."""

from __future__ import annotations

import asyncio

import pytest

from boardflow.application.services.board_operation_guard import BoardOperationGuard
from boardflow.domain.errors import BoardOperationInProgressError


class TestBoardOperationGuard:
    @pytest.mark.asyncio
    async def test_second_operation_on_same_board_rejected(self) -> None:
        guard = BoardOperationGuard()

        async with guard.hold("b1"):
            assert guard.is_busy("b1")
            with pytest.raises(BoardOperationInProgressError) as exc_info:
                async with guard.hold("b1"):
                    pass

        assert exc_info.value.board_id == "b1"
        assert not guard.is_busy("b1")

    @pytest.mark.asyncio
    async def test_other_boards_are_independent(self) -> None:
        guard = BoardOperationGuard()

        async with guard.hold("b1"):
            async with guard.hold("b2"):
                assert guard.is_busy("b1")
                assert guard.is_busy("b2")

    @pytest.mark.asyncio
    async def test_released_after_error(self) -> None:
        guard = BoardOperationGuard()

        with pytest.raises(RuntimeError):
            async with guard.hold("b1"):
                raise RuntimeError("boom")

        async with guard.hold("b1"):
            pass

    @pytest.mark.asyncio
    async def test_waits_up_to_timeout(self) -> None:
        guard = BoardOperationGuard(lock_timeout_seconds=1.0)
        order: list[str] = []

        async def first() -> None:
            async with guard.hold("b1"):
                await asyncio.sleep(0.05)
                order.append("first")

        async def second() -> None:
            await asyncio.sleep(0.01)
            async with guard.hold("b1"):
                order.append("second")

        await asyncio.gather(first(), second())

        assert order == ["first", "second"]

    @pytest.mark.asyncio
    async def test_times_out(self) -> None:
        guard = BoardOperationGuard(lock_timeout_seconds=0.01)

        async with guard.hold("b1"):
            with pytest.raises(BoardOperationInProgressError):
                async with guard.hold("b1"):
                    pass

    @pytest.mark.asyncio
    async def test_lock_dropped_once_board_is_idle(self) -> None:
        guard = BoardOperationGuard()

        for board_id in ("b1", "b2", "b3"):
            async with guard.hold(board_id):
                assert guard.tracked_boards == 1

        assert guard.tracked_boards == 0

    @pytest.mark.asyncio
    async def test_lock_kept_while_an_operation_waits(self) -> None:
        guard = BoardOperationGuard(lock_timeout_seconds=1.0)
        entered = asyncio.Event()

        async def waiter() -> None:
            async with guard.hold("b1"):
                entered.set()

        async with guard.hold("b1"):
            task = asyncio.create_task(waiter())
            await asyncio.sleep(0.01)
            assert guard.tracked_boards == 1

        await asyncio.wait_for(task, timeout=1.0)
        assert entered.is_set()
        assert guard.tracked_boards == 0

    @pytest.mark.asyncio
    async def test_rejected_operation_leaves_holder_lock_in_place(self) -> None:
        guard = BoardOperationGuard()

        async with guard.hold("b1"):
            with pytest.raises(BoardOperationInProgressError):
                async with guard.hold("b1"):
                    pass
            assert guard.is_busy("b1")

        assert guard.tracked_boards == 0

    def test_negative_timeout_rejected(self) -> None:
        with pytest.raises(ValueError):
            BoardOperationGuard(lock_timeout_seconds=-1)
