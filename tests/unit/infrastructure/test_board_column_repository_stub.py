"""Unit tests for BoardColumnRepositoryStub.

The stub stands in for the database in service tests, so its
transaction and constraint behaviour must match the real store.
"""

import pytest

from boardflow.domain.errors import (
    ColumnNotFoundError,
    DuplicateColumnMappingError,
    RepositoryError,
)
from boardflow.infrastructure.stubs import BoardColumnRepositoryStub


@pytest.fixture
def stub() -> BoardColumnRepositoryStub:
    stub = BoardColumnRepositoryStub()
    stub.add_board("board-1", "proj-1")
    return stub


class TestColumns:
    """Basic column storage."""

    @pytest.mark.asyncio
    async def test_create_and_list_ordered_by_position(
        self, stub: BoardColumnRepositoryStub
    ) -> None:
        second = await stub.create_column("board-1", "Done", 1, max_issues=3)
        first = await stub.create_column("board-1", "To Do", 0)
        await stub.add_column_status(first, "todo")

        rows = await stub.list_columns("board-1")

        assert [r["id"] for r in rows] == [first, second]
        assert rows[0]["status_ids"] == ["todo"]
        assert rows[1]["max_issues"] == 3

    @pytest.mark.asyncio
    async def test_list_board_ids(self, stub: BoardColumnRepositoryStub) -> None:
        stub.add_board("board-2", "proj-1")
        stub.add_board("board-3", "proj-2")

        assert await stub.list_board_ids("proj-1") == ["board-1", "board-2"]

    @pytest.mark.asyncio
    async def test_update_unknown_field_rejected(self, stub: BoardColumnRepositoryStub) -> None:
        column_id = stub.seed_column("board-1", "To Do", 0)

        with pytest.raises(ValueError):
            await stub.update_column(column_id, {"board_id": "board-2"})

    @pytest.mark.asyncio
    async def test_update_missing_column(self, stub: BoardColumnRepositoryStub) -> None:
        with pytest.raises(ColumnNotFoundError):
            await stub.update_column("missing", {"name": "x"})

    @pytest.mark.asyncio
    async def test_delete_board_columns_counts(self, stub: BoardColumnRepositoryStub) -> None:
        stub.seed_column("board-1", "A", 0)
        stub.seed_column("board-1", "B", 1)
        stub.seed_column("board-2", "C", 0)

        assert await stub.delete_board_columns("board-1") == 2
        assert stub.columns_for("board-1") == []
        assert len(stub.columns_for("board-2")) == 1


class TestUniqueMapping:
    """One column per (board, status)."""

    @pytest.mark.asyncio
    async def test_status_twice_on_board_rejected(self, stub: BoardColumnRepositoryStub) -> None:
        stub.seed_column("board-1", "A", 0, status_ids=("todo",))
        other = stub.seed_column("board-1", "B", 1)

        with pytest.raises(DuplicateColumnMappingError) as exc_info:
            await stub.add_column_status(other, "todo")

        assert exc_info.value.status_id == "todo"

    @pytest.mark.asyncio
    async def test_same_status_on_other_board_allowed(
        self, stub: BoardColumnRepositoryStub
    ) -> None:
        stub.seed_column("board-1", "A", 0, status_ids=("todo",))
        column_id = stub.seed_column("board-2", "A", 0)

        await stub.add_column_status(column_id, "todo")

        assert stub.columns_for("board-2")[0]["status_ids"] == ["todo"]

    @pytest.mark.asyncio
    async def test_constraint_can_be_disabled(self) -> None:
        stub = BoardColumnRepositoryStub(enforce_unique_mapping=False)
        stub.seed_column("board-1", "A", 0, status_ids=("todo",))
        other = stub.seed_column("board-1", "B", 1)

        await stub.add_column_status(other, "todo")


class TestTransactions:
    """Snapshot-based transactions."""

    @pytest.mark.asyncio
    async def test_rollback_on_error(self, stub: BoardColumnRepositoryStub) -> None:
        stub.seed_column("board-1", "Keep", 0, status_ids=("todo",))

        with pytest.raises(RepositoryError):
            async with stub.transaction():
                await stub.delete_board_columns("board-1")
                raise RepositoryError("boom")

        assert [c["name"] for c in stub.columns_for("board-1")] == ["Keep"]
        assert stub.transactions_started == 1

    @pytest.mark.asyncio
    async def test_non_atomic_keeps_partial_writes(self) -> None:
        stub = BoardColumnRepositoryStub(atomic=False)
        stub.seed_column("board-1", "Gone", 0)

        with pytest.raises(RepositoryError):
            async with stub.transaction():
                await stub.delete_board_columns("board-1")
                raise RepositoryError("boom")

        assert stub.columns_for("board-1") == []


class TestFailureInjection:
    """fail_on, set_should_fail and clear."""

    @pytest.mark.asyncio
    async def test_fail_on_after_successful_calls(
        self, stub: BoardColumnRepositoryStub
    ) -> None:
        stub.fail_on("create_column", after=1)

        await stub.create_column("board-1", "A", 0)
        with pytest.raises(RepositoryError, match="create_column"):
            await stub.create_column("board-1", "B", 1)

    @pytest.mark.asyncio
    async def test_should_fail_and_clear(self, stub: BoardColumnRepositoryStub) -> None:
        stub.seed_column("board-1", "A", 0)
        stub.set_should_fail(True)

        with pytest.raises(RepositoryError):
            await stub.list_columns("board-1")

        stub.clear()

        assert await stub.list_columns("board-1") == []
        assert await stub.list_board_ids("proj-1") == []
