"""Unit tests for Column and BoardColumnPartition."""

from __future__ import annotations

import pytest

from boardflow.domain.models.board_column import (
    WIP_WARNING_RATIO,
    BoardColumnPartition,
    Column,
    WipState,
)


class TestColumnValidation:
    """Tests for Column invariants."""

    def test_negative_position_rejected(self) -> None:
        with pytest.raises(ValueError, match="position"):
            Column(id="c", name="C", position=-1)

    def test_duplicate_status_rejected(self) -> None:
        with pytest.raises(ValueError, match="same status"):
            Column(id="c", name="C", position=0, status_ids=("a", "a"))

    def test_negative_limit_rejected(self) -> None:
        with pytest.raises(ValueError, match="max_issues"):
            Column(id="c", name="C", position=0, max_issues=-1)

    def test_min_above_max_rejected(self) -> None:
        with pytest.raises(ValueError):
            Column(id="c", name="C", position=0, min_issues=5, max_issues=2)

    def test_status_set_and_emptiness(self) -> None:
        column = Column(id="c", name="C", position=0, status_ids=("a", "b"))

        assert column.status_set == frozenset({"a", "b"})
        assert not column.is_empty
        assert Column(id="e", name="E", position=1).is_empty


class TestWipState:
    """Tests for Column.wip_state thresholds."""

    def test_no_limit_is_always_normal(self) -> None:
        column = Column(id="c", name="C", position=0)

        assert column.wip_state(1000) == WipState.NORMAL

    @pytest.mark.parametrize(
        ("count", "expected"),
        [
            (0, WipState.NORMAL),
            (7, WipState.NORMAL),
            (8, WipState.WARNING),
            (9, WipState.WARNING),
            (10, WipState.EXCEEDED),
            (12, WipState.EXCEEDED),
        ],
    )
    def test_thresholds(self, count: int, expected: WipState) -> None:
        """Warning starts at 80% of max_issues, exceeded at max_issues."""
        column = Column(id="c", name="C", position=0, max_issues=10)

        assert WIP_WARNING_RATIO == 0.8
        assert column.wip_state(count) == expected


class TestBoardColumnPartition:
    """Tests for partition position and identity invariants."""

    def test_from_columns_sorts_by_position(self) -> None:
        partition = BoardColumnPartition.from_columns(
            "b",
            [
                Column(id="y", name="Y", position=1),
                Column(id="x", name="X", position=0),
            ],
        )

        assert [c.id for c in partition.columns] == ["x", "y"]
        assert len(partition) == 2

    def test_gap_in_positions_rejected(self) -> None:
        with pytest.raises(ValueError):
            BoardColumnPartition.from_columns(
                "b",
                [Column(id="x", name="X", position=0), Column(id="y", name="Y", position=2)],
            )

    def test_duplicate_ids_rejected(self) -> None:
        with pytest.raises(ValueError):
            BoardColumnPartition.from_columns(
                "b",
                [Column(id="x", name="X", position=0), Column(id="x", name="X", position=1)],
            )

    def test_renumbered_closes_gaps(self) -> None:
        partition = BoardColumnPartition.renumbered(
            "b",
            [Column(id="y", name="Y", position=7), Column(id="x", name="X", position=3)],
        )

        assert [(c.id, c.position) for c in partition.columns] == [("x", 0), ("y", 1)]

    def test_status_lookups(self, basic_columns: list[Column]) -> None:
        partition = BoardColumnPartition.from_columns("b", basic_columns)

        assert partition.mapped_status_ids() == frozenset({"todo", "in_progress", "done"})
        assert partition.column_for_status("done").id == "col-done"
        assert partition.column_for_status("missing") is None
        assert partition.column("col-todo").name == "To Do"
