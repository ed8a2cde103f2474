"""Board column errors."""

from __future__ import annotations

from boardflow.domain.exceptions import BoardFlowError


class BoardOperationInProgressError(BoardFlowError):
    """Raised when a regenerate/sync is already running for a board.

    Two overlapping operations on one board can duplicate columns or
    observe a transiently empty partition, so only one is admitted.

    Attributes:
        board_id: The busy board.
    """

    def __init__(self, board_id: str) -> None:
        self.board_id = board_id
        super().__init__(
            f"A column operation is already in progress for board {board_id}"
        )


class ColumnNotFoundError(BoardFlowError):
    """Raised when a column id does not exist on the board."""

    def __init__(self, column_id: str) -> None:
        self.column_id = column_id
        super().__init__(f"Column {column_id} not found")


class ColumnNotEmptyError(BoardFlowError):
    """Raised when deleting a column that still has statuses mapped.

    Statuses must be removed from a column first so that no status is
    silently dropped from the board.
    """

    def __init__(self, column_id: str, status_count: int) -> None:
        self.column_id = column_id
        self.status_count = status_count
        super().__init__(
            f"Column {column_id} still has {status_count} mapped status(es); "
            "remove all statuses from the column first"
        )


class InvalidColumnConfigurationError(BoardFlowError):
    """Raised when a manual column edit has invalid input."""

    pass
