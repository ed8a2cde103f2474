"""Repository boundary errors.

Raised by repository adapters (and by stubs under failure injection)
when the backing store cannot complete a call.
"""

from __future__ import annotations

from boardflow.domain.exceptions import BoardFlowError


class RepositoryError(BoardFlowError):
    """Raised when a repository call fails (transient I/O).

    Surfaced to the caller as-is. Never converted into a default value,
    so that a failed read cannot be mistaken for an empty result.
    """

    pass


class DuplicateColumnMappingError(RepositoryError):
    """Raised when a (board, status) mapping already exists.

    Stores that enforce a uniqueness constraint on column status
    mappings raise this when two concurrent syncs race to create a
    column for the same status. Sync treats it as already satisfied.

    Attributes:
        board_id: Board the mapping belongs to.
        status_id: Status that is already mapped.
    """

    def __init__(self, board_id: str, status_id: str) -> None:
        self.board_id = board_id
        self.status_id = status_id
        super().__init__(
            f"Status {status_id} is already mapped to a column on board {board_id}"
        )


class PartialRegenerationError(RepositoryError):
    """Raised when regeneration failed after the board was modified.

    The board may be left with a partial column set. The counts record
    how far the apply phase got so the condition can be reported
    instead of hidden.

    Attributes:
        board_id: Board being regenerated.
        columns_removed: Columns deleted before the failure.
        columns_created: Columns created before the failure.
    """

    def __init__(
        self,
        board_id: str,
        columns_removed: int,
        columns_created: int,
        cause: str,
    ) -> None:
        self.board_id = board_id
        self.columns_removed = columns_removed
        self.columns_created = columns_created
        super().__init__(
            f"Regeneration of board {board_id} partially applied "
            f"({columns_removed} removed, {columns_created} created): {cause}"
        )


class InvalidRecordError(BoardFlowError):
    """Raised when a row returned by a repository fails validation.

    Attributes:
        record_type: Kind of record being parsed (e.g. "workflow_step").
    """

    def __init__(self, record_type: str, detail: str) -> None:
        self.record_type = record_type
        super().__init__(f"Invalid {record_type} record: {detail}")
