"""Domain errors for BoardFlow.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from BoardFlowError.
"""

from boardflow.domain.errors.board import (
    BoardOperationInProgressError,
    ColumnNotEmptyError,
    ColumnNotFoundError,
    InvalidColumnConfigurationError,
)
from boardflow.domain.errors.repository import (
    DuplicateColumnMappingError,
    InvalidRecordError,
    PartialRegenerationError,
    RepositoryError,
)
from boardflow.domain.errors.workflow import (
    WorkflowNotConfiguredError,
    WorkflowResolutionStage,
)

__all__: list[str] = [
    "BoardOperationInProgressError",
    "ColumnNotEmptyError",
    "ColumnNotFoundError",
    "DuplicateColumnMappingError",
    "InvalidColumnConfigurationError",
    "InvalidRecordError",
    "PartialRegenerationError",
    "RepositoryError",
    "WorkflowNotConfiguredError",
    "WorkflowResolutionStage",
]
