"""Unit tests for domain error types."""

from __future__ import annotations

import pytest

from boardflow.domain.errors import (
    BoardOperationInProgressError,
    ColumnNotEmptyError,
    DuplicateColumnMappingError,
    PartialRegenerationError,
    RepositoryError,
    WorkflowNotConfiguredError,
    WorkflowResolutionStage,
)
from boardflow.domain.exceptions import BoardFlowError


class TestWorkflowNotConfiguredError:
    @pytest.mark.parametrize("stage", list(WorkflowResolutionStage))
    def test_each_stage_has_distinct_guidance(self, stage: WorkflowResolutionStage) -> None:
        error = WorkflowNotConfiguredError("proj-1", stage)

        assert error.stage == stage
        assert error.guidance
        assert error.guidance in str(error)

    def test_guidance_differs_per_stage(self) -> None:
        guidance = {
            WorkflowNotConfiguredError("p", stage).guidance for stage in WorkflowResolutionStage
        }

        assert len(guidance) == len(WorkflowResolutionStage)


class TestErrorHierarchy:
    def test_all_errors_are_board_flow_errors(self) -> None:
        assert issubclass(WorkflowNotConfiguredError, BoardFlowError)
        assert issubclass(BoardOperationInProgressError, BoardFlowError)
        assert issubclass(ColumnNotEmptyError, BoardFlowError)

    def test_repository_error_family(self) -> None:
        assert issubclass(DuplicateColumnMappingError, RepositoryError)
        assert issubclass(PartialRegenerationError, RepositoryError)

    def test_partial_regeneration_records_progress(self) -> None:
        error = PartialRegenerationError("b", columns_removed=3, columns_created=1, cause="boom")

        assert error.columns_removed == 3
        assert error.columns_created == 1
        assert "boom" in str(error)
