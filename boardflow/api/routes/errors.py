"""Mapping of domain errors to RFC 7807 HTTP errors."""

from __future__ import annotations

from fastapi import HTTPException, Request

from boardflow.domain.errors import (
    BoardOperationInProgressError,
    ColumnNotEmptyError,
    ColumnNotFoundError,
    InvalidColumnConfigurationError,
    InvalidRecordError,
    PartialRegenerationError,
    RepositoryError,
    WorkflowNotConfiguredError,
)
from boardflow.domain.exceptions import BoardFlowError

ERROR_TYPE_BASE = "https://boardflow.dev/errors"

# (error class, status, type slug, title); first match wins
_ERROR_MAP: tuple[tuple[type[BoardFlowError], int, str, str], ...] = (
    (WorkflowNotConfiguredError, 409, "workflow-not-configured", "Workflow Not Configured"),
    (BoardOperationInProgressError, 409, "board-operation-in-progress", "Board Busy"),
    (ColumnNotFoundError, 404, "column-not-found", "Column Not Found"),
    (ColumnNotEmptyError, 409, "column-not-empty", "Column Not Empty"),
    (InvalidColumnConfigurationError, 422, "invalid-column-configuration", "Invalid Column Configuration"),
    (PartialRegenerationError, 503, "partial-regeneration", "Board Partially Regenerated"),
    (RepositoryError, 503, "repository-unavailable", "Repository Unavailable"),
    (InvalidRecordError, 502, "invalid-record", "Invalid Stored Record"),
)


def problem(request: Request, status: int, slug: str, title: str, detail: str) -> HTTPException:
    """Build an HTTPException carrying an RFC 7807 problem body."""
    return HTTPException(
        status_code=status,
        detail={
            "type": f"{ERROR_TYPE_BASE}/{slug}",
            "title": title,
            "status": status,
            "detail": detail,
            "instance": str(request.url),
        },
    )


def to_http_error(request: Request, exc: BoardFlowError) -> HTTPException:
    """Map a domain error to its HTTP problem.

    WorkflowNotConfiguredError uses its stage guidance as the detail.
    Unmapped errors become 500.
    """
    for error_type, status, slug, title in _ERROR_MAP:
        if isinstance(exc, error_type):
            detail = (
                exc.guidance if isinstance(exc, WorkflowNotConfiguredError) else str(exc)
            )
            return problem(request, status, slug, title, detail)
    return problem(request, 500, "internal-error", "Internal Error", str(exc))
