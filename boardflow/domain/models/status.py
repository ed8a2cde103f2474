"""Work item status domain model.

Statuses are owned by the workflow subsystem. BoardFlow only reads
them, so the model is frozen.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class StatusCategory(StrEnum):
    """Coarse lifecycle bucket a status belongs to."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


@dataclass(frozen=True, eq=True)
class Status:
    """A work item status.

    Attributes:
        id: Unique status identifier.
        name: Display name (also the name of a regenerated column).
        color: Display color, opaque to this package.
        category: Lifecycle category of the status.
    """

    id: str
    name: str
    category: StatusCategory
    color: str = ""

    def __post_init__(self) -> None:
        """Validate status fields."""
        if not self.id:
            raise ValueError("Status id must be non-empty")
        if not self.name:
            raise ValueError(f"Status {self.id} must have a name")

    @classmethod
    def unresolved(cls, status_id: str) -> Status:
        """Stand-in for a status id that work items use but no row describes.

        Named after the id so a regenerated board still shows a column
        for those items.
        """
        return cls(id=status_id, name=status_id, category=StatusCategory.IN_PROGRESS)
