"""Row validation DTOs for the repository boundary."""

from boardflow.application.dtos.rows import (
    ColumnRow,
    SchemeMappingRow,
    StatusRow,
    WorkflowRow,
    WorkflowStepRow,
    WorkflowTransitionRow,
    parse_row,
    parse_rows,
)

__all__: list[str] = [
    "ColumnRow",
    "SchemeMappingRow",
    "StatusRow",
    "WorkflowRow",
    "WorkflowStepRow",
    "WorkflowTransitionRow",
    "parse_row",
    "parse_rows",
]
