"""Pure domain services for BoardFlow.

Functions in this package take fully loaded domain models and never
perform I/O, so they are total on well-formed input.
"""

from boardflow.domain.services.alignment_analyzer import (
    analyze,
    status_transition_info,
    unmapped_statuses,
)
from boardflow.domain.services.column_planner import (
    BoardTemplate,
    combined_statuses,
    plan_default_columns,
    plan_regeneration,
    plan_sync,
    wip_limits_by_name,
)
from boardflow.domain.services.transition_validator import (
    available_targets,
    validate_move,
)

__all__: list[str] = [
    "BoardTemplate",
    "analyze",
    "available_targets",
    "combined_statuses",
    "plan_default_columns",
    "plan_regeneration",
    "plan_sync",
    "status_transition_info",
    "unmapped_statuses",
    "validate_move",
    "wip_limits_by_name",
]
