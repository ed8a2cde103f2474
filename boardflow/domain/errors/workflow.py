"""Workflow resolution errors.

A project reaches its workflow through a chain of lookups
(project -> scheme -> mapping -> workflow -> steps). Any link in that
chain can be missing, and each missing link needs a different fix, so
the error records which stage came up empty.
"""

from __future__ import annotations

from enum import StrEnum

from boardflow.domain.exceptions import BoardFlowError


class WorkflowResolutionStage(StrEnum):
    """Stage of workflow resolution that yielded nothing."""

    SCHEME = "scheme"
    MAPPING = "mapping"
    WORKFLOW = "workflow"
    STEPS = "steps"


_STAGE_GUIDANCE: dict[WorkflowResolutionStage, str] = {
    WorkflowResolutionStage.SCHEME: (
        "No workflow scheme is assigned to this project. "
        "Assign a workflow scheme in the project settings."
    ),
    WorkflowResolutionStage.MAPPING: (
        "The project's workflow scheme does not map any workflow. "
        "Add a default workflow mapping to the scheme."
    ),
    WorkflowResolutionStage.WORKFLOW: (
        "The workflow referenced by the project's scheme no longer exists. "
        "Update the scheme mapping to point at an existing workflow."
    ),
    WorkflowResolutionStage.STEPS: (
        "The project's workflow has no steps. "
        "Add statuses to the workflow in the workflow designer."
    ),
}


class WorkflowNotConfiguredError(BoardFlowError):
    """Raised when a project's workflow cannot be resolved.

    Recoverable and never retried automatically: the caller surfaces
    the stage-specific guidance so a user can fix the configuration.

    Attributes:
        project_id: The project whose workflow was requested.
        stage: The resolution stage that produced no result.
    """

    def __init__(self, project_id: str, stage: WorkflowResolutionStage) -> None:
        self.project_id = project_id
        self.stage = stage
        super().__init__(
            f"Workflow not configured for project {project_id} "
            f"({stage.value}): {_STAGE_GUIDANCE[stage]}"
        )

    @property
    def guidance(self) -> str:
        """Return the user-facing fix for the missing stage."""
        return _STAGE_GUIDANCE[self.stage]
