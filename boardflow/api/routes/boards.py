"""Board alignment, sync, and move API routes.

Board endpoints report alignment, regenerate and sync columns, and
route drops. Project endpoints validate and execute status changes
against the project's workflow.

Errors are returned as RFC 7807 problem details:
- 409: workflow not configured, or a column operation already running
- 404: column not found
- 503: repository unavailable or partial regeneration
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from boardflow.api.dependencies.board import (
    get_board_alignment_service,
    get_board_sync_service,
    get_column_configuration_service,
    get_drop_router,
    get_transition_validation_service,
)
from boardflow.api.models.board import (
    AlignmentReportResponse,
    BoardErrorResponse,
    DropRequest,
    MoveOutcomeResponse,
    MoveValidationRequest,
    MoveValidationResponse,
    ProjectRegenerationResponse,
    RegenerateRequest,
    RegenerationResponse,
    StatusListResponse,
    StatusResponse,
    StatusTransitionInfoResponse,
    SyncRequest,
    SyncResponse,
    TransitionInfoListResponse,
    TransitionRequest,
)
from boardflow.api.routes.errors import to_http_error
from boardflow.application.services import (
    BoardAlignmentService,
    BoardSyncService,
    ColumnConfigurationService,
    DropRouter,
    TransitionValidationService,
)
from boardflow.domain.errors import ColumnNotFoundError
from boardflow.domain.exceptions import BoardFlowError

router = APIRouter(prefix="/v1", tags=["boards"])

_ERROR_RESPONSES = {
    404: {"model": BoardErrorResponse, "description": "Column not found"},
    409: {"model": BoardErrorResponse, "description": "Workflow not configured or board busy"},
    503: {"model": BoardErrorResponse, "description": "Repository unavailable"},
}


@router.get(
    "/boards/{board_id}/alignment",
    response_model=AlignmentReportResponse,
    responses={503: _ERROR_RESPONSES[503]},
    summary="Report board alignment",
    description=(
        "Report columns that no workflow transition enters or leaves, and "
        "workflow statuses that are on no column."
    ),
)
async def get_alignment(
    board_id: str,
    request: Request,
    project_id: str = Query(..., min_length=1),
    service: BoardAlignmentService = Depends(get_board_alignment_service),
) -> AlignmentReportResponse:
    try:
        report = await service.report(board_id, project_id)
    except BoardFlowError as exc:
        raise to_http_error(request, exc) from exc
    return AlignmentReportResponse.from_domain(report)


@router.post(
    "/boards/{board_id}/regenerate",
    response_model=RegenerationResponse,
    responses={409: _ERROR_RESPONSES[409], 503: _ERROR_RESPONSES[503]},
    summary="Rebuild board columns from the workflow",
)
async def regenerate_board(
    board_id: str,
    body: RegenerateRequest,
    request: Request,
    service: BoardSyncService = Depends(get_board_sync_service),
) -> RegenerationResponse:
    """Replace every column with one column per workflow status."""
    try:
        result = await service.regenerate(
            board_id, body.project_id, preserve_wip_limits=body.preserve_wip_limits
        )
    except BoardFlowError as exc:
        raise to_http_error(request, exc) from exc
    return RegenerationResponse(
        columns_created=result.columns_created,
        columns_removed=result.columns_removed,
    )


@router.post(
    "/boards/{board_id}/sync",
    response_model=SyncResponse,
    responses={409: _ERROR_RESPONSES[409], 503: _ERROR_RESPONSES[503]},
    summary="Add columns for unmapped workflow statuses",
)
async def sync_board(
    board_id: str,
    body: SyncRequest,
    request: Request,
    service: BoardSyncService = Depends(get_board_sync_service),
) -> SyncResponse:
    try:
        result = await service.sync(board_id, body.project_id, remove_orphans=body.remove_orphans)
    except BoardFlowError as exc:
        raise to_http_error(request, exc) from exc
    return SyncResponse(added=result.added, removed=result.removed)


@router.post(
    "/boards/{board_id}/drops",
    response_model=MoveOutcomeResponse,
    responses={404: _ERROR_RESPONSES[404], 503: _ERROR_RESPONSES[503]},
    summary="Drop a work item on a column",
    description=(
        "Resolve the target status of the column, validate the move against "
        "the workflow, and commit it. A rejected move returns success=false "
        "with the reason and leaves the item unchanged."
    ),
)
async def drop_on_column(
    board_id: str,
    body: DropRequest,
    request: Request,
    router_service: DropRouter = Depends(get_drop_router),
    columns: ColumnConfigurationService = Depends(get_column_configuration_service),
) -> MoveOutcomeResponse:
    try:
        board_columns = await columns.list_columns(board_id)
        column = next((c for c in board_columns if c.id == body.column_id), None)
        if column is None:
            raise ColumnNotFoundError(body.column_id)
        outcome = await router_service.drop(
            body.issue_id, body.project_id, column, zone_status_id=body.zone_status_id
        )
    except BoardFlowError as exc:
        raise to_http_error(request, exc) from exc
    return MoveOutcomeResponse.from_domain(outcome)


@router.post(
    "/projects/{project_id}/boards/regenerate",
    response_model=ProjectRegenerationResponse,
    responses={409: _ERROR_RESPONSES[409], 503: _ERROR_RESPONSES[503]},
    summary="Rebuild every board of a project",
)
async def regenerate_project_boards(
    project_id: str,
    request: Request,
    service: BoardSyncService = Depends(get_board_sync_service),
) -> ProjectRegenerationResponse:
    """Regenerate all boards after a workflow is published."""
    try:
        updated = await service.regenerate_project_boards(project_id)
    except BoardFlowError as exc:
        raise to_http_error(request, exc) from exc
    return ProjectRegenerationResponse(boards_updated=updated)


@router.get(
    "/projects/{project_id}/transitions",
    response_model=TransitionInfoListResponse,
    responses={409: _ERROR_RESPONSES[409], 503: _ERROR_RESPONSES[503]},
    summary="List direct transitions per workflow status",
)
async def get_transition_info(
    project_id: str,
    request: Request,
    service: BoardAlignmentService = Depends(get_board_alignment_service),
) -> TransitionInfoListResponse:
    try:
        info = await service.transition_info(project_id)
    except BoardFlowError as exc:
        raise to_http_error(request, exc) from exc
    return TransitionInfoListResponse(
        statuses=[StatusTransitionInfoResponse.from_domain(i) for i in info.values()]
    )


@router.post(
    "/projects/{project_id}/moves/validate",
    response_model=MoveValidationResponse,
    summary="Validate a status change",
    description=(
        "Check a status change against the project's workflow. Fails closed: "
        "when the workflow cannot be loaded the move is reported invalid."
    ),
)
async def validate_move(
    project_id: str,
    body: MoveValidationRequest,
    service: TransitionValidationService = Depends(get_transition_validation_service),
) -> MoveValidationResponse:
    validation = await service.validate_move(project_id, body.from_status_id, body.to_status_id)
    return MoveValidationResponse.from_domain(validation)


@router.get(
    "/projects/{project_id}/statuses/{status_id}/targets",
    response_model=StatusListResponse,
    responses={409: _ERROR_RESPONSES[409], 503: _ERROR_RESPONSES[503]},
    summary="List statuses reachable in one transition",
)
async def get_available_targets(
    project_id: str,
    status_id: str,
    request: Request,
    service: TransitionValidationService = Depends(get_transition_validation_service),
) -> StatusListResponse:
    try:
        targets = await service.available_targets(project_id, status_id)
    except BoardFlowError as exc:
        raise to_http_error(request, exc) from exc
    return StatusListResponse(statuses=[StatusResponse.from_domain(s) for s in targets])


@router.post(
    "/projects/{project_id}/issues/{issue_id}/transition",
    response_model=MoveOutcomeResponse,
    summary="Validate and commit a work item status change",
)
async def execute_transition(
    project_id: str,
    issue_id: str,
    body: TransitionRequest,
    service: TransitionValidationService = Depends(get_transition_validation_service),
) -> MoveOutcomeResponse:
    outcome = await service.execute_transition(issue_id, project_id, body.to_status_id)
    return MoveOutcomeResponse.from_domain(outcome)
