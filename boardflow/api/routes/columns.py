"""Manual column configuration API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from boardflow.api.dependencies.board import (
    get_column_configuration_service,
    get_workflow_graph_loader,
)
from boardflow.api.models.board import (
    BoardErrorResponse,
    ColumnResponse,
    ColumnsListResponse,
    ColumnStatusRequest,
    CreateColumnRequest,
    DefaultColumnsRequest,
    DefaultColumnsResponse,
    MoveColumnRequest,
    MoveColumnResponse,
    RenameColumnRequest,
    WipLimitsRequest,
)
from boardflow.api.routes.errors import to_http_error
from boardflow.application.services import ColumnConfigurationService, WorkflowGraphLoader
from boardflow.domain.exceptions import BoardFlowError

router = APIRouter(prefix="/v1/boards/{board_id}/columns", tags=["columns"])

_ERROR_RESPONSES = {
    404: {"model": BoardErrorResponse, "description": "Column not found"},
    409: {"model": BoardErrorResponse, "description": "Column not empty or board busy"},
    422: {"model": BoardErrorResponse, "description": "Invalid column configuration"},
    503: {"model": BoardErrorResponse, "description": "Repository unavailable"},
}


@router.get("", response_model=ColumnsListResponse, summary="List board columns")
async def list_columns(
    board_id: str,
    request: Request,
    service: ColumnConfigurationService = Depends(get_column_configuration_service),
) -> ColumnsListResponse:
    try:
        columns = await service.list_columns(board_id)
    except BoardFlowError as exc:
        raise to_http_error(request, exc) from exc
    return ColumnsListResponse(columns=[ColumnResponse.from_domain(c) for c in columns])


@router.post(
    "",
    response_model=ColumnResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
    summary="Append an empty column",
)
async def add_column(
    board_id: str,
    body: CreateColumnRequest,
    request: Request,
    service: ColumnConfigurationService = Depends(get_column_configuration_service),
) -> ColumnResponse:
    try:
        column = await service.add_column(board_id, body.name)
    except BoardFlowError as exc:
        raise to_http_error(request, exc) from exc
    return ColumnResponse.from_domain(column)


@router.post(
    "/defaults",
    response_model=DefaultColumnsResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
    summary="Lay out an empty board from a template",
)
async def create_default_columns(
    board_id: str,
    body: DefaultColumnsRequest,
    request: Request,
    service: ColumnConfigurationService = Depends(get_column_configuration_service),
    graph_loader: WorkflowGraphLoader = Depends(get_workflow_graph_loader),
) -> DefaultColumnsResponse:
    """Create template columns filled with the project's workflow statuses."""
    try:
        graph = await graph_loader.resolve(body.project_id)
        column_ids = await service.create_default_columns(
            board_id, graph.statuses, body.template
        )
    except BoardFlowError as exc:
        raise to_http_error(request, exc) from exc
    return DefaultColumnsResponse(column_ids=column_ids)


@router.patch(
    "/{column_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_ERROR_RESPONSES,
    summary="Rename a column",
)
async def rename_column(
    board_id: str,
    column_id: str,
    body: RenameColumnRequest,
    request: Request,
    service: ColumnConfigurationService = Depends(get_column_configuration_service),
) -> None:
    try:
        await service.rename_column(board_id, column_id, body.name)
    except BoardFlowError as exc:
        raise to_http_error(request, exc) from exc


@router.delete(
    "/{column_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_ERROR_RESPONSES,
    summary="Delete an empty column",
)
async def delete_column(
    board_id: str,
    column_id: str,
    request: Request,
    service: ColumnConfigurationService = Depends(get_column_configuration_service),
) -> None:
    try:
        await service.delete_column(board_id, column_id)
    except BoardFlowError as exc:
        raise to_http_error(request, exc) from exc


@router.post(
    "/{column_id}/move",
    response_model=MoveColumnResponse,
    responses=_ERROR_RESPONSES,
    summary="Move a column one place up or down",
)
async def move_column(
    board_id: str,
    column_id: str,
    body: MoveColumnRequest,
    request: Request,
    service: ColumnConfigurationService = Depends(get_column_configuration_service),
) -> MoveColumnResponse:
    try:
        moved = await service.move_column(board_id, column_id, body.direction)
    except BoardFlowError as exc:
        raise to_http_error(request, exc) from exc
    return MoveColumnResponse(moved=moved)


@router.put(
    "/{column_id}/wip-limits",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_ERROR_RESPONSES,
    summary="Set or clear a column's WIP limits",
)
async def set_wip_limits(
    board_id: str,
    column_id: str,
    body: WipLimitsRequest,
    request: Request,
    service: ColumnConfigurationService = Depends(get_column_configuration_service),
) -> None:
    try:
        await service.set_wip_limits(board_id, column_id, body.min_issues, body.max_issues)
    except BoardFlowError as exc:
        raise to_http_error(request, exc) from exc


@router.post(
    "/{column_id}/statuses",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_ERROR_RESPONSES,
    summary="Map a status to a column",
)
async def add_status_to_column(
    board_id: str,
    column_id: str,
    body: ColumnStatusRequest,
    request: Request,
    service: ColumnConfigurationService = Depends(get_column_configuration_service),
) -> None:
    try:
        await service.add_status_to_column(board_id, column_id, body.status_id)
    except BoardFlowError as exc:
        raise to_http_error(request, exc) from exc


@router.delete(
    "/{column_id}/statuses/{status_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_ERROR_RESPONSES,
    summary="Unmap a status from a column",
)
async def remove_status_from_column(
    board_id: str,
    column_id: str,
    status_id: str,
    request: Request,
    service: ColumnConfigurationService = Depends(get_column_configuration_service),
) -> None:
    try:
        await service.remove_status_from_column(board_id, column_id, status_id)
    except BoardFlowError as exc:
        raise to_http_error(request, exc) from exc
