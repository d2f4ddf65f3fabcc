# This file defines the branch CRUD endpoints.
# It exists so REST clients can create, list, read, update, and delete branches held by the user service.
# Routes keep their historical casing because existing clients call them verbatim.
# Every handler delegates the RPC call and error mapping to the shared entity service.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from api_gateway.api.dependencies import get_branch_service, require_api_key
from api_gateway.api.error_handlers import APIError
from api_gateway.api.pagination import parse_list_params
from api_gateway.api.schemas.common import ERROR_RESPONSES, EmptyResponse
from api_gateway.api.schemas.entity_schemas import (
    Branch,
    CreateBranch,
    GetListBranchResponse,
    UpdateBranch,
)
from api_gateway.api.services.entity_service import EntityService

router = APIRouter(
    tags=["branch"],
    dependencies=[Depends(require_api_key)],
    responses=ERROR_RESPONSES,
)
BranchServiceDep = Annotated[EntityService, Depends(get_branch_service)]


@router.post(
    "/createBranch",
    response_model=Branch,
    response_model_exclude_none=True,
    summary="Create branch",
)
async def create_branch(
    request: Request,
    body: CreateBranch,
    service: BranchServiceDep,
) -> dict[str, object]:
    return await service.create(request, body.model_dump(exclude_none=True))


@router.get(
    "/GetListBranch",
    response_model=GetListBranchResponse,
    response_model_exclude_none=True,
    summary="Get list branch",
)
async def get_list_branch(
    request: Request,
    service: BranchServiceDep,
    search: str | None = Query(default=None),
    page: str | None = Query(default=None, description="1-based page number"),
    limit: str | None = Query(default=None, description="page size"),
) -> dict[str, object]:
    try:
        params = parse_list_params(search=search, page=page, limit=limit)
    except ValueError as exc:
        raise APIError(
            status_code=400,
            error_code="INVALID_QUERY_PARAM",
            message=str(exc),
        ) from exc

    return await service.get_list(request, params)


@router.get(
    "/getbyidbranch/{id}",
    response_model=Branch,
    response_model_exclude_none=True,
    summary="Get a single branch by ID",
)
async def get_branch_by_id(
    id: str,
    request: Request,
    service: BranchServiceDep,
) -> dict[str, object]:
    return await service.get_by_id(request, id)


@router.put(
    "/updateBranch/{id}",
    response_model=Branch,
    response_model_exclude_none=True,
    summary="Update a branch by ID",
)
async def update_branch(
    id: str,
    request: Request,
    body: UpdateBranch,
    service: BranchServiceDep,
) -> dict[str, object]:
    return await service.update(request, id, body.model_dump(exclude_none=True))


@router.delete(
    "/deleteBranch/{id}",
    response_model=EmptyResponse,
    summary="Delete a branch by ID",
)
async def delete_branch(
    id: str,
    request: Request,
    service: BranchServiceDep,
) -> dict[str, object]:
    return await service.delete(request, id)
