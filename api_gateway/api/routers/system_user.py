# This file defines the system user CRUD endpoints.
# It exists so REST clients can create, list, read, update, and delete system users held by the user service.
# The system user service is named `UsService` on the backend; the routes keep the `User` spelling.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from api_gateway.api.dependencies import get_system_user_service, require_api_key
from api_gateway.api.error_handlers import APIError
from api_gateway.api.pagination import parse_list_params
from api_gateway.api.schemas.common import ERROR_RESPONSES, EmptyResponse
from api_gateway.api.schemas.entity_schemas import (
    CreateSystemUser,
    GetListSystemUserResponse,
    SystemUser,
    UpdateSystemUser,
)
from api_gateway.api.services.entity_service import EntityService

router = APIRouter(
    tags=["system user"],
    dependencies=[Depends(require_api_key)],
    responses=ERROR_RESPONSES,
)
SystemUserServiceDep = Annotated[EntityService, Depends(get_system_user_service)]


@router.post(
    "/CreateUser",
    response_model=SystemUser,
    response_model_exclude_none=True,
    summary="Create system user",
)
async def create_system_user(
    request: Request,
    body: CreateSystemUser,
    service: SystemUserServiceDep,
) -> dict[str, object]:
    return await service.create(request, body.model_dump(exclude_none=True))


@router.get(
    "/GetListUser",
    response_model=GetListSystemUserResponse,
    response_model_exclude_none=True,
    summary="Get list system user",
)
async def get_list_system_user(
    request: Request,
    service: SystemUserServiceDep,
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
    "/GetByIdUser/{id}",
    response_model=SystemUser,
    response_model_exclude_none=True,
    summary="Get a single system user by ID",
)
async def get_system_user_by_id(
    id: str,
    request: Request,
    service: SystemUserServiceDep,
) -> dict[str, object]:
    return await service.get_by_id(request, id)


@router.put(
    "/UpdateUser/{id}",
    response_model=SystemUser,
    response_model_exclude_none=True,
    summary="Update a system user by ID",
)
async def update_system_user(
    id: str,
    request: Request,
    body: UpdateSystemUser,
    service: SystemUserServiceDep,
) -> dict[str, object]:
    return await service.update(request, id, body.model_dump(exclude_none=True))


@router.delete(
    "/DeleteUser/{id}",
    response_model=EmptyResponse,
    summary="Delete a system user by ID",
)
async def delete_system_user(
    id: str,
    request: Request,
    service: SystemUserServiceDep,
) -> dict[str, object]:
    return await service.delete(request, id)
