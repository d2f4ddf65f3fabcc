# This file defines the shop CRUD endpoints.
# It exists so REST clients can create, list, read, update, and delete shops held by the user service.
# Shops reference their branch through `branch_id`; the gateway forwards it without checking it exists.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from api_gateway.api.dependencies import get_shop_service, require_api_key
from api_gateway.api.error_handlers import APIError
from api_gateway.api.pagination import parse_list_params
from api_gateway.api.schemas.common import ERROR_RESPONSES, EmptyResponse
from api_gateway.api.schemas.entity_schemas import (
    CreateShop,
    GetListShopResponse,
    Shop,
    UpdateShop,
)
from api_gateway.api.services.entity_service import EntityService

router = APIRouter(
    tags=["shop"],
    dependencies=[Depends(require_api_key)],
    responses=ERROR_RESPONSES,
)
ShopServiceDep = Annotated[EntityService, Depends(get_shop_service)]


@router.post(
    "/CreateShop",
    response_model=Shop,
    response_model_exclude_none=True,
    summary="Create shop",
)
async def create_shop(
    request: Request,
    body: CreateShop,
    service: ShopServiceDep,
) -> dict[str, object]:
    return await service.create(request, body.model_dump(exclude_none=True))


@router.get(
    "/GetListShop",
    response_model=GetListShopResponse,
    response_model_exclude_none=True,
    summary="Get list shop",
)
async def get_list_shop(
    request: Request,
    service: ShopServiceDep,
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
    "/GetByIdShop/{id}",
    response_model=Shop,
    response_model_exclude_none=True,
    summary="Get a single shop by ID",
)
async def get_shop_by_id(
    id: str,
    request: Request,
    service: ShopServiceDep,
) -> dict[str, object]:
    return await service.get_by_id(request, id)


@router.put(
    "/UpdateShop/{id}",
    response_model=Shop,
    response_model_exclude_none=True,
    summary="Update a shop by ID",
)
async def update_shop(
    id: str,
    request: Request,
    body: UpdateShop,
    service: ShopServiceDep,
) -> dict[str, object]:
    return await service.update(request, id, body.model_dump(exclude_none=True))


@router.delete(
    "/DeleteShop/{id}",
    response_model=EmptyResponse,
    summary="Delete a shop by ID",
)
async def delete_shop(
    id: str,
    request: Request,
    service: ShopServiceDep,
) -> dict[str, object]:
    return await service.delete(request, id)
