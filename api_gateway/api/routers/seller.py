# This file defines the seller CRUD endpoints.
# It exists so REST clients can create, list, read, update, and delete sellers held by the user service.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from api_gateway.api.dependencies import get_seller_service, require_api_key
from api_gateway.api.error_handlers import APIError
from api_gateway.api.pagination import parse_list_params
from api_gateway.api.schemas.common import ERROR_RESPONSES, EmptyResponse
from api_gateway.api.schemas.entity_schemas import (
    CreateSeller,
    GetListSellerResponse,
    Seller,
    UpdateSeller,
)
from api_gateway.api.services.entity_service import EntityService

router = APIRouter(
    tags=["seller"],
    dependencies=[Depends(require_api_key)],
    responses=ERROR_RESPONSES,
)
SellerServiceDep = Annotated[EntityService, Depends(get_seller_service)]


@router.post(
    "/CreateSeller",
    response_model=Seller,
    response_model_exclude_none=True,
    summary="Create seller",
)
async def create_seller(
    request: Request,
    body: CreateSeller,
    service: SellerServiceDep,
) -> dict[str, object]:
    return await service.create(request, body.model_dump(exclude_none=True))


@router.get(
    "/GetListSeller",
    response_model=GetListSellerResponse,
    response_model_exclude_none=True,
    summary="Get list seller",
)
async def get_list_seller(
    request: Request,
    service: SellerServiceDep,
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
    "/GetByIdSeller/{id}",
    response_model=Seller,
    response_model_exclude_none=True,
    summary="Get a single seller by ID",
)
async def get_seller_by_id(
    id: str,
    request: Request,
    service: SellerServiceDep,
) -> dict[str, object]:
    return await service.get_by_id(request, id)


@router.put(
    "/UpdateSeller/{id}",
    response_model=Seller,
    response_model_exclude_none=True,
    summary="Update a seller by ID",
)
async def update_seller(
    id: str,
    request: Request,
    body: UpdateSeller,
    service: SellerServiceDep,
) -> dict[str, object]:
    return await service.update(request, id, body.model_dump(exclude_none=True))


@router.delete(
    "/DeleteSeller/{id}",
    response_model=EmptyResponse,
    summary="Delete a seller by ID",
)
async def delete_seller(
    id: str,
    request: Request,
    service: SellerServiceDep,
) -> dict[str, object]:
    return await service.delete(request, id)
