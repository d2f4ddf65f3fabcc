# This file defines the customer CRUD endpoints.
# It exists so REST clients can create, list, read, update, and delete customers held by the user service.
# Routes keep their historical casing because existing clients call them verbatim.
# Every handler delegates the RPC call and error mapping to the shared entity service.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from api_gateway.api.dependencies import get_customer_service, require_api_key
from api_gateway.api.error_handlers import APIError
from api_gateway.api.pagination import parse_list_params
from api_gateway.api.schemas.common import ERROR_RESPONSES, EmptyResponse
from api_gateway.api.schemas.entity_schemas import (
    CreateCustomer,
    Customer,
    GetListCustomerResponse,
    UpdateCustomer,
)
from api_gateway.api.services.entity_service import EntityService

router = APIRouter(
    tags=["customer"],
    dependencies=[Depends(require_api_key)],
    responses=ERROR_RESPONSES,
)
CustomerServiceDep = Annotated[EntityService, Depends(get_customer_service)]


@router.post(
    "/createCustomer",
    response_model=Customer,
    response_model_exclude_none=True,
    summary="Create customer",
)
async def create_customer(
    request: Request,
    body: CreateCustomer,
    service: CustomerServiceDep,
) -> dict[str, object]:
    return await service.create(request, body.model_dump(exclude_none=True))


@router.get(
    "/getlistcustomer",
    response_model=GetListCustomerResponse,
    response_model_exclude_none=True,
    summary="Get list customer",
)
async def get_list_customer(
    request: Request,
    service: CustomerServiceDep,
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
    "/getbyidcustomer/{id}",
    response_model=Customer,
    response_model_exclude_none=True,
    summary="Get a single customer by ID",
)
async def get_customer_by_id(
    id: str,
    request: Request,
    service: CustomerServiceDep,
) -> dict[str, object]:
    return await service.get_by_id(request, id)


@router.put(
    "/updateCustomer/{id}",
    response_model=Customer,
    response_model_exclude_none=True,
    summary="Update a customer by ID",
)
async def update_customer(
    id: str,
    request: Request,
    body: UpdateCustomer,
    service: CustomerServiceDep,
) -> dict[str, object]:
    return await service.update(request, id, body.model_dump(exclude_none=True))


@router.delete(
    "/deleteCustomer/{id}",
    response_model=EmptyResponse,
    summary="Delete a customer by ID",
)
async def delete_customer(
    id: str,
    request: Request,
    service: CustomerServiceDep,
) -> dict[str, object]:
    return await service.delete(request, id)
