# This file provides dependency factories for FastAPI routes.
# It exists so settings and the gRPC client built by the composition root reach handlers through injection.
# Everything is read from `app.state`, which keeps tests free to build an app around fake stubs.
# The optional API key check also lives here so every entity router can attach it.

from __future__ import annotations

import secrets
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader

from api_gateway.api.error_handlers import APIError
from api_gateway.api.services.entity_service import EntityService
from api_gateway.common.settings import Settings
from api_gateway.rpc.client import RpcClient

api_key_header = APIKeyHeader(name="Authorization", scheme_name="ApiKeyAuth", auto_error=False)


def get_config(request: Request) -> Settings:
    return request.app.state.settings


def get_optional_rpc_client(request: Request) -> RpcClient | None:
    return request.app.state.rpc_client


def get_rpc_client(request: Request) -> RpcClient:
    client = get_optional_rpc_client(request)
    if client is None:
        raise APIError(
            status_code=503,
            error_code="BACKEND_UNAVAILABLE",
            message="user service connection is not established",
        )
    return client


ConfigDep = Annotated[Settings, Depends(get_config)]
RpcClientDep = Annotated[RpcClient, Depends(get_rpc_client)]


def require_api_key(
    config: ConfigDep,
    authorization: Annotated[str | None, Depends(api_key_header)],
) -> None:
    """Enforce the `Authorization` header only when an API key is configured."""

    if config.API_KEY is None:
        return
    presented = (authorization or "").strip()
    if presented.lower().startswith("bearer "):
        presented = presented[len("bearer ") :].strip()
    if not presented or not secrets.compare_digest(presented, config.API_KEY):
        raise APIError(
            status_code=401,
            error_code="UNAUTHORIZED",
            message="missing or invalid Authorization header",
        )


def get_customer_service(client: RpcClientDep, config: ConfigDep) -> EntityService:
    return EntityService(stub=client.customer, timeout_seconds=config.RPC_TIMEOUT_SECONDS)


def get_system_user_service(client: RpcClientDep, config: ConfigDep) -> EntityService:
    return EntityService(stub=client.system_user, timeout_seconds=config.RPC_TIMEOUT_SECONDS)


def get_seller_service(client: RpcClientDep, config: ConfigDep) -> EntityService:
    return EntityService(stub=client.seller, timeout_seconds=config.RPC_TIMEOUT_SECONDS)


def get_branch_service(client: RpcClientDep, config: ConfigDep) -> EntityService:
    return EntityService(stub=client.branch, timeout_seconds=config.RPC_TIMEOUT_SECONDS)


def get_shop_service(client: RpcClientDep, config: ConfigDep) -> EntityService:
    return EntityService(stub=client.shop, timeout_seconds=config.RPC_TIMEOUT_SECONDS)
