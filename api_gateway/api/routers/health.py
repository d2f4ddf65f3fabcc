# This file defines the root probe plus liveness, readiness, and version endpoints.
# It exists so orchestration and monitoring systems can verify the gateway quickly.
# Readiness reflects whether the shared user service channel is connected.

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from api_gateway.api.dependencies import ConfigDep, get_optional_rpc_client
from api_gateway.api.schemas.health_schemas import (
    HealthResponse,
    ReadinessResponse,
    RootResponse,
    VersionResponse,
)
from api_gateway.rpc.client import RpcClient

router = APIRouter(tags=["health"])
OptionalClientDep = Annotated[RpcClient | None, Depends(get_optional_rpc_client)]


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@router.get("/", response_model=RootResponse)
def root() -> dict[str, str]:
    return {"data": "Api gateway"}


@router.get("/health", response_model=HealthResponse)
def health(
    request: Request,
    config: ConfigDep,
) -> dict[str, object]:
    return {
        "request_id": request.state.request_id,
        "status": "ok",
        "environment": config.ENVIRONMENT,
        "service_name": config.SERVICE_NAME,
        "timestamp": _utc_now(),
    }


@router.get("/ready", response_model=ReadinessResponse)
async def ready(
    request: Request,
    client: OptionalClientDep,
) -> dict[str, object]:
    backend_connected = client is not None and client.is_ready()

    return {
        "request_id": request.state.request_id,
        "backend_connected": backend_connected,
        "ready": backend_connected,
        "backend": "reachable" if backend_connected else "unreachable",
        "timestamp": _utc_now(),
    }


@router.get("/version", response_model=VersionResponse)
def version(
    request: Request,
    config: ConfigDep,
) -> dict[str, object]:
    return {
        "request_id": request.state.request_id,
        "project": config.SERVICE_NAME,
        "version": config.VERSION,
        "timestamp": _utc_now(),
    }
