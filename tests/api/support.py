# This file provides shared helpers for API endpoint tests.
# It exists so tests can run the real app against fake gRPC stubs instead of a live user service.
# Fake stubs receive the real protobuf request messages, so tests assert on exactly what would go on the wire.

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

import grpc
from fastapi.testclient import TestClient
from google.protobuf.json_format import ParseDict
from google.protobuf.message import Message

from api_gateway.api.app import create_app
from api_gateway.common.settings import DEFAULTS, Settings
from api_gateway.rpc.client import RpcClient
from api_gateway.rpc.messages import ENTITY_MESSAGES, EntityMessages


def build_test_config(**overrides: Any) -> Settings:
    """Create deterministic gateway settings for tests."""

    values: dict[str, Any] = dict(DEFAULTS)
    values.update(
        {
            "ENVIRONMENT": "test",
            "LOG_LEVEL": "info",
            "RPC_TIMEOUT_SECONDS": "2",
            "STATIC_DIR": "./missing-static-dir-for-tests",
            "ALLOWED_ORIGINS": ("*",),
        }
    )
    values.update(overrides)
    return Settings.model_validate(values)


def rpc_error(code: grpc.StatusCode, details: str) -> grpc.aio.AioRpcError:
    return grpc.aio.AioRpcError(
        code=code,
        initial_metadata=grpc.aio.Metadata(),
        trailing_metadata=grpc.aio.Metadata(),
        details=details,
    )


@dataclass
class RecordedCall:
    method: str
    request: Message
    kwargs: dict[str, Any]


@dataclass
class FakeStub:
    """Stands in for `EntityStub`; records every call and answers from `responses`."""

    messages: EntityMessages
    responses: dict[str, Any] = field(default_factory=dict)
    calls: list[RecordedCall] = field(default_factory=list)

    def calls_to(self, method: str) -> list[RecordedCall]:
        return [call for call in self.calls if call.method == method]

    async def _answer(self, method: str, request: Message, kwargs: dict[str, Any]) -> Message:
        self.calls.append(RecordedCall(method=method, request=request, kwargs=kwargs))
        await asyncio.sleep(0)
        configured = self.responses.get(method)
        if isinstance(configured, BaseException):
            raise configured
        if callable(configured):
            answer = configured(request)
            if inspect.isawaitable(answer):
                answer = await answer
            return answer
        if configured is not None:
            return configured
        return self._default_response(method, request)

    def _default_response(self, method: str, request: Message) -> Message:
        entity_type = self.messages.entity
        if method == "Create":
            return ParseDict(
                {"id": "generated-id", **_fields(request)},
                entity_type(),
                ignore_unknown_fields=True,
            )
        if method == "Update":
            return ParseDict(_fields(request), entity_type(), ignore_unknown_fields=True)
        if method == "GetByID":
            return entity_type(id=request.id)
        if method == "GetList":
            return self.messages.list_response(count=0)
        return self.messages.empty()

    async def Create(self, request: Message, **kwargs: Any) -> Message:
        return await self._answer("Create", request, kwargs)

    async def GetByID(self, request: Message, **kwargs: Any) -> Message:
        return await self._answer("GetByID", request, kwargs)

    async def GetList(self, request: Message, **kwargs: Any) -> Message:
        return await self._answer("GetList", request, kwargs)

    async def Update(self, request: Message, **kwargs: Any) -> Message:
        return await self._answer("Update", request, kwargs)

    async def Delete(self, request: Message, **kwargs: Any) -> Message:
        return await self._answer("Delete", request, kwargs)


def _fields(message: Message) -> dict[str, Any]:
    return {descriptor.name: value for descriptor, value in message.ListFields()}


class FakeChannel:
    def __init__(self, *, ready: bool = True) -> None:
        self.ready = ready
        self.closed = False

    def get_state(self, try_to_connect: bool = False) -> grpc.ChannelConnectivity:
        if self.ready:
            return grpc.ChannelConnectivity.READY
        return grpc.ChannelConnectivity.TRANSIENT_FAILURE

    async def close(self) -> None:
        self.closed = True


def build_fake_client(*, ready: bool = True) -> RpcClient:
    return RpcClient(
        channel=FakeChannel(ready=ready),
        customer=FakeStub(ENTITY_MESSAGES["customer"]),
        system_user=FakeStub(ENTITY_MESSAGES["system_user"]),
        seller=FakeStub(ENTITY_MESSAGES["seller"]),
        branch=FakeStub(ENTITY_MESSAGES["branch"]),
        shop=FakeStub(ENTITY_MESSAGES["shop"]),
    )


@contextmanager
def api_test_client(
    *,
    config: Settings | None = None,
    rpc_client: RpcClient | None = None,
    raise_server_exceptions: bool = True,
) -> Iterator[TestClient]:
    """Yield a TestClient for an app wired to fake stubs."""

    app = create_app(config or build_test_config(), rpc_client or build_fake_client())
    with TestClient(app, raise_server_exceptions=raise_server_exceptions) as client:
        yield client
