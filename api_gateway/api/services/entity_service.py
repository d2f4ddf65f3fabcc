# This file implements the request translation shared by every entity router.
# It exists so routers stay thin: they parse HTTP input and hand a plain dict to this service.
# The service validates contact fields, builds the protobuf request, calls the stub, and maps errors.
# Each call carries the configured deadline and is cancelled if the HTTP client disconnects.

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any

import grpc
from fastapi import Request
from google.protobuf.json_format import MessageToDict, ParseDict, ParseError
from google.protobuf.message import Message

from api_gateway.api.error_handlers import APIError, api_error_from_rpc
from api_gateway.api.pagination import ListParams
from api_gateway.api.validators import ValidationError, validate_email_address, validate_phone
from api_gateway.rpc.stubs import EntityStub

logger = logging.getLogger(__name__)

_DISCONNECT_POLL_SECONDS = 0.1


def message_to_dict(message: Message) -> dict[str, Any]:
    return MessageToDict(message, preserving_proto_field_name=True)


def check_contact_fields(payload: dict[str, Any]) -> None:
    """Validate phone, then email; the first failure aborts the request."""

    phone = payload.get("phone")
    if phone is not None:
        try:
            validate_phone(phone)
        except ValidationError as exc:
            raise APIError(
                status_code=400,
                error_code="INVALID_PHONE",
                message=f"error while validating phone number {phone}",
                details=str(exc),
            ) from exc

    email = payload.get("email")
    if email is not None:
        try:
            validate_email_address(email)
        except ValidationError as exc:
            raise APIError(
                status_code=400,
                error_code="INVALID_EMAIL",
                message=f"error while validating email {email}",
                details=str(exc),
            ) from exc


async def _wait_for_disconnect(request: Request) -> None:
    while not await request.is_disconnected():
        await asyncio.sleep(_DISCONNECT_POLL_SECONDS)


class EntityService:
    """Forwards CRUD operations for one entity to its backend stub."""

    def __init__(self, *, stub: EntityStub, timeout_seconds: float) -> None:
        self.stub = stub
        self.messages = stub.messages
        self.label = stub.messages.definition.label
        self.timeout_seconds = timeout_seconds

    async def create(self, request: Request, payload: dict[str, Any]) -> dict[str, Any]:
        check_contact_fields(payload)
        message = self._build(self.messages.create, payload)
        response = await self._call(
            request, self.stub.Create, message, description=f"failed to create {self.label}"
        )
        return message_to_dict(response)

    async def get_list(self, request: Request, params: ListParams) -> dict[str, Any]:
        message = self.messages.list_request(**params.as_request_fields())
        response = await self._call(
            request, self.stub.GetList, message, description=f"failed to get {self.label} list"
        )
        return message_to_dict(response)

    async def get_by_id(self, request: Request, entity_id: str) -> dict[str, Any]:
        message = self.messages.primary_key(id=entity_id)
        response = await self._call(
            request, self.stub.GetByID, message, description=f"failed to get {self.label} by id"
        )
        return message_to_dict(response)

    async def update(
        self, request: Request, entity_id: str, payload: dict[str, Any]
    ) -> dict[str, Any]:
        check_contact_fields(payload)
        message = self._build(self.messages.update, {**payload, "id": entity_id})
        response = await self._call(
            request, self.stub.Update, message, description=f"failed to update {self.label}"
        )
        return message_to_dict(response)

    async def delete(self, request: Request, entity_id: str) -> dict[str, Any]:
        message = self.messages.primary_key(id=entity_id)
        response = await self._call(
            request, self.stub.Delete, message, description=f"failed to delete {self.label}"
        )
        return message_to_dict(response)

    def _build(self, message_type: type[Message], payload: dict[str, Any]) -> Message:
        try:
            return ParseDict(payload, message_type(), ignore_unknown_fields=True)
        except ParseError as exc:
            raise APIError(
                status_code=400,
                error_code="INVALID_REQUEST_BODY",
                message="invalid request body",
                details=str(exc),
            ) from exc

    async def _call(
        self,
        request: Request,
        method: Any,
        message: Message,
        *,
        description: str,
    ) -> Message:
        metadata = (("x-request-id", str(getattr(request.state, "request_id", ""))),)
        rpc_task = asyncio.ensure_future(
            _as_awaitable(method(message, timeout=self.timeout_seconds, metadata=metadata))
        )
        watcher = asyncio.ensure_future(_wait_for_disconnect(request))
        try:
            await asyncio.wait({rpc_task, watcher}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            rpc_task.cancel()
            raise
        finally:
            watcher.cancel()

        if not rpc_task.done():
            rpc_task.cancel()
            await asyncio.gather(rpc_task, return_exceptions=True)
            logger.info("Client disconnected; cancelled call behind %r", description)
            raise APIError(
                status_code=499,
                error_code="CLIENT_CLOSED_REQUEST",
                message="client closed request before the backend answered",
            )

        try:
            return rpc_task.result()
        except grpc.RpcError as exc:
            raise api_error_from_rpc(exc, description=description) from exc


async def _as_awaitable(call: Awaitable[Message]) -> Message:
    return await call
