"""Typed unary-unary stubs for the user service CRUD services."""

from __future__ import annotations

from typing import Any

from api_gateway.rpc.messages import PROTO_PACKAGE, EntityMessages

def full_method_name(service_name: str, method_name: str) -> str:
    return f"/{PROTO_PACKAGE}.{service_name}/{method_name}"


class EntityStub:
    """Client for one `<Entity>Service`, multiplexed over a shared channel.

    Attribute names follow the backend method names so calls read like
    `await stub.GetByID(request, timeout=...)`.
    """

    def __init__(self, channel: Any, messages: EntityMessages) -> None:
        self.messages = messages
        service_name = messages.definition.service_name

        def unary(method_name: str, request_type: Any, response_type: Any) -> Any:
            return channel.unary_unary(
                full_method_name(service_name, method_name),
                request_serializer=request_type.SerializeToString,
                response_deserializer=response_type.FromString,
            )

        self.Create = unary("Create", messages.create, messages.entity)
        self.GetByID = unary("GetByID", messages.primary_key, messages.entity)
        self.GetList = unary("GetList", messages.list_request, messages.list_response)
        self.Update = unary("Update", messages.update, messages.entity)
        self.Delete = unary("Delete", messages.primary_key, messages.empty)
