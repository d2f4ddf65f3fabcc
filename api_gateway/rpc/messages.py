"""
Protobuf message types for the user service.

The backend speaks the `user_service` proto package. Each entity gets its own file
descriptor holding the create, full, update, primary key, list request, list
response and empty acknowledgement messages; the classes are built once at import
time from those descriptors.

Field layout per entity `E`:

* `CreateE`: the entity's scalar fields, numbered from 1.
* `E`: `id` = 1, the scalar fields, then `created_at` and `updated_at`.
* `UpdateE`: `id` = 1, then the scalar fields.
* `EPrimaryKey`: `id` = 1.
* `GetListERequest`: `page` (uint64) = 1, `limit` (uint64) = 2, `search` = 3.
* `GetListEResponse`: `count` (int32) = 1, repeated `E` = 2.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.message import Message

PROTO_PACKAGE = "user_service"

_FieldProto = descriptor_pb2.FieldDescriptorProto

_TIMESTAMP_FIELDS = ("created_at", "updated_at")


@dataclass(frozen=True)
class EntityDefinition:
    """Naming and field layout of one backend entity service."""

    key: str
    label: str
    message_name: str
    service_name: str
    empty_name: str
    list_field: str
    fields: tuple[str, ...]

    @property
    def proto_file(self) -> str:
        return f"{self.key}.proto"

    @property
    def entity_fields(self) -> tuple[str, ...]:
        return ("id", *self.fields, *_TIMESTAMP_FIELDS)

    @property
    def update_fields(self) -> tuple[str, ...]:
        return ("id", *self.fields)


CUSTOMER = EntityDefinition(
    key="customer",
    label="customer",
    message_name="Customer",
    service_name="CustomerService",
    empty_name="Empty",
    list_field="customers",
    fields=("first_name", "last_name", "phone", "email"),
)

SYSTEM_USER = EntityDefinition(
    key="system_user",
    label="user",
    message_name="SystemUser",
    service_name="UsService",
    empty_name="Empty1",
    list_field="users",
    fields=("first_name", "last_name", "login", "phone", "email"),
)

SELLER = EntityDefinition(
    key="seller",
    label="seller",
    message_name="Seller",
    service_name="SellerService",
    empty_name="Empty2",
    list_field="sellers",
    fields=("first_name", "last_name", "shop_id", "phone", "email"),
)

BRANCH = EntityDefinition(
    key="branch",
    label="branch",
    message_name="Branch",
    service_name="BranchService",
    empty_name="Empty3",
    list_field="branches",
    fields=("name", "address", "phone"),
)

SHOP = EntityDefinition(
    key="shop",
    label="shop",
    message_name="Shop",
    service_name="ShopService",
    empty_name="Empty4",
    list_field="shops",
    fields=("name", "branch_id", "address", "phone"),
)

ENTITY_DEFINITIONS: dict[str, EntityDefinition] = {
    definition.key: definition
    for definition in (CUSTOMER, SYSTEM_USER, SELLER, BRANCH, SHOP)
}


@dataclass(frozen=True)
class EntityMessages:
    """Generated message classes for one entity service."""

    definition: EntityDefinition
    create: type[Message]
    entity: type[Message]
    update: type[Message]
    primary_key: type[Message]
    list_request: type[Message]
    list_response: type[Message]
    empty: type[Message]


def _scalar_field(name: str, number: int, field_type: int = _FieldProto.TYPE_STRING) -> _FieldProto:
    return _FieldProto(
        name=name,
        number=number,
        type=field_type,
        label=_FieldProto.LABEL_OPTIONAL,
        json_name=name,
    )


def _message(name: str, fields: list[_FieldProto]) -> descriptor_pb2.DescriptorProto:
    message = descriptor_pb2.DescriptorProto(name=name)
    message.field.extend(fields)
    return message


def _string_message(name: str, field_names: tuple[str, ...]) -> descriptor_pb2.DescriptorProto:
    return _message(
        name,
        [_scalar_field(field_name, number) for number, field_name in enumerate(field_names, start=1)],
    )


def build_file_descriptor(definition: EntityDefinition) -> descriptor_pb2.FileDescriptorProto:
    """Describe every message of one entity service as a proto3 file."""

    name = definition.message_name
    file_proto = descriptor_pb2.FileDescriptorProto(
        name=definition.proto_file,
        package=PROTO_PACKAGE,
        syntax="proto3",
    )

    list_items = _FieldProto(
        name=definition.list_field,
        number=2,
        type=_FieldProto.TYPE_MESSAGE,
        type_name=f".{PROTO_PACKAGE}.{name}",
        label=_FieldProto.LABEL_REPEATED,
        json_name=definition.list_field,
    )

    file_proto.message_type.extend(
        [
            _string_message(f"Create{name}", definition.fields),
            _string_message(name, definition.entity_fields),
            _string_message(f"Update{name}", definition.update_fields),
            _string_message(f"{name}PrimaryKey", ("id",)),
            _message(
                f"GetList{name}Request",
                [
                    _scalar_field("page", 1, _FieldProto.TYPE_UINT64),
                    _scalar_field("limit", 2, _FieldProto.TYPE_UINT64),
                    _scalar_field("search", 3),
                ],
            ),
            _message(
                f"GetList{name}Response",
                [_scalar_field("count", 1, _FieldProto.TYPE_INT32), list_items],
            ),
            _message(definition.empty_name, []),
        ]
    )
    return file_proto


def _message_class(pool: Any, full_name: str) -> type[Message]:
    return message_factory.GetMessageClass(pool.FindMessageTypeByName(full_name))


def _build_messages(pool: Any, definition: EntityDefinition) -> EntityMessages:
    pool.AddSerializedFile(build_file_descriptor(definition).SerializeToString())
    name = definition.message_name

    def lookup(message_name: str) -> type[Message]:
        return _message_class(pool, f"{PROTO_PACKAGE}.{message_name}")

    return EntityMessages(
        definition=definition,
        create=lookup(f"Create{name}"),
        entity=lookup(name),
        update=lookup(f"Update{name}"),
        primary_key=lookup(f"{name}PrimaryKey"),
        list_request=lookup(f"GetList{name}Request"),
        list_response=lookup(f"GetList{name}Response"),
        empty=lookup(definition.empty_name),
    )


_POOL = descriptor_pool.DescriptorPool()

ENTITY_MESSAGES: dict[str, EntityMessages] = {
    key: _build_messages(_POOL, definition) for key, definition in ENTITY_DEFINITIONS.items()
}
