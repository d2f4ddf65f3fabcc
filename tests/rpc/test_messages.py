"""
Unit tests for the generated user service messages.
It asserts field names and numbers, since they are the wire contract with the backend.
"""

import pytest
from google.protobuf.descriptor import FieldDescriptor
from google.protobuf.json_format import MessageToDict

from api_gateway.api.schemas import entity_schemas
from api_gateway.rpc.messages import ENTITY_DEFINITIONS, ENTITY_MESSAGES, PROTO_PACKAGE


def _numbered_fields(message_type: type) -> list[tuple[str, int]]:
    return [(field.name, field.number) for field in message_type.DESCRIPTOR.fields]


def test_every_entity_has_messages() -> None:
    assert set(ENTITY_MESSAGES) == {"customer", "system_user", "seller", "branch", "shop"}


def test_customer_field_layout() -> None:
    messages = ENTITY_MESSAGES["customer"]

    assert _numbered_fields(messages.create) == [
        ("first_name", 1),
        ("last_name", 2),
        ("phone", 3),
        ("email", 4),
    ]
    assert _numbered_fields(messages.entity) == [
        ("id", 1),
        ("first_name", 2),
        ("last_name", 3),
        ("phone", 4),
        ("email", 5),
        ("created_at", 6),
        ("updated_at", 7),
    ]
    assert _numbered_fields(messages.update)[0] == ("id", 1)
    assert _numbered_fields(messages.primary_key) == [("id", 1)]


def test_system_user_is_served_by_us_service() -> None:
    messages = ENTITY_MESSAGES["system_user"]

    assert messages.entity.DESCRIPTOR.full_name == f"{PROTO_PACKAGE}.SystemUser"
    assert messages.definition.service_name == "UsService"
    assert "login" in messages.create.DESCRIPTOR.fields_by_name
    assert messages.list_response.DESCRIPTOR.fields_by_name["users"].number == 2


@pytest.mark.parametrize("key", sorted(ENTITY_DEFINITIONS))
def test_list_request_uses_unsigned_paging(key: str) -> None:
    fields = ENTITY_MESSAGES[key].list_request.DESCRIPTOR.fields_by_name

    assert (fields["page"].number, fields["page"].type) == (1, FieldDescriptor.TYPE_UINT64)
    assert (fields["limit"].number, fields["limit"].type) == (2, FieldDescriptor.TYPE_UINT64)
    assert (fields["search"].number, fields["search"].type) == (3, FieldDescriptor.TYPE_STRING)


def test_list_request_carries_full_uint64_range() -> None:
    list_request = ENTITY_MESSAGES["shop"].list_request
    original = list_request(page=2**64 - 1, limit=10, search="corner")

    decoded = list_request.FromString(original.SerializeToString())

    assert decoded.page == 2**64 - 1
    assert decoded.search == "corner"


def test_list_response_renders_count_as_number() -> None:
    messages = ENTITY_MESSAGES["branch"]
    response = messages.list_response(count=2)
    response.branches.add(id="b-1", name="Chilonzor")
    response.branches.add(id="b-2", name="Yunusobod")

    assert MessageToDict(response, preserving_proto_field_name=True) == {
        "count": 2,
        "branches": [{"id": "b-1", "name": "Chilonzor"}, {"id": "b-2", "name": "Yunusobod"}],
    }


def test_empty_messages_have_distinct_names() -> None:
    names = {messages.empty.DESCRIPTOR.name for messages in ENTITY_MESSAGES.values()}

    assert len(names) == len(ENTITY_MESSAGES)
    assert all(not messages.empty.DESCRIPTOR.fields for messages in ENTITY_MESSAGES.values())


@pytest.mark.parametrize("key", sorted(ENTITY_DEFINITIONS))
def test_http_schemas_mirror_message_fields(key: str) -> None:
    messages = ENTITY_MESSAGES[key]
    name = messages.definition.message_name

    create_schema = getattr(entity_schemas, f"Create{name}")
    entity_schema = getattr(entity_schemas, name)
    list_schema = getattr(entity_schemas, f"GetList{name}Response")

    assert set(create_schema.model_fields) == set(messages.create.DESCRIPTOR.fields_by_name)
    assert set(entity_schema.model_fields) == set(messages.entity.DESCRIPTOR.fields_by_name)
    assert set(list_schema.model_fields) == set(messages.list_response.DESCRIPTOR.fields_by_name)
