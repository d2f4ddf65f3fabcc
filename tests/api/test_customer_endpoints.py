# This file tests the customer endpoints end to end against a fake customer stub.
# It covers body forwarding, contact validation, list defaults, id injection, and error passthrough.

from __future__ import annotations

import grpc

from tests.api.support import api_test_client, build_fake_client, rpc_error


def test_create_customer_forwards_one_call_and_echoes_backend_response() -> None:
    rpc_client = build_fake_client()
    rpc_client.customer.responses["Create"] = rpc_client.customer.messages.entity(
        id="c-1",
        first_name="Ada",
        last_name="Lovelace",
        phone="+998901234567",
        email="ada@gmail.com",
        created_at="2024-01-01 10:00:00",
    )
    body = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "phone": "+998901234567",
        "email": "ada@gmail.com",
    }

    with api_test_client(rpc_client=rpc_client) as client:
        response = client.post("/createCustomer", json=body)

    assert response.status_code == 200
    assert response.json() == {
        "id": "c-1",
        "first_name": "Ada",
        "last_name": "Lovelace",
        "phone": "+998901234567",
        "email": "ada@gmail.com",
        "created_at": "2024-01-01 10:00:00",
    }
    calls = rpc_client.customer.calls_to("Create")
    assert len(calls) == 1
    forwarded = calls[0].request
    assert forwarded.first_name == "Ada"
    assert forwarded.last_name == "Lovelace"
    assert forwarded.phone == "+998901234567"
    assert forwarded.email == "ada@gmail.com"


def test_create_customer_passes_deadline_and_request_id_to_backend() -> None:
    rpc_client = build_fake_client()
    with api_test_client(rpc_client=rpc_client) as client:
        response = client.post(
            "/createCustomer",
            json={"first_name": "Ada"},
            headers={"x-request-id": "req-123"},
        )

    assert response.status_code == 200
    assert response.headers["x-request-id"] == "req-123"
    kwargs = rpc_client.customer.calls_to("Create")[0].kwargs
    assert kwargs["timeout"] == 2.0
    assert ("x-request-id", "req-123") in kwargs["metadata"]


def test_invalid_phone_is_rejected_without_backend_call() -> None:
    rpc_client = build_fake_client()
    with api_test_client(rpc_client=rpc_client) as client:
        create = client.post("/createCustomer", json={"phone": "abc", "email": "a@gmail.com"})
        update = client.put("/updateCustomer/42", json={"phone": "abc"})

    assert create.status_code == 400
    assert create.json()["error_code"] == "INVALID_PHONE"
    assert update.status_code == 400
    assert rpc_client.customer.calls == []


def test_invalid_email_aborts_before_backend_call() -> None:
    # Email failures abort the request exactly like phone failures.
    rpc_client = build_fake_client()
    with api_test_client(rpc_client=rpc_client) as client:
        create = client.post(
            "/createCustomer",
            json={"phone": "+998901234567", "email": "not-an-email"},
        )
        update = client.put("/updateCustomer/42", json={"email": "missing-at.example.com"})

    assert create.status_code == 400
    assert create.json()["error_code"] == "INVALID_EMAIL"
    assert update.status_code == 400
    assert update.json()["error_code"] == "INVALID_EMAIL"
    assert rpc_client.customer.calls == []


def test_malformed_json_body_is_client_error_without_backend_call() -> None:
    rpc_client = build_fake_client()
    with api_test_client(rpc_client=rpc_client) as client:
        response = client.post(
            "/createCustomer",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

    assert 400 <= response.status_code < 500
    assert response.json()["error_code"] == "VALIDATION_ERROR"
    assert rpc_client.customer.calls == []


def test_list_without_page_and_limit_uses_defaults() -> None:
    rpc_client = build_fake_client()
    with api_test_client(rpc_client=rpc_client) as client:
        response = client.get("/getlistcustomer")

    assert response.status_code == 200
    forwarded = rpc_client.customer.calls_to("GetList")[0].request
    assert forwarded.page == 1
    assert forwarded.limit == 10
    assert forwarded.search == ""


def test_list_forwards_search_page_and_limit() -> None:
    rpc_client = build_fake_client()
    messages = rpc_client.customer.messages
    rpc_client.customer.responses["GetList"] = messages.list_response(
        count=2,
        customers=[messages.entity(id="c-1"), messages.entity(id="c-2")],
    )

    with api_test_client(rpc_client=rpc_client) as client:
        response = client.get("/getlistcustomer?search=ada&page=3&limit=25")

    assert response.status_code == 200
    assert response.json() == {"count": 2, "customers": [{"id": "c-1"}, {"id": "c-2"}]}
    forwarded = rpc_client.customer.calls_to("GetList")[0].request
    assert (forwarded.search, forwarded.page, forwarded.limit) == ("ada", 3, 25)


def test_list_with_non_numeric_page_is_rejected_without_backend_call() -> None:
    rpc_client = build_fake_client()
    with api_test_client(rpc_client=rpc_client) as client:
        bad_page = client.get("/getlistcustomer?page=two")
        bad_limit = client.get("/getlistcustomer?limit=-5")

    assert bad_page.status_code == 400
    assert bad_page.json()["error_code"] == "INVALID_QUERY_PARAM"
    assert bad_limit.status_code == 400
    assert rpc_client.customer.calls == []


def test_update_injects_path_id_over_body_id() -> None:
    rpc_client = build_fake_client()
    with api_test_client(rpc_client=rpc_client) as client:
        without_id = client.put("/updateCustomer/42", json={"first_name": "Grace"})
        with_other_id = client.put("/updateCustomer/42", json={"id": "7", "first_name": "Grace"})

    assert without_id.status_code == 200
    assert with_other_id.status_code == 200
    forwarded = [call.request for call in rpc_client.customer.calls_to("Update")]
    assert [message.id for message in forwarded] == ["42", "42"]
    assert forwarded[0].first_name == "Grace"
    assert with_other_id.json()["id"] == "42"


def test_get_by_id_wraps_path_id_in_primary_key() -> None:
    rpc_client = build_fake_client()
    with api_test_client(rpc_client=rpc_client) as client:
        response = client.get("/getbyidcustomer/abc-1")

    assert response.status_code == 200
    assert response.json() == {"id": "abc-1"}
    assert rpc_client.customer.calls_to("GetByID")[0].request.id == "abc-1"


def test_delete_returns_acknowledgement() -> None:
    rpc_client = build_fake_client()
    with api_test_client(rpc_client=rpc_client) as client:
        response = client.delete("/deleteCustomer/abc-1")

    assert response.status_code == 200
    assert response.json() == {}
    assert rpc_client.customer.calls_to("Delete")[0].request.id == "abc-1"


def test_delete_missing_customer_passes_backend_not_found_through() -> None:
    rpc_client = build_fake_client()
    rpc_client.customer.responses["Delete"] = rpc_error(
        grpc.StatusCode.NOT_FOUND, "customer not found: missing-1"
    )

    with api_test_client(rpc_client=rpc_client) as client:
        response = client.delete("/deleteCustomer/missing-1")

    assert response.status_code == 404
    payload = response.json()
    assert payload["error_code"] == "NOT_FOUND"
    assert payload["message"] == "customer not found: missing-1"
    assert payload["details"]["description"] == "failed to delete customer"
    assert payload["request_id"]
