"""Donation request routes — HTTP contract over the lifecycle manager and query engine.

Tests cover:
    - POST /donation-requests: 201 camelCase body, pending default, 400 on missing field
    - PATCH /donation-request-all/{id}: transitions, 403 on terminal, 400 on unknown key
    - GET /donation-request-all: filters, totalRequests, bad id → 400
    - GET /donation-requests: requester listing newest first
    - DELETE: snapshot then 404
"""

from uuid import uuid4

from tests.services.factories import make_request_payload, to_camel_payload


async def _create(client, **overrides) -> dict:
    response = await client.post(
        "/donation-requests", json=to_camel_payload(make_request_payload(**overrides)),
    )
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_returns_camel_case_record(client):
    body = await _create(client)
    assert body["status"] == "pending"
    assert body["bloodGroup"] == "A+"
    assert body["requesterEmail"] == "rahim@example.com"
    assert body["donorName"] is None
    assert "createdAt" in body


async def test_create_missing_field_is_400(client):
    payload = to_camel_payload(make_request_payload())
    del payload["hospitalName"]

    response = await client.post("/donation-requests", json=payload)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["field"] == "hospitalName"


async def test_create_invalid_status_is_400(client):
    payload = to_camel_payload(make_request_payload(status="approved"))
    response = await client.post("/donation-requests", json=payload)
    assert response.status_code == 400


async def test_patch_lifecycle_and_terminal_rejection(client):
    created = await _create(client)
    url = f"/donation-request-all/{created['id']}"

    response = await client.patch(url, json={"status": "inprogress", "donorName": "Alex"})
    assert response.status_code == 200
    assert response.json()["donorName"] == "Alex"
    assert response.json()["updatedAt"] is not None

    response = await client.patch(url, json={"status": "done"})
    assert response.status_code == 200
    assert response.json()["status"] == "done"

    response = await client.patch(url, json={"status": "cancel"})
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "TERMINAL_STATE"

    stored = await client.get(f"/donation-requests/{created['id']}")
    assert stored.json()["status"] == "done"


async def test_patch_terminal_with_invalid_status_is_403(client):
    created = await _create(client, status="done")
    response = await client.patch(
        f"/donation-request-all/{created['id']}", json={"status": "bogus"},
    )
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "TERMINAL_STATE"


async def test_patch_unknown_key_is_400(client):
    created = await _create(client)
    response = await client.patch(
        f"/donation-request-all/{created['id']}",
        json={"requesterEmail": "hijack@example.com"},
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_patch_unknown_id_is_404(client):
    response = await client.patch(
        f"/donation-request-all/{uuid4()}", json={"status": "done"},
    )
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_search_with_status_and_limit(client):
    for _ in range(5):
        await _create(client)
    for _ in range(3):
        await _create(client, status="inprogress")

    response = await client.get(
        "/donation-request-all", params={"status": "pending", "limit": 2, "skip": 0},
    )

    assert response.status_code == 200
    body = response.json()
    assert len(body["requests"]) == 2
    assert body["totalRequests"] == 5


async def test_search_by_district_and_text(client):
    await _create(client, recipient_district="Sylhet", recipient_upazila="Beanibazar")
    await _create(client)

    by_district = await client.get("/donation-request-all", params={"district": "Sylhet"})
    by_text = await client.get("/donation-request-all", params={"search": "beani"})

    assert by_district.json()["totalRequests"] == 1
    assert by_text.json()["totalRequests"] == 1


async def test_search_with_malformed_id_is_400(client):
    response = await client.get("/donation-request-all", params={"id": "not-a-uuid"})
    assert response.status_code == 400


async def test_search_with_huge_skip_is_empty_page(client):
    await _create(client)
    response = await client.get(
        "/donation-request-all", params={"skip": str(10**20)},
    )
    assert response.status_code == 200
    assert response.json() == {"requests": [], "totalRequests": 1}


async def test_search_unknown_sort_is_not_an_error(client):
    await _create(client)
    response = await client.get(
        "/donation-request-all", params={"sortBy": "password", "order": "sideways"},
    )
    assert response.status_code == 200
    assert response.json()["totalRequests"] == 1


async def test_list_by_requester(client):
    await _create(client, recipient_name="first")
    await _create(client, recipient_name="second")
    await _create(client, requester_email="other@example.com")

    response = await client.get(
        "/donation-requests", params={"email": "rahim@example.com"},
    )

    assert response.status_code == 200
    names = [r["recipientName"] for r in response.json()]
    assert sorted(names) == ["first", "second"]


async def test_list_by_requester_requires_email(client):
    response = await client.get("/donation-requests")
    assert response.status_code == 400


async def test_delete_then_not_found(client):
    created = await _create(client)
    url = f"/donation-request-all/{created['id']}"

    response = await client.delete(url)
    assert response.status_code == 200
    assert response.json()["id"] == created["id"]

    assert (await client.delete(url)).status_code == 404
    assert (await client.get(f"/donation-requests/{created['id']}")).status_code == 404
