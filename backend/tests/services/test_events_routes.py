"""Event Routes — HTTP contract for event lifecycle and occurrence listing.

Tests cover:
    - Create accepts snake_case and camelCase, rejects unknown keys and bad rules
    - Events of one customer are invisible to another (404)
    - PATCH keeps or clears stop_at; cut endpoint ends the series


async def test_occurrences_at_end_of_calendar(client, customer_id):
    await _create(client, customer_id, {
        "name": "Year end", "start_date": "9999-12-01", "interval_days": 7,
    })
    await _create(client, customer_id, {
        "name": "Rare", "start_date": "2024-01-01", "interval_days": 3000000,
    })
    response = await client.get(
        _occurrences_url(customer_id),
        params={"start": "9999-12-01", "end": "9999-12-31"},
    )
    assert response.status_code == 200
    assert [o["date"] for o in response.json()["occurrences"]] == [
        "9999-12-01", "9999-12-08", "9999-12-15", "9999-12-22", "9999-12-29",
    ]
    - Occurrence listing: response shape, ordering, filter, window validation
    - Health and readiness probes
"""

from uuid import uuid4

import pytest

_RENT = {"name": "Rent", "start_date": "2024-01-01", "interval_days": 7}


@pytest.fixture
def customer_id():
    return str(uuid4())


def _events_url(customer_id, suffix=""):
    return f"/api/v1/customers/{customer_id}/events{suffix}"


def _occurrences_url(customer_id):
    return f"/api/v1/customers/{customer_id}/occurrences"


async def _create(client, customer_id, body=None):
    response = await client.post(_events_url(customer_id), json=body or _RENT)
    assert response.status_code == 201, response.text
    return response.json()


# ─── Create ──────────────────────────────────────────────────────

async def test_create_event(client, customer_id):
    data = await _create(client, customer_id)
    assert data["name"] == "Rent"
    assert data["customer_id"] == customer_id
    assert data["start_date"] == "2024-01-01"
    assert data["interval_days"] == 7
    assert data["stop_at"] is None


async def test_create_accepts_camel_case(client, customer_id):
    data = await _create(client, customer_id, {
        "name": "Gym", "startDate": "2024-02-01",
        "intervalDays": 30, "stopAt": "2024-12-31",
    })
    assert data["start_date"] == "2024-02-01"
    assert data["interval_days"] == 30
    assert data["stop_at"] == "2024-12-31"


async def test_create_rejects_unknown_field(client, customer_id):
    response = await client.post(
        _events_url(customer_id), json={**_RENT, "colour": "red"},
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_create_rejects_zero_interval(client, customer_id):
    response = await client.post(
        _events_url(customer_id), json={**_RENT, "interval_days": 0},
    )
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert "interval_days" in error["message"]


async def test_create_rejects_stop_before_start(client, customer_id):
    response = await client.post(
        _events_url(customer_id), json={**_RENT, "stop_at": "2023-12-01"},
    )
    assert response.status_code == 400


async def test_create_rejects_bad_date(client, customer_id):
    response = await client.post(
        _events_url(customer_id), json={**_RENT, "start_date": "01/01/2024"},
    )
    assert response.status_code == 400
    assert response.json()["error"]["details"]


async def test_invalid_customer_id_rejected(client):
    response = await client.post(_events_url("not-a-uuid"), json=_RENT)
    assert response.status_code == 400


# ─── Read / list / delete ────────────────────────────────────────

async def test_get_event(client, customer_id):
    created = await _create(client, customer_id)
    response = await client.get(_events_url(customer_id, f"/{created['id']}"))
    assert response.status_code == 200
    assert response.json()["id"] == created["id"]


async def test_other_customer_gets_404(client, customer_id):
    created = await _create(client, customer_id)
    response = await client.get(_events_url(str(uuid4()), f"/{created['id']}"))
    assert response.status_code == 404
    error = response.json()["error"]
    assert error["code"] == "RESOURCE_NOT_FOUND"
    assert error["context"]["event_id"] == created["id"]


async def test_list_events_with_pagination(client, customer_id):
    for i in range(3):
        await _create(client, customer_id, {**_RENT, "name": f"Event {i}"})
    await _create(client, str(uuid4()))

    response = await client.get(_events_url(customer_id), params={"limit": 2})
    data = response.json()
    assert response.status_code == 200
    assert len(data["events"]) == 2
    assert data["pagination"] == {"limit": 2, "offset": 0}

    everything = await client.get(_events_url(customer_id))
    assert len(everything.json()["events"]) == 3


async def test_list_events_rejects_oversized_limit(client, customer_id):
    response = await client.get(_events_url(customer_id), params={"limit": 500})
    assert response.status_code == 400


async def test_delete_event(client, customer_id):
    created = await _create(client, customer_id)
    url = _events_url(customer_id, f"/{created['id']}")

    first = await client.delete(url)
    second = await client.delete(url)
    assert first.json() == {"deleted": True}
    assert second.json() == {"deleted": False}
    assert (await client.get(url)).status_code == 404


# ─── Update / cut ────────────────────────────────────────────────

async def test_patch_without_stop_keeps_stop(client, customer_id):
    created = await _create(client, customer_id, {**_RENT, "stop_at": "2024-06-01"})
    response = await client.patch(
        _events_url(customer_id, f"/{created['id']}"), json={"name": "Rent v2"},
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Rent v2"
    assert response.json()["stop_at"] == "2024-06-01"


async def test_patch_null_stop_clears_stop(client, customer_id):
    created = await _create(client, customer_id, {**_RENT, "stop_at": "2024-06-01"})
    response = await client.patch(
        _events_url(customer_id, f"/{created['id']}"), json={"stopAt": None},
    )
    assert response.status_code == 200
    assert response.json()["stop_at"] is None


async def test_patch_rejects_invalid_merge(client, customer_id):
    created = await _create(client, customer_id, {**_RENT, "stop_at": "2024-06-01"})
    response = await client.patch(
        _events_url(customer_id, f"/{created['id']}"),
        json={"start_date": "2024-07-01"},
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_patch_null_required_fields_keep_current(client, customer_id):
    created = await _create(client, customer_id)
    response = await client.patch(
        _events_url(customer_id, f"/{created['id']}"),
        json={"name": None, "startDate": None, "interval_days": None},
    )
    assert response.status_code == 200
    data = response.json()
    assert (data["name"], data["start_date"], data["interval_days"]) == (
        "Rent", "2024-01-01", 7,
    )


async def test_cut_endpoint_ends_series(client, customer_id):
    created = await _create(client, customer_id)
    response = await client.post(
        _events_url(customer_id, f"/{created['id']}/cut"),
        json={"from": "2024-01-15"},
    )
    assert response.status_code == 200
    assert response.json()["stop_at"] == "2024-01-15"

    occurrences = await client.get(
        _occurrences_url(customer_id),
        params={"start": "2024-01-01", "end": "2024-01-31"},
    )
    assert [o["date"] for o in occurrences.json()["occurrences"]] == [
        "2024-01-01", "2024-01-08",
    ]


async def test_cut_before_start_rejected(client, customer_id):
    created = await _create(client, customer_id)
    response = await client.post(
        _events_url(customer_id, f"/{created['id']}/cut"),
        json={"from": "2023-12-01"},
    )
    assert response.status_code == 400


# ─── Occurrences ─────────────────────────────────────────────────

async def test_occurrences_response_shape(client, customer_id):
    created = await _create(client, customer_id)
    response = await client.get(
        _occurrences_url(customer_id),
        params={"start": "2024-01-10", "end": "2024-01-31"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["period"] == {"start": "2024-01-10", "end": "2024-01-31"}
    assert data["occurrences"] == [
        {"eventId": created["id"], "name": "Rent", "date": day}
        for day in ("2024-01-15", "2024-01-22", "2024-01-29")
    ]


async def test_occurrences_sorted_by_date_then_name(client, customer_id):
    await _create(client, customer_id, {
        "name": "Beta", "start_date": "2024-01-15", "interval_days": 7,
    })
    await _create(client, customer_id, {
        "name": "Alpha", "start_date": "2024-01-15", "interval_days": 14,
    })
    response = await client.get(
        _occurrences_url(customer_id),
        params={"start": "2024-01-01", "end": "2024-01-31"},
    )
    assert [(o["date"], o["name"]) for o in response.json()["occurrences"]] == [
        ("2024-01-15", "Alpha"), ("2024-01-15", "Beta"),
        ("2024-01-22", "Beta"),
        ("2024-01-29", "Alpha"), ("2024-01-29", "Beta"),
    ]


async def test_occurrences_name_filter(client, customer_id):
    await _create(client, customer_id, {**_RENT, "name": "Monthly RENT"})
    await _create(client, customer_id, {**_RENT, "name": "Gym"})
    params = {"start": "2024-01-01", "end": "2024-01-07"}

    filtered = await client.get(
        _occurrences_url(customer_id), params={**params, "name": "rent"},
    )
    placeholder = await client.get(
        _occurrences_url(customer_id), params={**params, "name": "undefined"},
    )
    assert [o["name"] for o in filtered.json()["occurrences"]] == ["Monthly RENT"]
    assert [o["name"] for o in placeholder.json()["occurrences"]] == [
        "Gym", "Monthly RENT",
    ]


async def test_occurrences_invalid_window(client, customer_id):
    response = await client.get(
        _occurrences_url(customer_id),
        params={"start": "2024-02-01", "end": "2024-01-01"},
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_WINDOW"


async def test_occurrences_bad_date_format(client, customer_id):
    response = await client.get(
        _occurrences_url(customer_id),
        params={"start": "2024-13-01", "end": "2024-01-31"},
    )
    assert response.status_code == 400


async def test_occurrences_missing_end(client, customer_id):
    response = await client.get(
        _occurrences_url(customer_id), params={"start": "2024-01-01"},
    )
    assert response.status_code == 400


async def test_occurrences_empty_for_unknown_customer(client):
    response = await client.get(
        _occurrences_url(str(uuid4())),
        params={"start": "2024-01-01", "end": "2024-01-31"},
    )
    assert response.status_code == 200
    assert response.json()["occurrences"] == []


async def test_occurrences_at_end_of_calendar(client, customer_id):
    await _create(client, customer_id, {
        "name": "Year end", "start_date": "9999-12-01", "interval_days": 7,
    })
    await _create(client, customer_id, {
        "name": "Rare", "start_date": "2024-01-01", "interval_days": 3000000,
    })
    response = await client.get(
        _occurrences_url(customer_id),
        params={"start": "9999-12-01", "end": "9999-12-31"},
    )
    assert response.status_code == 200
    assert [o["date"] for o in response.json()["occurrences"]] == [
        "9999-12-01", "9999-12-08", "9999-12-15", "9999-12-22", "9999-12-29",
    ]


# ─── Health ──────────────────────────────────────────────────────

async def test_health_check(client):
    response = await client.get("/api/v1/health/")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_readiness_check(client):
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["checks"]["database"] == "healthy"
