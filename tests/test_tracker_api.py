"""Symptom tracker API tests: CRUD scoped to the owner."""

import uuid

import pytest

from aftercare.services.symptom_service import SymptomService
from aftercare.services.user_service import UserService
from conftest import TEST_PASSWORD, unique_email


async def _create(client, **overrides):
    body = {"date": "2024-01-15", "painLevel": 5}
    body.update(overrides)
    r = await client.post("/api/v1/tracker", json=body)
    assert r.status_code == 201, r.text
    return r.json()["data"]


@pytest.mark.asyncio
async def test_create_entry(client, test_user):
    entry = await _create(
        client, location="Lower abdomen", description="Dull ache", medications="Tylenol"
    )
    assert uuid.UUID(entry["id"])
    assert entry["userId"] == str(test_user.id)
    assert entry["date"] == "2024-01-15"
    assert entry["painLevel"] == 5
    assert entry["location"] == "Lower abdomen"
    assert entry["timestamp"]


@pytest.mark.asyncio
async def test_create_entry_optional_fields_default_empty(client):
    entry = await _create(client)
    assert (entry["location"], entry["description"], entry["medications"]) == ("", "", "")


@pytest.mark.asyncio
async def test_create_entry_normalizes_timestamp_date(client):
    entry = await _create(client, date="2024-01-15T22:00:00Z")
    assert entry["date"] == "2024-01-15"


@pytest.mark.asyncio
@pytest.mark.parametrize("pain", [-1, 11, 4.5, "7"])
async def test_create_entry_rejects_pain_level(client, pain):
    r = await client.post("/api/v1/tracker", json={"date": "2024-01-15", "painLevel": pain})
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "painLevel"


@pytest.mark.asyncio
@pytest.mark.parametrize("pain", [0, 10])
async def test_create_entry_pain_bounds_inclusive(client, pain):
    entry = await _create(client, painLevel=pain)
    assert entry["painLevel"] == pain


@pytest.mark.asyncio
async def test_create_entry_rejects_bad_date(client):
    r = await client.post("/api/v1/tracker", json={"date": "2024-13-45", "painLevel": 3})
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "date"


@pytest.mark.asyncio
async def test_list_entries_newest_first(client):
    first = await _create(client, painLevel=3)
    second = await _create(client, painLevel=6)
    r = await client.get("/api/v1/tracker")
    ids = [e["id"] for e in r.json()["data"]]
    assert ids == [second["id"], first["id"]]


@pytest.mark.asyncio
async def test_update_entry_partial(client):
    entry = await _create(client, location="Incision")
    r = await client.put(f"/api/v1/tracker/{entry['id']}", json={"painLevel": 2})
    assert r.status_code == 200
    updated = r.json()["data"]
    assert updated["painLevel"] == 2
    assert updated["location"] == "Incision"
    assert updated["date"] == "2024-01-15"


@pytest.mark.asyncio
async def test_update_entry_validates(client):
    entry = await _create(client)
    r = await client.put(f"/api/v1/tracker/{entry['id']}", json={"painLevel": 12})
    assert r.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize("entry_id", [str(uuid.uuid4()), "not-a-uuid"])
async def test_update_unknown_entry(client, entry_id):
    r = await client.put(f"/api/v1/tracker/{entry_id}", json={"painLevel": 2})
    assert r.status_code == 404
    assert r.json()["error"] == "Symptom entry not found"


@pytest.mark.asyncio
async def test_delete_entry(client):
    entry = await _create(client)
    r = await client.delete(f"/api/v1/tracker/{entry['id']}")
    assert r.status_code == 200

    r = await client.delete(f"/api/v1/tracker/{entry['id']}")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_clear_is_not_an_entry_id(client):
    await _create(client)
    await _create(client)
    r = await client.delete("/api/v1/tracker/clear")
    assert r.status_code == 200
    assert r.json()["message"] == "All symptom entries cleared successfully"

    r = await client.get("/api/v1/tracker")
    assert r.json()["data"] == []


@pytest.mark.asyncio
async def test_other_users_entries_are_invisible(client, db_session):
    """Another user's entry looks exactly like a missing one."""
    other = await UserService(db_session, bcrypt_rounds=4).create_user(
        "Other", "Patient", unique_email("other"), TEST_PASSWORD
    )
    theirs = await SymptomService(db_session).create(other.id, "2024-01-10", 7)

    r = await client.get("/api/v1/tracker")
    assert str(theirs.id) not in [e["id"] for e in r.json()["data"]]

    r = await client.put(f"/api/v1/tracker/{theirs.id}", json={"painLevel": 1})
    assert r.status_code == 404
    r = await client.delete(f"/api/v1/tracker/{theirs.id}")
    assert r.status_code == 404

    await client.delete("/api/v1/tracker/clear")
    assert len(await SymptomService(db_session).list_by_user(other.id)) == 1


@pytest.mark.asyncio
async def test_tracker_requires_auth(unauthenticated_client):
    r = await unauthenticated_client.get("/api/v1/tracker")
    assert r.status_code == 401
