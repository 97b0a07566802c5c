"""User directory and preferences API tests."""

import uuid

import pytest
import pytest_asyncio

from aftercare.services.user_service import UserService
from conftest import TEST_PASSWORD


@pytest_asyncio.fixture
async def more_users(db_session):
    """Three extra accounts with predictable names; one is deactivated."""
    svc = UserService(db_session, bcrypt_rounds=4)
    tag = uuid.uuid4().hex[:6]
    users = [
        await svc.create_user("Alice", "Zephyr", f"alice-{tag}@example.com", TEST_PASSWORD),
        await svc.create_user("Bob", "Yates", f"bob-{tag}@example.com", TEST_PASSWORD),
        await svc.create_user("Carol", "Xu", f"carol-{tag}@example.com", TEST_PASSWORD),
    ]
    await svc.deactivate_user(users[2].id)
    return tag, users


@pytest.mark.asyncio
async def test_list_users_paginated(client, more_users):
    r = await client.get("/api/v1/users", params={"page": 1, "limit": 2})
    assert r.status_code == 200
    page = r.json()["data"]
    assert page["page"] == 1
    assert page["limit"] == 2
    assert len(page["docs"]) == 2
    assert page["totalDocs"] >= 4
    assert page["hasNextPage"] is True
    assert page["hasPrevPage"] is False
    assert page["pagingCounter"] == 1


@pytest.mark.asyncio
async def test_list_users_search(client, more_users):
    tag, _ = more_users
    r = await client.get("/api/v1/users", params={"search": f"ALICE-{tag}"})
    docs = r.json()["data"]["docs"]
    assert [d["firstName"] for d in docs] == ["Alice"]


@pytest.mark.asyncio
async def test_list_users_sorted_and_filtered(client, more_users):
    tag, _ = more_users
    r = await client.get(
        "/api/v1/users",
        params={"search": tag, "sortBy": "lastName", "sortOrder": "asc", "isActive": "true"},
    )
    docs = r.json()["data"]["docs"]
    assert [d["lastName"] for d in docs] == ["Yates", "Zephyr"]


@pytest.mark.asyncio
async def test_list_users_limit_capped(app, client):
    r = await client.get("/api/v1/users", params={"limit": 1000})
    assert r.status_code == 200
    assert r.json()["data"]["limit"] == app.state.settings.users_max_page_size


@pytest.mark.asyncio
async def test_list_users_bad_sort_order(client):
    r = await client.get("/api/v1/users", params={"sortOrder": "sideways"})
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "sortOrder"


@pytest.mark.asyncio
async def test_get_user(client, test_user):
    r = await client.get(f"/api/v1/users/{test_user.id}")
    assert r.status_code == 200
    assert r.json()["data"]["user"]["email"] == test_user.email


@pytest.mark.asyncio
@pytest.mark.parametrize("user_id", [str(uuid.uuid4()), "not-a-uuid"])
async def test_get_unknown_user(client, user_id):
    r = await client.get(f"/api/v1/users/{user_id}")
    assert r.status_code == 404
    assert r.json()["error"] == "User not found"


@pytest.mark.asyncio
async def test_users_require_auth(unauthenticated_client):
    r = await unauthenticated_client.get("/api/v1/users")
    assert r.status_code == 401


# ═══════════════════════════════════════════════════════════
# Preferences
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_preferences_start_empty(client):
    r = await client.get("/api/v1/users/me/preferences")
    assert r.status_code == 200
    assert r.json()["data"]["preferences"] == {}


@pytest.mark.asyncio
async def test_preferences_shallow_merge(client):
    r = await client.patch(
        "/api/v1/users/me/preferences",
        json={"preferences": {"reminders": True, "theme": "light"}},
    )
    assert r.status_code == 200

    r = await client.patch(
        "/api/v1/users/me/preferences", json={"preferences": {"theme": "dark"}}
    )
    assert r.json()["data"]["preferences"] == {"reminders": True, "theme": "dark"}

    r = await client.get("/api/v1/users/me/preferences")
    assert r.json()["data"]["preferences"] == {"reminders": True, "theme": "dark"}
