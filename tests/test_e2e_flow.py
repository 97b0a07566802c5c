"""Full-flow E2E test: a patient's first days after surgery, API only.

Walks the real auth pipeline (no identity override): sign up → set the
surgery date → work through the brochure checklist → keep a symptom
diary → clear it → sign in again and find the state intact.
"""

from datetime import timedelta

import pytest

from aftercare import validation
from conftest import TEST_PASSWORD, bearer, unique_email


@pytest.mark.asyncio
async def test_patient_recovery_flow(unauthenticated_client):
    c = unauthenticated_client
    email = unique_email("sarah")

    # 1. Register
    r = await c.post(
        "/api/v1/auth/signup",
        json={
            "firstName": "Sarah",
            "lastName": "Johnson",
            "email": email,
            "password": TEST_PASSWORD,
        },
    )
    assert r.status_code == 201
    token = r.json()["data"]["token"]
    headers = bearer(token)

    # 2. Surgery was five days ago
    surgery = validation.utc_today() - timedelta(days=5)
    r = await c.patch(
        "/api/v1/auth/surgery-date", headers=headers, json={"surgeryDate": surgery.isoformat()}
    )
    assert r.json()["data"]["user"]["recoveryDay"] == 5

    # 3. Tick two checklist items
    for item_id in ("rest-in-bed", "avoid-sitting"):
        r = await c.post(
            "/api/v1/brochures/progress",
            headers=headers,
            json={"sectionId": "activity-restrictions", "itemId": item_id, "completed": True},
        )
        assert r.status_code == 200
    r = await c.get("/api/v1/brochures/progress/summary", headers=headers)
    assert r.json()["data"]["completedItems"] == 2

    # 4. Symptom diary
    r = await c.post(
        "/api/v1/tracker", headers=headers, json={"date": "2024-01-15", "painLevel": 5}
    )
    assert r.status_code == 201
    entry = r.json()["data"]
    assert entry["id"]

    r = await c.get("/api/v1/tracker", headers=headers)
    assert [e["id"] for e in r.json()["data"]] == [entry["id"]]

    r = await c.delete("/api/v1/tracker/clear", headers=headers)
    assert r.status_code == 200
    r = await c.get("/api/v1/tracker", headers=headers)
    assert r.json()["data"] == []

    # 5. Sign in again; progress and surgery date are still there
    r = await c.post("/api/v1/auth/signin", json={"email": email, "password": TEST_PASSWORD})
    assert r.status_code == 200
    again = r.json()["data"]
    assert again["user"]["surgeryDate"] == surgery.isoformat()

    r = await c.get("/api/v1/brochures/progress", headers=bearer(again["token"]))
    assert {p["itemId"] for p in r.json()["data"]} == {"rest-in-bed", "avoid-sitting"}

    # 6. Reset the checklist
    r = await c.delete("/api/v1/brochures/progress/reset", headers=headers)
    assert r.status_code == 200
    r = await c.get("/api/v1/brochures/progress/summary", headers=headers)
    assert r.json()["data"]["completedItems"] == 0
