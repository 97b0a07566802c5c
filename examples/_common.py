"""
Shared helpers for Aftercare examples.

Handles the health check and sign-up so each example can focus on its
specific workflow.
"""

import os
import sys
import uuid

import httpx

ROOT = os.environ.get("AFTERCARE_API_URL", "http://localhost:3007").rstrip("/")
BASE = f"{ROOT}/api/v1"


def check_backend() -> None:
    """Verify the backend is reachable and healthy."""
    try:
        resp = httpx.get(f"{ROOT}/health", timeout=5)
    except httpx.ConnectError:
        print(f"ERROR: Backend not reachable at {ROOT}")
        print("Start it with:  aftercare serve --reload")
        sys.exit(1)

    if resp.status_code != 200:
        print(f"ERROR: Health check returned {resp.status_code}")
        sys.exit(1)

    health = resp.json()
    print("Backend health:")
    print(f"  Status:   {health['status']}")
    print(f"  Database: {health['database']}")

    if health["database"] != "ok":
        print("\nERROR: Database is not reachable. Check AFTERCARE_DATABASE_URL.")
        sys.exit(1)


def signup() -> tuple[dict, str]:
    """Register a fresh patient account, returning (user, token).

    Uses a unique email per run so examples can be re-run.
    """
    run_id = uuid.uuid4().hex[:8]
    resp = httpx.post(
        f"{BASE}/auth/signup",
        json={
            "firstName": "Demo",
            "lastName": f"Patient {run_id}"[:30],
            "email": f"demo-{run_id}@example.com",
            "password": "DemoPassw0rd",
        },
        timeout=10,
    )
    if resp.status_code != 201:
        print(f"ERROR: Sign-up failed: {resp.status_code} {resp.text}")
        sys.exit(1)

    data = resp.json()["data"]
    return data["user"], data["token"]


def create_client() -> httpx.Client:
    """Check backend, sign up, and return an httpx Client with auth headers."""
    check_backend()
    user, token = signup()
    print(f"  Auth:     signed up as {user['email']}")
    return httpx.Client(
        base_url=BASE,
        timeout=10,
        headers={"Authorization": f"Bearer {token}"},
    )
