"""Test fixtures: isolated DB sessions that rollback after each test.

Testing pattern for async SQLAlchemy + FastAPI + asyncpg:

1. Each test gets its own engine + connection + transaction (function-scoped)
2. Tables are created inside that transaction, so a blank database works
3. The session uses join_transaction_mode="create_savepoint" so that
   when the service layer calls commit(), it creates a SAVEPOINT, not a real commit.
4. After the test, we rollback the outer transaction and all test data vanishes.

DB-backed tests are skipped when PostgreSQL is not reachable. Pure unit
tests and the DB-free API tests (content, health, CLI) always run.
"""

import os

# Must be set before aftercare.config is imported anywhere.
os.environ.setdefault("AFTERCARE_BCRYPT_ROUNDS", "4")
os.environ.setdefault(
    "AFTERCARE_JWT_SECRET", "test-secret-with-enough-bytes-for-hs256-signing"
)

import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from aftercare.auth.dependencies import (
    CurrentIdentity,
    get_current_user,
    get_current_user_optional,
)
from aftercare.config import settings
from aftercare.db.engine import get_db
from aftercare.db.models import Base
from aftercare.main import create_app
from aftercare.services.user_service import UserService

TEST_DB_URL = settings.database_url

TEST_PASSWORD = "Passw0rd!"


def unique_email(prefix: str = "user") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}@example.com"


@pytest_asyncio.fixture()
async def app():
    """A fresh app per test, so no pooled connection outlives its event loop."""
    application = create_app(settings)
    yield application
    application.dependency_overrides.clear()
    await application.state.engine.dispose()


@pytest_asyncio.fixture()
async def db_session():
    """Per-test session with automatic rollback via savepoints.

    Creates a fresh engine+connection+transaction per test.
    join_transaction_mode="create_savepoint" means every session.commit()
    becomes a SAVEPOINT. After the test, the outer transaction rolls back.
    """
    engine = create_async_engine(TEST_DB_URL, echo=False)
    try:
        conn = await engine.connect()
    except (OSError, SQLAlchemyError) as e:
        await engine.dispose()
        pytest.skip(f"PostgreSQL not reachable: {e}")

    trans = await conn.begin()
    await conn.run_sync(Base.metadata.create_all)
    session = AsyncSession(
        bind=conn,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    try:
        yield session
    finally:
        await session.close()
        await trans.rollback()
        await conn.close()
        await engine.dispose()


@pytest_asyncio.fixture()
async def test_user(db_session):
    """A real, active account that the `client` fixture acts as."""
    users = UserService(db_session, bcrypt_rounds=settings.bcrypt_rounds)
    return await users.create_user(
        "Test", "Patient", unique_email("patient"), TEST_PASSWORD
    )


@pytest_asyncio.fixture()
async def client(app, db_session, test_user):
    """HTTP client with the app's get_db and auth overridden for testing.

    get_current_user (and its optional variant) resolve straight to
    test_user, so tests don't need to sign up and sign in first.
    """
    async def override_get_db():
        yield db_session

    def override_get_current_user():
        return CurrentIdentity(test_user)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = override_get_current_user
    app.dependency_overrides[get_current_user_optional] = override_get_current_user

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture()
async def unauthenticated_client(app, db_session):
    """HTTP client WITHOUT auth override, for testing real token flows.

    Only get_db is overridden (for DB isolation); the auth pipeline runs
    for real, so callers must send a bearer token from /auth/signup or
    /auth/signin.
    """
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture()
async def public_client(app):
    """HTTP client with no overrides and no database behind it.

    Good for routes that never touch the DB: static brochure content
    requested anonymously, validation failures, routing errors.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def signup(client, **overrides) -> dict:
    """Register through the API and return the response `data`."""
    body = {
        "firstName": "Sarah",
        "lastName": "Johnson",
        "email": unique_email("sarah"),
        "password": TEST_PASSWORD,
    }
    body.update(overrides)
    r = await client.post("/api/v1/auth/signup", json=body)
    assert r.status_code == 201, r.text
    return r.json()["data"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
