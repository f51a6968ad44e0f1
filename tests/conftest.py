"""
Test fixtures for the User Account API test suite.

  - db_engine / db_session: Fresh in-memory SQLite database for each test
  - client: Async HTTP test client wired to the test database
  - registered_user: A user created through the real POST /users endpoint
  - directory / verifier / handler: In-memory collaborators for exercising
    AccountRequestHandler without a database or Argon2

Key design decisions:
  - In-memory SQLite (sqlite+aiosqlite://) is used for speed and isolation.
    Each test gets a completely fresh database, so no state leaks between tests.
  - FastAPI's get_db dependency is overridden to inject the test session,
    so the application code runs exactly as it does in production.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from account_api.database import Base, get_db
from account_api.main import app
from account_api.services.account_handler import AccountRequestHandler


# In-memory SQLite for fast, isolated tests
TEST_DATABASE_URL = "sqlite+aiosqlite://"

PLACEHOLDER = "placeholder-hash"


@pytest_asyncio.fixture
async def db_engine():
    """Create a fresh async engine with all tables for each test."""
    engine = create_async_engine(TEST_DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Provide an async session bound to the test engine."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_engine):
    """
    Async HTTP test client with the test database injected.

    This overrides the get_db dependency so all requests hit the
    in-memory test database instead of the real one.
    """
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def registered_user(client):
    """
    A user created via the real POST /users endpoint.

    Returns the user's public record (id, name, email, created_at) plus
    the plaintext password used to create it.
    """
    response = await client.post(
        "/users",
        json={
            "name": "Test User",
            "email": "testuser@example.com",
            "password": "Secret123",
            "confirm_password": "Secret123",
        },
    )
    assert response.status_code == 200, f"Create failed: {response.text}"

    users = (await client.get("/users")).json()
    user = next(u for u in users if u["email"] == "testuser@example.com")
    return {**user, "password": "Secret123"}


# ---------------------------------------------------------------------------
# In-memory collaborators for handler tests
# ---------------------------------------------------------------------------

@dataclass
class FakeUser:
    name: str
    email: str
    password: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class FakeDirectory:
    """
    UserDirectory kept in a dict.

    Passwords are stored as "hashed:<plaintext>" so FakeVerifier can check
    them. Set `fail_writes` to make every mutation report failure. Every
    call is appended to `calls` as (method, args).
    """

    def __init__(self):
        self.users: dict[uuid.UUID, FakeUser] = {}
        self.fail_writes = False
        self.calls: list[tuple] = []

    def add(self, name: str, email: str, password: str) -> FakeUser:
        user = FakeUser(name=name, email=email, password=f"hashed:{password}")
        self.users[user.id] = user
        return user

    async def list_all(self):
        self.calls.append(("list_all",))
        return list(self.users.values())

    async def get_by_id(self, user_id):
        self.calls.append(("get_by_id", user_id))
        return self.users.get(user_id)

    async def get_by_email(self, email):
        self.calls.append(("get_by_email", email))
        return next((u for u in self.users.values() if u.email == email), None)

    async def create(self, name, email, password):
        self.calls.append(("create", name, email, password))
        if self.fail_writes:
            return False
        self.add(name, email, password)
        return True

    async def update(self, user_id, name, email):
        self.calls.append(("update", user_id, name, email))
        user = self.users.get(user_id)
        if self.fail_writes or user is None:
            return False
        user.name = name
        user.email = email
        return True

    async def set_password(self, user_id, new_password):
        self.calls.append(("set_password", user_id, new_password))
        user = self.users.get(user_id)
        if self.fail_writes or user is None:
            return False
        user.password = f"hashed:{new_password}"
        return True

    async def delete(self, user_id):
        self.calls.append(("delete", user_id))
        if self.fail_writes or user_id not in self.users:
            return False
        del self.users[user_id]
        return True


class FakeVerifier:
    """SecretVerifier that records every comparison it is asked to make."""

    def __init__(self):
        self.calls: list[tuple[str, str]] = []

    async def matches(self, plaintext, stored_hash):
        self.calls.append((plaintext, stored_hash))
        return stored_hash == f"hashed:{plaintext}"


@pytest.fixture
def directory():
    return FakeDirectory()


@pytest.fixture
def verifier():
    return FakeVerifier()


@pytest.fixture
def handler(directory, verifier):
    return AccountRequestHandler(
        directory=directory,
        verifier=verifier,
        placeholder_hash=PLACEHOLDER,
    )
