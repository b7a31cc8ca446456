"""Shared pytest fixtures configured to use SQLite in-memory for unit tests."""

import logging
import os
from datetime import datetime, timedelta, timezone
from uuid import uuid4

# Must be in place before the settings object is built on first import
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")
os.environ["ENVIRONMENT"] = "test"

import pytest
from httpx import ASGITransport, AsyncClient

from tunganotes.config import Settings
from tunganotes.core.models.note import Note
from tunganotes.core.models.user import User
from tunganotes.database import Database, get_db_session
from tunganotes.main import create_app
from tunganotes.security.jwt import create_access_token
from tunganotes.security.password import hash_password

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

TEST_PASSWORD = "TestPassword123!"


@pytest.fixture(scope="session")
def test_settings():
    """Settings for testing using SQLite in-memory DB."""
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite:///:memory:",
        secret_key="test-secret-key",
        create_tables_on_startup=False,
        log_to_file=False,
        environment="test",
    )


@pytest.fixture(scope="session")
def password_hash():
    """bcrypt is slow; hash the shared test password once."""
    return hash_password(TEST_PASSWORD)


@pytest.fixture
async def test_database(test_settings):
    """A fresh in-memory database per test."""
    database = Database(test_settings.database_url)
    await database.create_tables()
    try:
        yield database
    finally:
        await database.dispose()


@pytest.fixture
async def test_session(test_database):
    async with test_database.session() as session:
        yield session


@pytest.fixture
def test_app(test_settings, test_database, test_session):
    """Test FastAPI app sharing the test session with the request handlers."""
    app = create_app(test_settings)
    app.state.database = test_database

    async def _override_get_db():
        yield test_session

    app.dependency_overrides[get_db_session] = _override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(test_app):
    """Create async test client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _create_user(session, username, password_hash):
    user = User(username=username, password_hash=password_hash, full_name="Test User")
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
async def test_user(test_session, password_hash):
    """Create a test user in the database."""
    return await _create_user(test_session, f"testuser_{uuid4().hex[:8]}", password_hash)


@pytest.fixture
async def other_user(test_session, password_hash):
    return await _create_user(test_session, f"other_{uuid4().hex[:8]}", password_hash)


def bearer(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': str(user.id)})}"}


@pytest.fixture
def auth_headers(test_user):
    """Create authentication headers with a valid JWT token."""
    return bearer(test_user)


@pytest.fixture
def other_headers(other_user):
    return bearer(other_user)


@pytest.fixture
def make_note(test_session):
    """Insert a note directly, optionally with an explicit creation time."""

    async def _make(owner, title="Test Note", content="This is a test note content", created_at=None):
        created_at = created_at or datetime.now(timezone.utc)
        note = Note(
            title=title,
            content=content,
            owner_id=owner.id,
            created_at=created_at,
            updated_at=created_at,
        )
        test_session.add(note)
        await test_session.commit()
        await test_session.refresh(note)
        return note

    return _make


@pytest.fixture
def minutes_ago():
    def _at(minutes):
        return datetime.now(timezone.utc) - timedelta(minutes=minutes)

    return _at


class FakeRedis:
    """In-memory stand-in for redis.asyncio.Redis."""

    def __init__(self):
        self.storage = {}
        self.ttls = {}
        self.closed = False

    async def ping(self):
        return True

    async def set(self, key, value):
        self.storage[key] = value
        return True

    async def setex(self, key, expire, value):
        self.storage[key] = value
        self.ttls[key] = expire
        return True

    async def exists(self, key):
        return int(key in self.storage)

    async def aclose(self):
        self.closed = True


@pytest.fixture
def fake_redis():
    """Plug a FakeRedis into the process-wide client for one test."""
    from tunganotes.core.redis_client import get_redis_client

    client = get_redis_client()
    previous = client.redis
    client.redis = FakeRedis()
    try:
        yield client.redis
    finally:
        client.redis = previous


@pytest.fixture
def redis_factory():
    return FakeRedis


@pytest.fixture
def test_password():
    return TEST_PASSWORD
