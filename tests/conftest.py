"""Shared pytest fixtures configured to use SQLite in-memory databases."""

import logging
import os
import tempfile
from uuid import uuid4

# must be set before secondbrain.config builds its Settings instance
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="secondbrain-logs-"))
os.environ["SECONDBRAIN_SKIP_LIFESPAN_DB"] = "1"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from secondbrain.core.models import BaseModel, User
from secondbrain.core.redis_client import get_redis_client
from secondbrain.core.services.tag_service import TagService
from secondbrain.database import get_db_session
from secondbrain.main import app
from secondbrain.security.jwt import create_access_token
from secondbrain.security.password import hash_password

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

PASSWORD = "Secur3P@ss"


def _enable_sqlite_fks(engine) -> None:
    # SQLite only enforces ON DELETE CASCADE with this pragma
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,  # keep the same memory DB across connections
        connect_args={"check_same_thread": False},
    )
    _enable_sqlite_fks(engine)

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def file_engine(tmp_path):
    """File-backed database, for tests that need independent connections."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'brain.db'}")
    _enable_sqlite_fks(engine)

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def test_app(session_factory):
    """App with one fresh session per request, like production."""

    async def _override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = _override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(test_app):
    """Async test client running in the test's event loop."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class FakeRedis:
    """In-memory stand-in for ``redis.asyncio.Redis``."""

    def __init__(self):
        self.storage = {}
        self.ttls = {}

    async def ping(self):
        return True

    async def get(self, key):
        return self.storage.get(key)

    async def set(self, key, value):
        self.storage[key] = value
        return True

    async def setex(self, key, expire, value):
        self.storage[key] = value
        self.ttls[key] = expire
        return True

    async def delete(self, key):
        return 1 if self.storage.pop(key, None) is not None else 0

    async def exists(self, key):
        return 1 if key in self.storage else 0

    async def aclose(self):
        return None


@pytest.fixture
def fake_redis():
    """Plug a fake connection into the Redis client singleton."""
    client = get_redis_client()
    fake = FakeRedis()
    client.redis = fake
    yield fake
    client.redis = None


@pytest.fixture
def make_user(test_session):
    """Factory inserting an active local user."""

    async def _make_user(email=None, password=PASSWORD, **extra):
        user = User(
            email=email or f"user_{uuid4().hex[:8]}@example.com",
            password_hash=hash_password(password),
            is_active=True,
            **extra,
        )
        test_session.add(user)
        await test_session.commit()
        await test_session.refresh(user)
        return user

    return _make_user


def _bearer(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': str(user.id)})}"}


@pytest.fixture
def headers_for():
    """Factory building bearer headers for a user."""
    return _bearer


@pytest.fixture
async def test_user(make_user):
    return await make_user()


@pytest.fixture
def auth_headers(test_user):
    """Create authentication headers with a valid JWT token."""
    return _bearer(test_user)


@pytest.fixture
async def other_user(make_user):
    return await make_user()


@pytest.fixture
def other_headers(other_user):
    return _bearer(other_user)


@pytest.fixture
async def global_tags(test_session):
    """Seed the default global tags and return them by title."""
    service = TagService(test_session)
    await service.seed_global_tags(["productivity", "tech", "learning", "ideas"])
    return {tag.title: tag for tag in await service.list_tags(uuid4())}
