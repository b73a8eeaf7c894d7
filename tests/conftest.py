"""Shared fixtures: in-memory database, API client and access tokens."""

import os

# Settings are read at import time, so configure them before importing gainai
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["APP_SECRET_KEY"] = "test-secret-key-with-enough-bytes-for-hs256"
os.environ["APP_ENV"] = "development"
os.environ.pop("JWT_SECRET_KEY", None)
os.environ.pop("JWT_AUDIENCE", None)

import uuid
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from gainai.database import get_db
from gainai.main import app
from gainai.models import Base, Client, Location
from gainai.utils.security import create_access_token


@pytest_asyncio.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """In-memory SQLite engine with working SAVEPOINTs and foreign keys."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # Let SQLAlchemy emit BEGIN itself so nested transactions work
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    """A session for service-level tests."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncClient]:
    """API client bound to the in-memory database."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def user_id() -> uuid.UUID:
    return uuid.uuid4()


def auth_headers(user_id: uuid.UUID, role: str) -> dict[str, str]:
    """Return headers carrying an access token for the given role."""
    token = create_access_token(user_id, role=role, email="operator@agency.test")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def editor_headers(user_id: uuid.UUID) -> dict[str, str]:
    return auth_headers(user_id, "EDITOR")


@pytest.fixture
def viewer_headers() -> dict[str, str]:
    return auth_headers(uuid.uuid4(), "VIEWER")


@pytest_asyncio.fixture
async def existing_client(session_factory: async_sessionmaker[AsyncSession]) -> Client:
    """A client row that location and competitor imports can reference."""
    async with session_factory() as session:
        record = Client(name="Acme Corp", slug="acme-corp", contact_email="john@acme.com")
        session.add(record)
        await session.commit()
        return record


@pytest_asyncio.fixture
async def existing_location(
    session_factory: async_sessionmaker[AsyncSession], existing_client: Client
) -> Location:
    """A location row that post and media imports can reference."""
    async with session_factory() as session:
        record = Location(client_id=existing_client.id, name="Acme London", address="1 High St")
        session.add(record)
        await session.commit()
        return record
