"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database sessions, cache gateways (working and
unreachable), scripted generation clients, sample domain objects
Dependencies: pytest, sqlalchemy, aiosqlite, fakeredis
System role: Test infrastructure and fixture management
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock
import uuid

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from component_studio.boundary.cache.cache_gateway import CacheGateway
from component_studio.models.session import Artifact, ChatMessage, Session


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
    from sqlalchemy.pool import StaticPool
    from component_studio.boundary.db.base import Base
    import component_studio.boundary.db.models  # noqa: F401

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Create session factory
    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Create session for test
    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def fake_redis():
    """
    Provide an in-process Redis double speaking the redis.asyncio API.

    Yields:
        FakeAsyncRedis: Client with decode_responses=True
    """
    from fakeredis import FakeAsyncRedis

    client = FakeAsyncRedis(decode_responses=True)
    yield client
    await client.flushall()
    await client.aclose()


@pytest.fixture
def cache_gateway(fake_redis) -> CacheGateway:
    """Provide a working cache gateway backed by fake Redis."""
    return CacheGateway(fake_redis)


@pytest.fixture
def unreachable_cache() -> CacheGateway:
    """
    Provide a cache gateway whose every call fails with a connection error.

    Returns:
        CacheGateway: Gateway around a client that cannot reach Redis
    """
    client = AsyncMock()
    refused = RedisConnectionError("Connection refused")
    client.get = AsyncMock(side_effect=refused)
    client.set = AsyncMock(side_effect=refused)
    client.delete = AsyncMock(side_effect=refused)
    client.ping = AsyncMock(side_effect=refused)
    client.aclose = AsyncMock(side_effect=refused)
    return CacheGateway(client)


@pytest.fixture
def mock_generation_client():
    """
    Create mock generation client for testing.

    Returns:
        AsyncMock: Client whose generate() returns a fixed jsx block
    """
    client = AsyncMock()
    client.generate = AsyncMock(
        return_value="```jsx\nfunction Btn(){return <button>Hi</button>}\n```"
    )
    return client


@pytest.fixture
def owner_id() -> str:
    """Provide a test owner ID."""
    return "user-123"


@pytest.fixture
def session_id():
    """Generate a test session ID."""
    return uuid.uuid4()


@pytest.fixture
def sample_session(session_id, owner_id) -> Session:
    """Provide a session with one exchange and a current artifact."""
    now = datetime.now(timezone.utc)
    return Session(
        id=session_id,
        owner_id=owner_id,
        title="Pricing card",
        transcript=[
            ChatMessage(role="user", content="make a pricing card"),
            ChatMessage(role="assistant", content="```jsx\nfunction Card(){return <div/>}\n```"),
        ],
        artifact=Artifact(markup="function Card(){return <div/>}", style=".card { color: red; }"),
        ui_state={"activeTab": "preview"},
        created_at=now,
        updated_at=now,
    )
