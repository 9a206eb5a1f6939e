"""Pytest configuration and shared fixtures for backend tests."""
import os
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Set required environment variables for testing
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from eventhub.core.config import Settings  # noqa: E402
from eventhub.core.security import CurrentUser  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        JWT_SECRET="test-secret",
        DEFAULT_VENUE_CAPACITY=100,
    )


@pytest_asyncio.fixture
async def test_engine():
    """Create in-memory test database engine."""
    from eventhub.models import Base
    from eventhub.db.database import enable_sqlite_foreign_keys

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine):
    """Create test database session."""
    async_session = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with async_session() as session:
        yield session


@pytest.fixture
def owner() -> CurrentUser:
    return CurrentUser(id="user-owner", email="owner@example.com")


@pytest.fixture
def intruder() -> CurrentUser:
    return CurrentUser(id="user-intruder", email="intruder@example.com")


@pytest.fixture
def derby_payload() -> dict:
    return {
        "name": "Derby",
        "sportType": "Soccer",
        "eventDate": "2025-05-01",
        "venues": [
            {
                "name": "Field A",
                "address": "1 Main St",
                "city": "Springfield",
                "state": "IL",
                "capacity": 500,
            }
        ],
    }


@pytest_asyncio.fixture
async def client(test_session, settings):
    """Create test HTTP client with database override."""
    from eventhub.main import create_app
    from eventhub.dependencies import get_session

    app = create_app(settings)

    async def override_get_session():
        yield test_session

    app.dependency_overrides[get_session] = override_get_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def _signed_in_headers(client: AsyncClient, email: str) -> dict[str, str]:
    await client.post("/api/auth/sign-up", json={"email": email, "password": "secret123"})
    response = await client.post("/api/auth/sign-in", json={"email": email, "password": "secret123"})
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def auth_headers(client: AsyncClient) -> dict[str, str]:
    return await _signed_in_headers(client, "owner@example.com")


@pytest_asyncio.fixture
async def other_auth_headers(client: AsyncClient) -> dict[str, str]:
    return await _signed_in_headers(client, "other@example.com")
