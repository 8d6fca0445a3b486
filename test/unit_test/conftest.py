import os
from typing import AsyncGenerator, Awaitable, Callable

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel.pool import StaticPool

from test.settings import test_settings

# Use in-memory SQLite for testing
TEST_DATABASE_URL = test_settings.database.url

# Set test environment before importing the application
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ.setdefault("ENABLE_FILE_LOGGING", "false")
os.environ.setdefault("LOGFIRE_ENABLED", "false")


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with every storefront table."""
    from celestial_crystals.core.database.utils import create_all

    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    session_maker = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def synced_catalog(session: AsyncSession):
    """Sync the static catalog into the database with 25 units per crystal."""
    from celestial_crystals.server.services.inventory import InventoryService

    return await InventoryService(session).sync_catalog(25)


@pytest_asyncio.fixture
async def make_user(session: AsyncSession) -> Callable[..., Awaitable]:
    """Factory for persisted users."""
    from celestial_crystals.core.database.entities.users import User

    async def _make_user(email: str = "jane@example.com", **fields):
        user = User(email=email, **fields)
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user

    return _make_user
