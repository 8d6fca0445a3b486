"""
Unit tests for FastAPI application lifespan management.

Tests verify that the application startup and shutdown events are properly
handled, including table creation, catalog sync and session handling.
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, inspect, select, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel.pool import StaticPool

from celestial_crystals.catalog.data import CRYSTAL_CATALOG

pytestmark = pytest.mark.asyncio

# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

EXPECTED_TABLES = [
    "cc_users",
    "cc_addresses",
    "cc_crystals",
    "cc_inventory_logs",
    "cc_orders",
    "cc_order_items",
    "cc_order_status_history",
    "cc_reviews",
    "cc_email_subscribers",
    "cc_blog_posts",
]


@pytest.fixture(scope="function")
async def bare_engine():
    """An in-memory engine with no tables yet."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    await engine.dispose()


async def _table_names(engine: AsyncEngine):
    async with engine.begin() as conn:
        return await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())


class TestLifespanStartup:
    """Test application startup lifespan events."""

    async def test_lifespan_startup_initializes_database(self):
        from fastapi import FastAPI

        from celestial_crystals.server.main import lifespan

        with (
            patch("celestial_crystals.server.main.init_db", new_callable=AsyncMock) as mock_init_db,
            patch("celestial_crystals.server.main.engine") as mock_engine,
        ):
            mock_engine.dispose = AsyncMock()
            async with lifespan(FastAPI()) as result:
                mock_init_db.assert_called_once()
                assert result is None
            mock_engine.dispose.assert_called_once()

    async def test_lifespan_startup_logs_success(self):
        from fastapi import FastAPI

        from celestial_crystals.server.main import lifespan

        with (
            patch("celestial_crystals.server.main.init_db", new_callable=AsyncMock),
            patch("celestial_crystals.server.main.engine") as mock_engine,
            patch("celestial_crystals.server.main.logger") as mock_logger,
        ):
            mock_engine.dispose = AsyncMock()
            async with lifespan(FastAPI()):
                pass

            calls = [call[0][0] for call in mock_logger.info.call_args_list]
            assert any("Starting up" in call for call in calls)
            assert any("Database initialized successfully" in call for call in calls)
            assert any("Shutting down" in call for call in calls)

    async def test_lifespan_startup_handles_init_db_exception(self):
        """A database failure is logged and the server still starts."""
        from fastapi import FastAPI

        from celestial_crystals.server.main import lifespan

        with (
            patch("celestial_crystals.server.main.init_db", new_callable=AsyncMock) as mock_init_db,
            patch("celestial_crystals.server.main.engine") as mock_engine,
            patch("celestial_crystals.server.main.logger") as mock_logger,
        ):
            mock_init_db.side_effect = Exception("Database connection failed")
            mock_engine.dispose = AsyncMock()

            async with lifespan(FastAPI()):
                pass

            mock_logger.error.assert_called_once()
            assert "Database initialization failed" in mock_logger.error.call_args[0][0]


class TestDatabaseInitialization:
    """Test database initialization functionality."""

    async def test_init_db_creates_tables_and_syncs_catalog(self, bare_engine):
        from celestial_crystals.core.database.entities.crystals import Crystal
        from celestial_crystals.core.database.session import init_db

        session_maker = async_sessionmaker(bare_engine, class_=AsyncSession, expire_on_commit=False)
        with (
            patch("celestial_crystals.core.database.session.engine", bare_engine),
            patch("celestial_crystals.core.database.session.async_session_maker", session_maker),
        ):
            await init_db(sync_catalog=True)

        table_names = await _table_names(bare_engine)
        for table_name in EXPECTED_TABLES:
            assert table_name in table_names, f"Expected table {table_name} not found. Available tables: {table_names}"

        async with session_maker() as session:
            count = (await session.execute(select(func.count()).select_from(Crystal))).scalar_one()
        assert count == len(CRYSTAL_CATALOG)

    async def test_init_db_without_catalog_sync(self, bare_engine):
        from celestial_crystals.core.database.entities.crystals import Crystal
        from celestial_crystals.core.database.session import init_db

        session_maker = async_sessionmaker(bare_engine, class_=AsyncSession, expire_on_commit=False)
        with (
            patch("celestial_crystals.core.database.session.engine", bare_engine),
            patch("celestial_crystals.core.database.session.async_session_maker", session_maker),
        ):
            await init_db(sync_catalog=False)

        async with session_maker() as session:
            count = (await session.execute(select(func.count()).select_from(Crystal))).scalar_one()
        assert count == 0

    async def test_get_session_returns_async_session(self, test_engine):
        from celestial_crystals.core.database.session import get_session

        session_maker = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
        with patch("celestial_crystals.core.database.session.async_session_maker", session_maker):
            async for session in get_session():
                assert isinstance(session, AsyncSession)
                result = await session.execute(text("SELECT 1"))
                assert result.scalar_one() == 1
                break

    async def test_engine_is_async_engine(self):
        from celestial_crystals.core.database import engine

        assert isinstance(engine, AsyncEngine)
