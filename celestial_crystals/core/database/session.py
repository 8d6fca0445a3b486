"""
Global database session and engine management.

This module manages the global AsyncEngine and async_sessionmaker instances
that are used throughout the application for database access.
"""

from __future__ import annotations

from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from celestial_crystals.server.core.config import settings

from .utils import create_all, create_engine, create_sessionmaker

engine = create_engine(settings.database_url)
async_session_maker = create_sessionmaker(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for database sessions.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session.
    """
    async with async_session_maker() as session:
        yield session


async def init_db(sync_catalog: Optional[bool] = None) -> None:
    """
    Initialize the database.

    Creates every storefront table that does not exist yet, then upserts the
    static catalog into the crystals table when catalog seeding is enabled.

    Args:
        sync_catalog: Override for ``SEED_CATALOG_ON_STARTUP``
    """
    await create_all(engine)

    if sync_catalog is None:
        sync_catalog = settings.seed_catalog_on_startup
    if not sync_catalog:
        return

    from celestial_crystals.server.services.inventory import InventoryService

    async with async_session_maker() as session:
        await InventoryService(session).sync_catalog(settings.initial_stock_quantity)
