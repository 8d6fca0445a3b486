"""
Database layer for CELESTIAL Crystals.

Structure:
- entities/: Database entity models organized by table
- repositories/: Data access layer organized by table
- session.py: Application engine, sessions and startup initialization
- utils.py: Engine, session factory and table creation helpers
"""

from .base import Base, utc_now
from .session import (
    async_session_maker,
    engine,
    get_session,
    init_db,
)
from .utils import (
    create_all,
    create_engine,
    create_sessionmaker,
)

__all__ = [
    "Base",
    "async_session_maker",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "engine",
    "get_session",
    "init_db",
    "utc_now",
]
