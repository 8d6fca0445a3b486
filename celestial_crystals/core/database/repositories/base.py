"""
Repository base class and query helpers shared by the storefront repositories.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel


EntityType = TypeVar("EntityType", bound=SQLModel)


class AsyncBaseRepository(ABC, Generic[EntityType]):
    """
    Async repository over one storefront table.

    Writes commit by default. Pass ``commit=False`` to only flush, so a
    service can create an order with its items and stock changes and
    commit them together.
    """

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        self.session = session
        self.model = model

    @abstractmethod
    async def create(self, entity: EntityType, *, commit: bool = True) -> EntityType:
        """Persist a new row and return it with generated fields set."""

    @abstractmethod
    async def get_by_id(self, entity_id: str) -> Optional[EntityType]:
        """Return the row with this primary key, or None."""

    @abstractmethod
    async def update(self, entity: EntityType, *, commit: bool = True) -> EntityType:
        """Persist changes made to a loaded row."""

    @abstractmethod
    async def delete(self, entity_id: str) -> bool:
        """Delete a row; False when it does not exist."""

    @abstractmethod
    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        """
        List rows in the repository's natural order.

        Args:
            limit: Maximum number of rows
            offset: Rows to skip
            filters: Column equality filters; ``None`` values are ignored
        """

    async def _save(self, entity: EntityType, commit: bool) -> EntityType:
        self.session.add(entity)
        if commit:
            await self.session.commit()
            await self.session.refresh(entity)
        else:
            await self.session.flush()
        return entity

    async def _delete(self, entity: Optional[EntityType]) -> bool:
        if entity is None:
            return False
        await self.session.delete(entity)
        await self.session.commit()
        return True

    async def _count(self, stmt) -> int:
        result = await self.session.execute(select(func.count()).select_from(stmt.order_by(None).subquery()))
        return int(result.scalar_one())


class QueryBuilder:
    """Utility class for building SQLModel-based database queries."""

    @staticmethod
    def apply_filters(stmt, model: Type[EntityType], filters: Dict[str, Any]):
        """Apply equality filters to a select statement.

        Args:
            stmt: SQLModel select statement
            model: SQLModel entity class
            filters: Dictionary of field filters; ``None`` values are skipped

        Returns:
            Modified select statement with filters applied
        """
        for key, value in filters.items():
            if value is not None and hasattr(model, key):
                stmt = stmt.where(getattr(model, key) == value)
        return stmt

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        """Apply pagination to a select statement.

        Args:
            stmt: SQLModel select statement
            limit: Maximum number of records
            offset: Number of records to skip

        Returns:
            Modified select statement with pagination applied
        """
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        return stmt
