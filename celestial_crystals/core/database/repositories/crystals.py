"""
Crystal and inventory log repositories.

This module provides data access for crystal products (including the stock
queries behind the inventory dashboard) and for the inventory audit log.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import func, or_
from sqlmodel import select

from ..entities.crystals import Crystal
from ..entities.inventory_logs import InventoryLog
from .base import AsyncBaseRepository, QueryBuilder


class CrystalRepository(AsyncBaseRepository[Crystal]):
    """Repository for crystal product data access operations using SQLModel."""

    def __init__(self, session) -> None:
        super().__init__(session, Crystal)

    async def create(self, crystal: Crystal, *, commit: bool = True) -> Crystal:
        return await self._save(crystal, commit)

    async def get_by_id(self, crystal_id: str) -> Optional[Crystal]:
        result = await self.session.execute(select(Crystal).where(Crystal.id == crystal_id))
        return result.scalar_one_or_none()

    async def get_for_update(self, crystal_id: str) -> Optional[Crystal]:
        """Load a crystal row locked for a stock change (no-op lock on SQLite)."""
        result = await self.session.execute(select(Crystal).where(Crystal.id == crystal_id).with_for_update())
        return result.scalar_one_or_none()

    async def get_many(self, crystal_ids: Sequence[str]) -> Dict[str, Crystal]:
        if not crystal_ids:
            return {}
        result = await self.session.execute(select(Crystal).where(Crystal.id.in_(list(crystal_ids))))
        return {crystal.id: crystal for crystal in result.scalars().all()}

    async def update(self, crystal: Crystal, *, commit: bool = True) -> Crystal:
        return await self._save(crystal, commit)

    async def delete(self, crystal_id: str) -> bool:
        return await self._delete(await self.get_by_id(crystal_id))

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[Crystal]:
        stmt = select(Crystal)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, Crystal, filters)
        stmt = QueryBuilder.apply_pagination(stmt.order_by(Crystal.name), limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search_inventory(
        self,
        *,
        search: Optional[str] = None,
        low_stock: bool = False,
        out_of_stock: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[Crystal], int]:
        """Page through crystals for the inventory dashboard.

        Args:
            search: Case-insensitive substring on name or category
            low_stock: Only crystals with 0 < stock <= threshold
            out_of_stock: Only crystals with stock 0

        Returns:
            Tuple of (page of crystals ordered by stock ascending, total count)
        """
        stmt = select(Crystal)
        if search:
            pattern = f"%{search.strip().lower()}%"
            stmt = stmt.where(or_(func.lower(Crystal.name).like(pattern), func.lower(Crystal.category).like(pattern)))
        if low_stock:
            stmt = stmt.where(Crystal.stock_quantity > 0, Crystal.stock_quantity <= Crystal.low_stock_threshold)
        if out_of_stock:
            stmt = stmt.where(Crystal.stock_quantity <= 0)
        total = await self._count(stmt)
        stmt = stmt.order_by(Crystal.stock_quantity.asc(), Crystal.name.asc()).limit(limit).offset(offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def stock_stats(self) -> Dict[str, int]:
        """Aggregate stock figures across all crystals."""
        totals = await self.session.execute(select(func.count(Crystal.id), func.coalesce(func.sum(Crystal.stock_quantity), 0)))
        total_products, total_stock = totals.one()
        low_stock_count = await self._count(
            select(Crystal).where(Crystal.stock_quantity > 0, Crystal.stock_quantity <= Crystal.low_stock_threshold)
        )
        out_of_stock_count = await self._count(select(Crystal).where(Crystal.stock_quantity <= 0))
        return {
            "total_products": int(total_products),
            "total_stock": int(total_stock),
            "low_stock_count": low_stock_count,
            "out_of_stock_count": out_of_stock_count,
        }

    async def low_stock(self) -> List[Crystal]:
        """Active crystals at or below their threshold, lowest stock first."""
        stmt = (
            select(Crystal)
            .where(Crystal.is_active == True, Crystal.stock_quantity <= Crystal.low_stock_threshold)  # noqa: E712
            .order_by(Crystal.stock_quantity.asc(), Crystal.name.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class InventoryLogRepository(AsyncBaseRepository[InventoryLog]):
    """Repository for the append-only inventory audit log."""

    def __init__(self, session) -> None:
        super().__init__(session, InventoryLog)

    async def create(self, log: InventoryLog, *, commit: bool = True) -> InventoryLog:
        return await self._save(log, commit)

    async def get_by_id(self, log_id: str) -> Optional[InventoryLog]:
        result = await self.session.execute(select(InventoryLog).where(InventoryLog.id == log_id))
        return result.scalar_one_or_none()

    async def update(self, log: InventoryLog, *, commit: bool = True) -> InventoryLog:
        return await self._save(log, commit)

    async def delete(self, log_id: str) -> bool:
        return await self._delete(await self.get_by_id(log_id))

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[InventoryLog]:
        """List logs newest first, optionally filtered (e.g. ``{"crystal_id": ...}``)."""
        stmt = select(InventoryLog)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, InventoryLog, filters)
        stmt = QueryBuilder.apply_pagination(stmt.order_by(InventoryLog.created_at.desc()), limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
