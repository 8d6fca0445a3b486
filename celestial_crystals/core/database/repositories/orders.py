"""
Order repository.

This module provides data access for orders, their line items and status
history, plus the aggregates used by the analytics dashboard.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import func
from sqlmodel import select

from ..entities.orders import Order, OrderItem, OrderStatusHistory
from .base import AsyncBaseRepository, QueryBuilder


class OrderRepository(AsyncBaseRepository[Order]):
    """Repository for order data access operations using SQLModel."""

    def __init__(self, session) -> None:
        super().__init__(session, Order)

    async def create(self, order: Order, *, commit: bool = True) -> Order:
        return await self._save(order, commit)

    async def get_by_id(self, order_id: str) -> Optional[Order]:
        result = await self.session.execute(select(Order).where(Order.id == order_id))
        return result.scalar_one_or_none()

    async def get_by_number(self, order_number: str) -> Optional[Order]:
        stmt = select(Order).where(Order.order_number == order_number.strip().upper())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_payment_intent(self, payment_intent_id: str) -> Optional[Order]:
        """Idempotency lookup used by the payment webhook."""
        stmt = select(Order).where(Order.payment_intent_id == payment_intent_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, order: Order, *, commit: bool = True) -> Order:
        return await self._save(order, commit)

    async def delete(self, order_id: str) -> bool:
        return await self._delete(await self.get_by_id(order_id))

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[Order]:
        stmt = select(Order)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, Order, filters)
        stmt = QueryBuilder.apply_pagination(stmt.order_by(Order.created_at.desc()), limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_page(
        self, *, status: Optional[str] = None, user_id: Optional[str] = None, limit: int = 20, offset: int = 0
    ) -> Tuple[List[Order], int]:
        """Page through orders newest first.

        Returns:
            Tuple of (page of orders, total matching count)
        """
        stmt = QueryBuilder.apply_filters(select(Order), Order, {"status": status, "user_id": user_id})
        total = await self._count(stmt)
        result = await self.session.execute(stmt.order_by(Order.created_at.desc()).limit(limit).offset(offset))
        return list(result.scalars().all()), total

    # ------------------------------------------------------------------
    # Line items and history
    # ------------------------------------------------------------------

    async def add_item(self, item: OrderItem) -> OrderItem:
        """Stage an order line; the caller commits."""
        self.session.add(item)
        await self.session.flush()
        return item

    async def items_for(self, order_ids: Sequence[str]) -> Dict[str, List[OrderItem]]:
        """Line items grouped by order id."""
        grouped: Dict[str, List[OrderItem]] = defaultdict(list)
        if not order_ids:
            return grouped
        result = await self.session.execute(select(OrderItem).where(OrderItem.order_id.in_(list(order_ids))))
        for item in result.scalars().all():
            grouped[item.order_id].append(item)
        return grouped

    async def add_status_history(self, order_id: str, status: str, note: Optional[str] = None) -> OrderStatusHistory:
        """Stage a history row; the caller commits."""
        entry = OrderStatusHistory(order_id=order_id, status=status, note=note)
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def history_for(self, order_id: str) -> List[OrderStatusHistory]:
        stmt = (
            select(OrderStatusHistory)
            .where(OrderStatusHistory.order_id == order_id)
            .order_by(OrderStatusHistory.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def user_bought_crystal(self, user_id: str, crystal_id: str) -> bool:
        """Whether the user has a paid order containing the crystal."""
        stmt = (
            select(OrderItem.id)
            .join(Order, Order.id == OrderItem.order_id)
            .where(Order.user_id == user_id, Order.payment_status == "PAID", OrderItem.crystal_id == crystal_id)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    async def revenue_summary(self) -> Tuple[int, float]:
        """Count and revenue of paid orders."""
        stmt = select(func.count(Order.id), func.coalesce(func.sum(Order.total_amount), 0.0)).where(
            Order.payment_status == "PAID"
        )
        count, revenue = (await self.session.execute(stmt)).one()
        return int(count), round(float(revenue), 2)

    async def count_all(self) -> int:
        return await self._count(select(Order))

    async def counts_by_status(self) -> Dict[str, int]:
        result = await self.session.execute(select(Order.status, func.count(Order.id)).group_by(Order.status))
        return {row[0]: int(row[1]) for row in result.all()}

    async def top_products(self, limit: int = 5) -> List[Tuple[str, str, int, float]]:
        """Best sellers among paid orders.

        Returns:
            Rows of ``(crystal_id, crystal_name, quantity_sold, revenue)``
        """
        quantity = func.sum(OrderItem.quantity)
        stmt = (
            select(
                OrderItem.crystal_id,
                func.max(OrderItem.crystal_name),
                quantity,
                func.sum(OrderItem.quantity * OrderItem.price),
            )
            .join(Order, Order.id == OrderItem.order_id)
            .where(Order.payment_status == "PAID")
            .group_by(OrderItem.crystal_id)
            .order_by(quantity.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1], int(row[2]), round(float(row[3]), 2)) for row in result.all()]
