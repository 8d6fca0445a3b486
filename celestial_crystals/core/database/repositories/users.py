"""
User and address repositories.

This module provides data access for customer accounts, including the
case-insensitive search and per-customer aggregates used by the admin
customer dashboard.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import case, func, or_
from sqlmodel import select

from ..entities.orders import Order
from ..entities.reviews import Review
from ..entities.users import Address, User
from .base import AsyncBaseRepository, QueryBuilder


class UserRepository(AsyncBaseRepository[User]):
    """Repository for user data access operations using SQLModel."""

    def __init__(self, session) -> None:
        super().__init__(session, User)

    async def create(self, user: User, *, commit: bool = True) -> User:
        user.email = user.email.strip().lower()
        return await self._save(user, commit)

    async def get_by_id(self, user_id: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email, ignoring case and surrounding whitespace."""
        stmt = select(User).where(func.lower(User.email) == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def update(self, user: User, *, commit: bool = True) -> User:
        return await self._save(user, commit)

    async def delete(self, user_id: str) -> bool:
        return await self._delete(await self.get_by_id(user_id))

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[User]:
        stmt = select(User)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, User, filters)
        stmt = QueryBuilder.apply_pagination(stmt.order_by(User.created_at.desc()), limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search_customers(
        self,
        *,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[User], int]:
        """Search customers (role USER) by email or name.

        Args:
            search: Case-insensitive substring matched against email, first and last name
            sort_by: ``email`` or ``first_name``; anything else sorts newest first
            limit: Page size
            offset: Rows to skip

        Returns:
            Tuple of (page of users, total matching count)
        """
        stmt = select(User).where(User.role == "USER")
        if search:
            pattern = f"%{search.strip().lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(User.email).like(pattern),
                    func.lower(func.coalesce(User.first_name, "")).like(pattern),
                    func.lower(func.coalesce(User.last_name, "")).like(pattern),
                )
            )
        total = await self._count(stmt)

        if sort_by == "email":
            stmt = stmt.order_by(User.email.asc())
        elif sort_by in ("first_name", "firstName"):
            stmt = stmt.order_by(User.first_name.asc())
        else:
            stmt = stmt.order_by(User.created_at.desc())
        result = await self.session.execute(stmt.limit(limit).offset(offset))
        return list(result.scalars().all()), total

    async def marketing_recipients(self) -> List[User]:
        """Users that opted into marketing email."""
        result = await self.session.execute(select(User).where(User.marketing_emails == True))  # noqa: E712
        return list(result.scalars().all())

    async def count_customers(self) -> int:
        return await self._count(select(User).where(User.role == "USER"))

    async def order_stats_for(self, user_ids: Sequence[str]) -> Dict[str, Tuple[int, float]]:
        """Order count and paid total per user.

        Returns:
            Mapping of user id to ``(order_count, total_spent)``
        """
        if not user_ids:
            return {}
        paid_total = func.sum(case((Order.payment_status == "PAID", Order.total_amount), else_=0.0))
        stmt = (
            select(Order.user_id, func.count(Order.id), paid_total)
            .where(Order.user_id.in_(user_ids))
            .group_by(Order.user_id)
        )
        result = await self.session.execute(stmt)
        return {row[0]: (int(row[1]), round(float(row[2] or 0.0), 2)) for row in result.all()}

    async def review_counts_for(self, user_ids: Sequence[str]) -> Dict[str, int]:
        if not user_ids:
            return {}
        stmt = (
            select(Review.user_id, func.count(Review.id)).where(Review.user_id.in_(user_ids)).group_by(Review.user_id)
        )
        result = await self.session.execute(stmt)
        return {row[0]: int(row[1]) for row in result.all()}


class AddressRepository(AsyncBaseRepository[Address]):
    """Repository for shipping addresses."""

    def __init__(self, session) -> None:
        super().__init__(session, Address)

    async def create(self, address: Address, *, commit: bool = True) -> Address:
        return await self._save(address, commit)

    async def get_by_id(self, address_id: str) -> Optional[Address]:
        result = await self.session.execute(select(Address).where(Address.id == address_id))
        return result.scalar_one_or_none()

    async def update(self, address: Address, *, commit: bool = True) -> Address:
        return await self._save(address, commit)

    async def delete(self, address_id: str) -> bool:
        return await self._delete(await self.get_by_id(address_id))

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[Address]:
        stmt = select(Address)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, Address, filters)
        result = await self.session.execute(QueryBuilder.apply_pagination(stmt, limit, offset))
        return list(result.scalars().all())
