"""Review repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlmodel import select

from ..entities.reviews import Review
from ..entities.users import User
from .base import AsyncBaseRepository, QueryBuilder


class ReviewRepository(AsyncBaseRepository[Review]):
    """Repository for product reviews."""

    def __init__(self, session) -> None:
        super().__init__(session, Review)

    async def create(self, review: Review, *, commit: bool = True) -> Review:
        return await self._save(review, commit)

    async def get_by_id(self, review_id: str) -> Optional[Review]:
        result = await self.session.execute(select(Review).where(Review.id == review_id))
        return result.scalar_one_or_none()

    async def get_by_user_and_crystal(self, user_id: str, crystal_id: str) -> Optional[Review]:
        stmt = select(Review).where(Review.user_id == user_id, Review.crystal_id == crystal_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, review: Review, *, commit: bool = True) -> Review:
        return await self._save(review, commit)

    async def delete(self, review_id: str) -> bool:
        return await self._delete(await self.get_by_id(review_id))

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[Review]:
        stmt = select(Review)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, Review, filters)
        stmt = QueryBuilder.apply_pagination(stmt.order_by(Review.created_at.desc()), limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def approved_for_crystal(
        self, crystal_id: str, *, rating: Optional[int] = None, limit: int = 10, offset: int = 0
    ) -> Tuple[List[Tuple[Review, User]], int]:
        """Approved reviews for a crystal with their authors, newest first.

        Returns:
            Tuple of (page of ``(review, user)`` pairs, total matching count)
        """
        stmt = (
            select(Review, User)
            .join(User, User.id == Review.user_id)
            .where(Review.crystal_id == crystal_id, Review.is_approved == True)  # noqa: E712
        )
        if rating is not None:
            stmt = stmt.where(Review.rating == rating)
        total = await self._count(stmt)
        result = await self.session.execute(stmt.order_by(Review.created_at.desc()).limit(limit).offset(offset))
        return [(row[0], row[1]) for row in result.all()], total

    async def rating_distribution(self, crystal_id: str) -> Dict[int, int]:
        """Count of approved reviews per star rating (1-5, zero-filled)."""
        stmt = (
            select(Review.rating, func.count(Review.id))
            .where(Review.crystal_id == crystal_id, Review.is_approved == True)  # noqa: E712
            .group_by(Review.rating)
        )
        result = await self.session.execute(stmt)
        distribution = {star: 0 for star in range(1, 6)}
        for star, count in result.all():
            distribution[int(star)] = int(count)
        return distribution
