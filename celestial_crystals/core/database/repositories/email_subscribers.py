"""Newsletter subscriber repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlmodel import select

from ..entities.email_subscribers import EmailSubscriber
from .base import AsyncBaseRepository, QueryBuilder


class EmailSubscriberRepository(AsyncBaseRepository[EmailSubscriber]):
    """Repository for newsletter subscribers."""

    def __init__(self, session) -> None:
        super().__init__(session, EmailSubscriber)

    async def create(self, subscriber: EmailSubscriber, *, commit: bool = True) -> EmailSubscriber:
        subscriber.email = subscriber.email.strip().lower()
        return await self._save(subscriber, commit)

    async def get_by_id(self, subscriber_id: str) -> Optional[EmailSubscriber]:
        result = await self.session.execute(select(EmailSubscriber).where(EmailSubscriber.id == subscriber_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[EmailSubscriber]:
        stmt = select(EmailSubscriber).where(EmailSubscriber.email == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, subscriber: EmailSubscriber, *, commit: bool = True) -> EmailSubscriber:
        return await self._save(subscriber, commit)

    async def delete(self, subscriber_id: str) -> bool:
        return await self._delete(await self.get_by_id(subscriber_id))

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EmailSubscriber]:
        stmt = select(EmailSubscriber)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, EmailSubscriber, filters)
        stmt = QueryBuilder.apply_pagination(stmt.order_by(EmailSubscriber.subscribed_at.desc()), limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def active_newsletter_emails(self) -> List[str]:
        stmt = select(EmailSubscriber.email).where(
            EmailSubscriber.is_active == True, EmailSubscriber.newsletter == True  # noqa: E712
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_active(self) -> int:
        return await self._count(select(EmailSubscriber).where(EmailSubscriber.is_active == True))  # noqa: E712
