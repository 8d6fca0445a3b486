"""
Repository bundle for dependency injection.

Routes and services that touch several tables receive one ``SqlRepoBundle``
bound to the request session instead of constructing repositories by hand.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .blog_posts import BlogPostRepository
from .crystals import CrystalRepository, InventoryLogRepository
from .email_subscribers import EmailSubscriberRepository
from .orders import OrderRepository
from .reviews import ReviewRepository
from .users import AddressRepository, UserRepository


@dataclass(frozen=True)
class SqlRepoBundle:
    """Convenience bundle of all SQL repositories sharing one session."""

    users: UserRepository
    addresses: AddressRepository
    crystals: CrystalRepository
    inventory_logs: InventoryLogRepository
    orders: OrderRepository
    reviews: ReviewRepository
    blog_posts: BlogPostRepository
    subscribers: EmailSubscriberRepository


def build_sql_repos(session: AsyncSession) -> SqlRepoBundle:
    """Build a ``SqlRepoBundle`` bound to a session.

    Args:
        session: Async session shared by every repository in the bundle

    Returns:
        Bundle containing all repository instances
    """
    return SqlRepoBundle(
        users=UserRepository(session),
        addresses=AddressRepository(session),
        crystals=CrystalRepository(session),
        inventory_logs=InventoryLogRepository(session),
        orders=OrderRepository(session),
        reviews=ReviewRepository(session),
        blog_posts=BlogPostRepository(session),
        subscribers=EmailSubscriberRepository(session),
    )
