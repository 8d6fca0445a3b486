"""Data access layer organized by table."""

from .base import AsyncBaseRepository, QueryBuilder
from .blog_posts import BlogPostRepository
from .bundle import SqlRepoBundle, build_sql_repos
from .crystals import CrystalRepository, InventoryLogRepository
from .email_subscribers import EmailSubscriberRepository
from .orders import OrderRepository
from .reviews import ReviewRepository
from .users import AddressRepository, UserRepository

__all__ = [
    "AddressRepository",
    "AsyncBaseRepository",
    "BlogPostRepository",
    "CrystalRepository",
    "EmailSubscriberRepository",
    "InventoryLogRepository",
    "OrderRepository",
    "QueryBuilder",
    "ReviewRepository",
    "SqlRepoBundle",
    "UserRepository",
    "build_sql_repos",
]
