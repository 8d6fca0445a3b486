"""Blog post repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from sqlmodel import select

from ..entities.blog_posts import BlogPost
from .base import AsyncBaseRepository, QueryBuilder


class BlogPostRepository(AsyncBaseRepository[BlogPost]):
    """Repository for blog posts."""

    def __init__(self, session) -> None:
        super().__init__(session, BlogPost)

    async def create(self, post: BlogPost, *, commit: bool = True) -> BlogPost:
        return await self._save(post, commit)

    async def get_by_id(self, post_id: str) -> Optional[BlogPost]:
        result = await self.session.execute(select(BlogPost).where(BlogPost.id == post_id))
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str, *, published_only: bool = False) -> Optional[BlogPost]:
        stmt = select(BlogPost).where(BlogPost.slug == slug)
        if published_only:
            stmt = stmt.where(BlogPost.status == "published")
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def slug_exists(self, slug: str) -> bool:
        result = await self.session.execute(select(BlogPost.id).where(BlogPost.slug == slug))
        return result.first() is not None

    async def update(self, post: BlogPost, *, commit: bool = True) -> BlogPost:
        return await self._save(post, commit)

    async def delete(self, post_id: str) -> bool:
        return await self._delete(await self.get_by_id(post_id))

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[BlogPost]:
        stmt = select(BlogPost)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, BlogPost, filters)
        stmt = QueryBuilder.apply_pagination(stmt.order_by(BlogPost.created_at.desc()), limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_page(
        self, *, status: Optional[str] = None, limit: int = 20, offset: int = 0
    ) -> Tuple[List[BlogPost], int]:
        stmt = QueryBuilder.apply_filters(select(BlogPost), BlogPost, {"status": status})
        total = await self._count(stmt)
        result = await self.session.execute(stmt.order_by(BlogPost.created_at.desc()).limit(limit).offset(offset))
        return list(result.scalars().all()), total

    async def published(self) -> List[BlogPost]:
        stmt = select(BlogPost).where(BlogPost.status == "published").order_by(BlogPost.published_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
