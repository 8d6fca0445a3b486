"""
Public blog endpoints. Only published posts are visible.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from celestial_crystals.core.models.domain.enums import BlogPostStatus
from celestial_crystals.core.models.io.blog_posts import BlogPostList, BlogPostRead
from celestial_crystals.core.models.io.common import Pagination, page_offset
from celestial_crystals.server.services.deps import RepoDep

router = APIRouter(tags=["blog"])


@router.get(
    "",
    response_model=BlogPostList,
    summary="List Blog Posts",
    description="Published blog posts, newest first.",
)
async def list_posts(
    repos: RepoDep,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=50),
) -> BlogPostList:
    posts, total = await repos.blog_posts.list_page(
        status=BlogPostStatus.published.value, limit=limit, offset=page_offset(page, limit)
    )
    return BlogPostList(
        posts=[BlogPostRead.from_entity(post) for post in posts],
        pagination=Pagination.build(page, limit, total),
    )


@router.get(
    "/{slug}",
    response_model=BlogPostRead,
    summary="Get Blog Post",
    description="A published blog post by slug.",
    responses={404: {"description": "Post not found or not published"}},
)
async def get_post(slug: str, repos: RepoDep) -> BlogPostRead:
    post = await repos.blog_posts.get_by_slug(slug, published_only=True)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blog post not found")
    return BlogPostRead.from_entity(post)
