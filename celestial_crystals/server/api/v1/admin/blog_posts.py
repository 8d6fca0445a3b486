"""
Admin blog post management and AI-assisted draft generation.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from celestial_crystals.content.automation import BlogAutomation
from celestial_crystals.content.templates import generate_excerpt, generate_slug, reading_time
from celestial_crystals.core.database.base import utc_now
from celestial_crystals.core.database.entities.blog_posts import BlogPost
from celestial_crystals.core.database.repositories.bundle import SqlRepoBundle
from celestial_crystals.core.errors import StorefrontError
from celestial_crystals.core.logging_config import get_logger
from celestial_crystals.core.models.domain.enums import BlogPostStatus
from celestial_crystals.core.models.io.blog_posts import (
    BlogGenerateRequest,
    BlogPostCreate,
    BlogPostList,
    BlogPostRead,
    BlogPostUpdate,
)
from celestial_crystals.core.models.io.common import Pagination, page_offset
from celestial_crystals.server.exception_handlers import to_http_exception
from celestial_crystals.server.services.deps import BlogGeneratorDep, RepoDep, SessionDep, SettingsDep, require_admin

logger = get_logger(__name__)

router = APIRouter(tags=["admin-blog-posts"], dependencies=[Depends(require_admin)])

POST_STATUSES = tuple(s.value for s in BlogPostStatus)


def _check_status(value: str) -> str:
    if value not in POST_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid status '{value}'. Use one of: {', '.join(POST_STATUSES)}",
        )
    return value


async def _load_post(repos: SqlRepoBundle, post_id: str) -> BlogPost:
    post = await repos.blog_posts.get_by_id(post_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blog post not found")
    return post


@router.get(
    "",
    response_model=BlogPostList,
    summary="List Blog Posts",
    description="All blog posts, newest first, optionally filtered by status.",
)
async def list_posts(
    repos: RepoDep,
    post_status: Optional[str] = Query(default=None, alias="status"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
) -> BlogPostList:
    if post_status == "all":
        post_status = None
    posts, total = await repos.blog_posts.list_page(status=post_status, limit=limit, offset=page_offset(page, limit))
    return BlogPostList(
        posts=[BlogPostRead.from_entity(post) for post in posts],
        pagination=Pagination.build(page, limit, total),
    )


@router.post(
    "",
    response_model=BlogPostRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Blog Post",
    description="Create a post by hand.",
    responses={
        400: {"description": "Invalid status or empty slug"},
        409: {"description": "Slug already in use"},
    },
)
async def create_post(body: BlogPostCreate, repos: RepoDep, settings: SettingsDep) -> BlogPostRead:
    """
    Create a blog post.

    The slug is derived from the title when omitted. The excerpt defaults to
    the start of the content and the reading time is computed from it.

    - **title** / **content**: Required.
    - **status**: `draft` (default), `published` or `archived`.
    """
    _check_status(body.status)
    slug = body.slug or generate_slug(body.title)
    if not slug:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Slug cannot be empty")
    if await repos.blog_posts.slug_exists(slug):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"Slug '{slug}' already exists")

    post = BlogPost(
        **body.model_dump(exclude={"slug", "keywords", "tags", "author", "excerpt"}),
        slug=slug,
        excerpt=body.excerpt or generate_excerpt(body.content),
        author=body.author or settings.content.author,
        reading_time=reading_time(body.content),
        published_at=utc_now() if body.status == BlogPostStatus.published.value else None,
    )
    post.set_keywords_list(body.keywords)
    post.set_tags_list(body.tags)
    post = await repos.blog_posts.create(post)
    logger.info(f"Blog post '{post.slug}' created ({post.status})")
    return BlogPostRead.from_entity(post)


@router.post(
    "/generate",
    response_model=BlogPostRead,
    status_code=status.HTTP_201_CREATED,
    summary="Generate Blog Post",
    description="Generate a draft post with the content model, or from templates when no model is configured.",
    responses={404: {"description": "Unknown template or crystal"}},
)
async def generate_post(
    body: BlogGenerateRequest,
    session: SessionDep,
    generator: BlogGeneratorDep,
    settings: SettingsDep,
) -> BlogPostRead:
    """
    Generate a draft.

    - **kind**: `weekly_crystal`, `monthly_chakra`, `seasonal`, `crystal` or `custom`.
    - **crystal_id**: Required for `crystal`; optional context for `custom`.
    - **template** / **variables**: Template key and values for `custom`.
    """
    automation = BlogAutomation(session, generator, settings.content.author)
    try:
        if body.kind == "weekly_crystal":
            post = await automation.weekly_crystal_post()
        elif body.kind == "monthly_chakra":
            post = await automation.monthly_chakra_post()
        elif body.kind == "seasonal":
            post = await automation.seasonal_post()
        elif body.kind == "crystal":
            if not body.crystal_id:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="crystal_id is required")
            post = await automation.crystal_post(body.crystal_id)
        else:
            if not body.template:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="template is required")
            post = await automation.custom_post(body.template, body.variables, body.crystal_id)
    except StorefrontError as e:
        raise to_http_exception(e)

    logger.info(f"Generated {body.kind} draft '{post.slug}'")
    return BlogPostRead.from_entity(post)


@router.get(
    "/{post_id}",
    response_model=BlogPostRead,
    summary="Get Blog Post",
    responses={404: {"description": "Blog post not found"}},
)
async def get_post(post_id: str, repos: RepoDep) -> BlogPostRead:
    return BlogPostRead.from_entity(await _load_post(repos, post_id))


@router.patch(
    "/{post_id}",
    response_model=BlogPostRead,
    summary="Update Blog Post",
    description="Partially update a post. Changing the content recomputes the reading time.",
    responses={
        400: {"description": "Invalid status"},
        404: {"description": "Blog post not found"},
        409: {"description": "Slug already in use"},
    },
)
async def update_post(post_id: str, body: BlogPostUpdate, repos: RepoDep) -> BlogPostRead:
    post = await _load_post(repos, post_id)
    changes = body.model_dump(exclude_unset=True)

    if changes.get("status") is not None:
        _check_status(changes["status"])
        if changes["status"] == BlogPostStatus.published.value and post.published_at is None:
            post.published_at = utc_now()
    if changes.get("slug") and changes["slug"] != post.slug and await repos.blog_posts.slug_exists(changes["slug"]):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"Slug '{changes['slug']}' already exists")

    keywords = changes.pop("keywords", None)
    tags = changes.pop("tags", None)
    for field, value in changes.items():
        if value is not None:
            setattr(post, field, value)
    if keywords is not None:
        post.set_keywords_list(keywords)
    if tags is not None:
        post.set_tags_list(tags)
    if "content" in changes and changes["content"]:
        post.reading_time = reading_time(post.content)

    post = await repos.blog_posts.update(post)
    logger.info(f"Blog post '{post.slug}' updated")
    return BlogPostRead.from_entity(post)


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Blog Post",
    responses={404: {"description": "Blog post not found"}},
)
async def delete_post(post_id: str, repos: RepoDep) -> None:
    if not await repos.blog_posts.delete(post_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blog post not found")
    logger.info(f"Blog post {post_id} deleted")


@router.post(
    "/{post_id}/publish",
    response_model=BlogPostRead,
    summary="Publish Blog Post",
    description="Publish a draft. The first publication time is kept on re-publish.",
    responses={404: {"description": "Blog post not found"}},
)
async def publish_post(post_id: str, repos: RepoDep) -> BlogPostRead:
    post = await _load_post(repos, post_id)
    post.status = BlogPostStatus.published.value
    if post.published_at is None:
        post.published_at = utc_now()
    post = await repos.blog_posts.update(post)
    logger.info(f"Blog post '{post.slug}' published")
    return BlogPostRead.from_entity(post)
