"""
Blog post I/O models for API requests and responses.

Keywords and tags are stored as JSON text on the entity and exposed here as
plain lists.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from celestial_crystals.core.database.entities.blog_posts import BlogPost

from .common import Pagination


class BlogPostRead(BaseModel):
    """Schema for reading a blog post."""

    id: str
    title: str
    slug: str
    content: str
    excerpt: Optional[str] = None
    meta_description: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    category: Optional[str] = None
    featured_image: Optional[str] = None
    crystal_id: Optional[str] = None
    author: str
    status: str = Field(description="draft, published or archived")
    is_ai_generated: bool
    reading_time: int = Field(description="Estimated minutes to read")
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, post: BlogPost) -> "BlogPostRead":
        data = post.model_dump(exclude={"keywords", "tags"})
        return cls(**data, keywords=post.get_keywords_list(), tags=post.get_tags_list())


class BlogPostList(BaseModel):
    posts: List[BlogPostRead]
    pagination: Pagination


class BlogPostCreate(BaseModel):
    """Schema for creating a blog post via API."""

    title: str = Field(min_length=1, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255, description="Derived from the title when omitted")
    content: str = Field(min_length=1)
    excerpt: Optional[str] = None
    meta_description: Optional[str] = Field(default=None, max_length=500)
    keywords: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    category: Optional[str] = Field(default=None, max_length=100)
    featured_image: Optional[str] = Field(default=None, max_length=500)
    crystal_id: Optional[str] = Field(default=None, max_length=100)
    author: Optional[str] = Field(default=None, max_length=100)
    status: str = Field(default="draft", description="draft, published or archived")


class BlogPostUpdate(BaseModel):
    """Schema for updating a blog post via API."""

    title: Optional[str] = Field(default=None, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255)
    content: Optional[str] = None
    excerpt: Optional[str] = None
    meta_description: Optional[str] = Field(default=None, max_length=500)
    keywords: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    category: Optional[str] = None
    featured_image: Optional[str] = None
    crystal_id: Optional[str] = None
    author: Optional[str] = None
    status: Optional[str] = None


class BlogGenerateRequest(BaseModel):
    """Request to generate and save a draft post."""

    kind: Literal["weekly_crystal", "monthly_chakra", "seasonal", "crystal", "custom"] = "weekly_crystal"
    template: Optional[str] = Field(default=None, description="Template key for custom posts, e.g. 'howToGuide'")
    variables: Dict[str, str] = Field(default_factory=dict)
    crystal_id: Optional[str] = None
