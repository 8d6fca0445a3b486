"""
Blog post entity models.

Posts are written by hand in the admin or produced by the content generator,
which always saves drafts for review.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import Text
from sqlmodel import Field

from ..base import Base, UTCDateTime, dump_json_list, load_json_list, new_id, utc_now


class BlogPostBase(Base):
    """Base fields for a blog post."""

    title: str = Field(max_length=255)
    slug: str = Field(unique=True, index=True, max_length=255)
    content: str = Field(sa_type=Text)
    excerpt: Optional[str] = Field(default=None, sa_type=Text)
    meta_description: Optional[str] = Field(default=None, max_length=500)
    keywords: str = Field(default="[]", sa_type=Text, description="JSON array of SEO keywords")
    tags: str = Field(default="[]", sa_type=Text, description="JSON array of tags")
    category: Optional[str] = Field(default=None, max_length=100)
    featured_image: Optional[str] = Field(default=None, max_length=500)
    crystal_id: Optional[str] = Field(default=None, max_length=100)
    author: str = Field(default="CELESTIAL Team", max_length=100)
    status: str = Field(default="draft", index=True, max_length=20)
    is_ai_generated: bool = Field(default=False)
    reading_time: int = Field(default=1, ge=1, description="Minutes at 200 words per minute")
    published_at: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)


class BlogPost(BlogPostBase, table=True):
    """Persistent blog post.

    Table: cc_blog_posts
    """

    __tablename__ = "cc_blog_posts"

    id: str = Field(default_factory=new_id, primary_key=True, index=True, max_length=32)
    created_at: datetime = Field(default_factory=utc_now, index=True, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now}, sa_type=UTCDateTime)

    def get_keywords_list(self) -> List[str]:
        return load_json_list(self.keywords)

    def set_keywords_list(self, keywords: List[str]) -> None:
        self.keywords = dump_json_list(keywords)

    def get_tags_list(self) -> List[str]:
        return load_json_list(self.tags)

    def set_tags_list(self, tags: List[str]) -> None:
        self.tags = dump_json_list(tags)

    def __repr__(self) -> str:
        return f"BlogPost(slug={self.slug}, status={self.status})"
