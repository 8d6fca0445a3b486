"""Shared I/O models."""

from __future__ import annotations

import math

from pydantic import BaseModel, Field


class Pagination(BaseModel):
    """Page metadata returned by paged list endpoints."""

    page: int = Field(description="Current page, starting at 1")
    limit: int = Field(description="Page size")
    total_count: int = Field(description="Number of matching rows across all pages")
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, page: int, limit: int, total_count: int) -> "Pagination":
        total_pages = math.ceil(total_count / limit) if limit else 0
        return cls(
            page=page,
            limit=limit,
            total_count=total_count,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


def page_offset(page: int, limit: int) -> int:
    return (max(page, 1) - 1) * limit
