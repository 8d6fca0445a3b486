"""Crystal review I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .common import Pagination


class ReviewCreate(BaseModel):
    """Schema for posting a review."""

    rating: int = Field(ge=1, le=5, description="Star rating from 1 to 5")
    title: Optional[str] = Field(default=None, max_length=200)
    comment: Optional[str] = Field(default=None, max_length=5000)


class ReviewRead(BaseModel):
    id: str
    crystal_id: str
    rating: int
    title: Optional[str] = None
    comment: Optional[str] = None
    is_verified: bool
    user_name: str = Field(description="Reviewer shown as 'First L.'")
    created_at: datetime


class ReviewSummary(BaseModel):
    average_rating: float = Field(description="Average of approved ratings, 1 decimal")
    total_reviews: int
    rating_distribution: Dict[int, int] = Field(description="Approved review count per star rating")


class ReviewListResponse(BaseModel):
    reviews: List[ReviewRead]
    summary: ReviewSummary
    pagination: Pagination
