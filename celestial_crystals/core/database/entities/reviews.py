"""Product review entity."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Text, UniqueConstraint
from sqlmodel import Field

from ..base import Base, UTCDateTime, new_id, utc_now


class ReviewBase(Base):
    crystal_id: str = Field(foreign_key="cc_crystals.id", index=True)
    user_id: str = Field(foreign_key="cc_users.id", index=True)
    rating: int = Field(ge=1, le=5)
    title: Optional[str] = Field(default=None, max_length=200)
    comment: Optional[str] = Field(default=None, sa_type=Text)
    is_verified: bool = Field(default=False, description="Reviewer bought this crystal")
    is_approved: bool = Field(default=True)


class Review(ReviewBase, table=True):
    """Customer review; one per user and crystal.

    Table: cc_reviews
    """

    __tablename__ = "cc_reviews"
    __table_args__ = (UniqueConstraint("user_id", "crystal_id", name="uq_cc_reviews_user_crystal"),)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    created_at: datetime = Field(default_factory=utc_now, index=True, sa_type=UTCDateTime)

    def __repr__(self) -> str:
        return f"Review(crystal={self.crystal_id}, rating={self.rating})"
