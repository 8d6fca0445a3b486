"""Newsletter subscriber entity."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, UTCDateTime, new_id, utc_now


class EmailSubscriber(Base, table=True):
    """Newsletter subscription, independent of customer accounts.

    Table: cc_email_subscribers
    """

    __tablename__ = "cc_email_subscribers"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    email: str = Field(unique=True, index=True, max_length=320)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    is_active: bool = Field(default=True, index=True)
    newsletter: bool = Field(default=True)
    promotions: bool = Field(default=True)
    product_updates: bool = Field(default=True)
    source: str = Field(default="website", max_length=50)
    subscribed_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
    unsubscribed_at: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)

    def __repr__(self) -> str:
        return f"EmailSubscriber(email={self.email}, active={self.is_active})"
