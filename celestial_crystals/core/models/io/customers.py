"""Customer and profile I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import Pagination


class ProfileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    newsletter_subscribed: bool
    marketing_emails: bool
    created_at: datetime


class ProfileUpdate(BaseModel):
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=50)
    marketing_emails: Optional[bool] = None


class CustomerRead(ProfileRead):
    """Customer row in the admin dashboard, with order and review figures."""

    role: str
    order_count: int = 0
    review_count: int = 0
    total_spent: float = Field(default=0.0, description="Sum of paid order totals")


class CustomerList(BaseModel):
    customers: List[CustomerRead]
    pagination: Pagination


class CustomerUpdate(ProfileUpdate):
    newsletter_subscribed: Optional[bool] = None
