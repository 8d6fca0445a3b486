"""Newsletter and email campaign I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class SubscribeRequest(BaseModel):
    email: str = Field(default="", max_length=320)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    source: str = Field(default="website", max_length=50)


class SubscribeResponse(BaseModel):
    success: bool
    message: str
    already_subscribed: bool = False


class UnsubscribeRequest(BaseModel):
    email: str = Field(default="", max_length=320)


class SubscriberRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_active: bool
    newsletter: bool
    promotions: bool
    product_updates: bool
    source: str
    subscribed_at: datetime
    unsubscribed_at: Optional[datetime] = None


class UserSubscriberRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    newsletter_subscribed: bool
    marketing_emails: bool
    created_at: datetime


class RecentOrderRead(BaseModel):
    order_number: str
    customer_email: Optional[str] = None
    total_amount: float
    status: str
    created_at: datetime


class SubscriberStats(BaseModel):
    total_newsletter: int
    active_newsletter: int
    total_user_subscribers: int
    total_unique_emails: int


class EmailSubscribersOverview(BaseModel):
    newsletter_subscribers: List[SubscriberRead]
    user_subscribers: List[UserSubscriberRead]
    recent_orders: List[RecentOrderRead]
    stats: SubscriberStats


class CampaignRequest(BaseModel):
    """
    Email campaign.

    ``recipients`` is ``newsletter``, ``customers``, ``all`` or an explicit
    list of addresses.
    """

    email_type: str = Field(default="newsletter", max_length=50)
    recipients: Union[str, List[str]] = "newsletter"
    subject: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)


class CampaignResult(BaseModel):
    total: int
    sent: int
    failed: int
    failed_recipients: List[str] = Field(default_factory=list)
