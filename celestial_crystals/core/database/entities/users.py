"""
Customer entity models.

This module contains the database entities for customers and their saved
shipping addresses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, UTCDateTime, new_id, utc_now


class UserBase(Base):
    """Base fields for a storefront user."""

    email: str = Field(index=True, unique=True, max_length=320, description="Lower-cased email address")
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=50)
    role: str = Field(default="USER", max_length=20, description="USER or ADMIN")
    newsletter_subscribed: bool = Field(default=False)
    marketing_emails: bool = Field(default=False)


class User(UserBase, table=True):
    """Persistent customer account.

    Table: cc_users
    """

    __tablename__ = "cc_users"

    id: str = Field(default_factory=new_id, primary_key=True, index=True, max_length=32)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now}, sa_type=UTCDateTime)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    @property
    def review_name(self) -> str:
        """Public display name, e.g. ``Jane D.``."""
        first = self.first_name or "Anonymous"
        if self.last_name:
            return f"{first} {self.last_name[0].upper()}."
        return first

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role})"


class AddressBase(Base):
    """Base fields for a shipping address."""

    user_id: Optional[str] = Field(default=None, foreign_key="cc_users.id", index=True)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    address1: str = Field(max_length=255)
    address2: Optional[str] = Field(default=None, max_length=255)
    city: str = Field(default="", max_length=100)
    province: str = Field(default="", max_length=100)
    postal_code: str = Field(default="", max_length=20)
    country: str = Field(default="CA", max_length=2)
    phone: Optional[str] = Field(default=None, max_length=50)


class Address(AddressBase, table=True):
    """Shipping address captured at checkout.

    Table: cc_addresses
    """

    __tablename__ = "cc_addresses"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)

    def __repr__(self) -> str:
        return f"Address(id={self.id}, city={self.city}, country={self.country})"
