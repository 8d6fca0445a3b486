"""
Order entity models.

This module contains the database entities for orders, their line items and
the status history that records every status change.
"""

from __future__ import annotations

import secrets
from datetime import datetime
from typing import Optional

from sqlalchemy import Text
from sqlmodel import Field

from ..base import Base, UTCDateTime, new_id, utc_now


def generate_order_number() -> str:
    """Human-facing order number: ``CC`` followed by 8 upper-case hex digits."""
    return "CC" + secrets.token_hex(4).upper()


class OrderBase(Base):
    """Base fields for an order."""

    order_number: str = Field(default_factory=generate_order_number, unique=True, index=True, max_length=20)
    user_id: str = Field(foreign_key="cc_users.id", index=True)
    shipping_address_id: Optional[str] = Field(default=None, foreign_key="cc_addresses.id")

    status: str = Field(default="PENDING", index=True, max_length=20)
    payment_status: str = Field(default="PENDING", max_length=20)
    payment_method: Optional[str] = Field(default=None, max_length=50)
    payment_intent_id: Optional[str] = Field(default=None, unique=True, index=True, max_length=255)
    currency: str = Field(default="usd", max_length=3)

    subtotal: float = Field(default=0.0, ge=0)
    discount_amount: float = Field(default=0.0, ge=0)
    shipping_amount: float = Field(default=0.0, ge=0)
    tax_amount: float = Field(default=0.0, ge=0)
    total_amount: float = Field(default=0.0, ge=0)
    discount_code: Optional[str] = Field(default=None, max_length=50)

    tracking_number: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = Field(default=None, sa_type=Text)
    shipped_at: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)
    delivered_at: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)


class Order(OrderBase, table=True):
    """Persistent order.

    One order exists per Stripe payment intent; ``payment_intent_id`` is unique.

    Table: cc_orders
    """

    __tablename__ = "cc_orders"

    id: str = Field(default_factory=new_id, primary_key=True, index=True, max_length=32)
    created_at: datetime = Field(default_factory=utc_now, index=True, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now}, sa_type=UTCDateTime)

    def __repr__(self) -> str:
        return f"Order(number={self.order_number}, status={self.status}, total={self.total_amount})"


class OrderItemBase(Base):
    """Base fields for an order line."""

    order_id: str = Field(foreign_key="cc_orders.id", index=True)
    crystal_id: str = Field(foreign_key="cc_crystals.id", index=True)
    crystal_name: str = Field(default="", max_length=255, description="Product name at time of purchase")
    quantity: int = Field(gt=0)
    price: float = Field(ge=0, description="Unit price at time of purchase")


class OrderItem(OrderItemBase, table=True):
    """Persistent order line.

    Table: cc_order_items
    """

    __tablename__ = "cc_order_items"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)

    @property
    def line_total(self) -> float:
        return round(self.price * self.quantity, 2)

    def __repr__(self) -> str:
        return f"OrderItem(order={self.order_id}, crystal={self.crystal_id}, qty={self.quantity})"


class OrderStatusHistory(Base, table=True):
    """Audit trail of order status changes.

    Table: cc_order_status_history
    """

    __tablename__ = "cc_order_status_history"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    order_id: str = Field(foreign_key="cc_orders.id", index=True)
    status: str = Field(max_length=20)
    note: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)

    def __repr__(self) -> str:
        return f"OrderStatusHistory(order={self.order_id}, status={self.status})"
