"""
Order I/O models for API requests and responses.

This module contains the schemas for order tracking, the customer order
history and the admin order dashboard.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .common import Pagination


class OrderItemRead(BaseModel):
    """Order line as stored at purchase time."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    crystal_id: str
    crystal_name: str
    quantity: int
    price: float = Field(description="Unit price at time of purchase")


class OrderStatusHistoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status: str
    note: Optional[str] = None
    created_at: datetime


class OrderRead(BaseModel):
    """Schema for reading an order with its items."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    order_number: str
    status: str
    payment_status: str
    payment_method: Optional[str] = None
    payment_intent_id: Optional[str] = None
    currency: str
    subtotal: float
    discount_amount: float
    shipping_amount: float
    tax_amount: float
    total_amount: float
    discount_code: Optional[str] = None
    tracking_number: Optional[str] = None
    notes: Optional[str] = None
    shipped_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemRead] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, order: Any, items: Sequence[Any] = (), **extra: Any):
        return cls(
            **order.model_dump(), items=[OrderItemRead.model_validate(item) for item in items], **extra
        )


class AdminOrderRead(OrderRead):
    """Order row in the admin dashboard."""

    customer_name: str = ""
    customer_email: Optional[str] = None
    item_count: int = Field(default=0, description="Sum of item quantities")


class AdminOrderList(BaseModel):
    orders: List[AdminOrderRead]
    pagination: Pagination


class OrderTrackingItem(BaseModel):
    name: str
    quantity: int
    price: float


class OrderTrackingResponse(BaseModel):
    """Public tracking view of an order."""

    order_number: str
    status: str
    payment_status: str
    created_at: datetime
    tracking_number: Optional[str] = None
    shipped_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    items: List[OrderTrackingItem]
    total_amount: float
    status_history: List[OrderStatusHistoryRead]


class OrderStatusUpdate(BaseModel):
    status: str = Field(description="PENDING, PROCESSING, SHIPPED, DELIVERED or CANCELLED")
    note: Optional[str] = Field(default=None, max_length=500)
    tracking_number: Optional[str] = Field(default=None, max_length=100)


class OrderCancelRequest(BaseModel):
    reason: Optional[str] = Field(default=None, max_length=500)


class ReconcileResult(BaseModel):
    order: OrderRead
    created: bool = Field(description="False when the payment intent already had an order")
