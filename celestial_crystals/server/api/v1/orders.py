"""
Public order tracking.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, status

from celestial_crystals.core.models.io.orders import (
    OrderStatusHistoryRead,
    OrderTrackingItem,
    OrderTrackingResponse,
)
from celestial_crystals.server.services.deps import RepoDep

router = APIRouter(tags=["orders"])


@router.get(
    "/track",
    response_model=OrderTrackingResponse,
    summary="Track Order",
    description="Look up the status of an order by its order number.",
    response_description="Order status, shipping details, items and status history.",
    responses={
        400: {"description": "Order number missing"},
        404: {"description": "Order not found"},
    },
)
async def track_order(repos: RepoDep, order_number: Optional[str] = None) -> OrderTrackingResponse:
    """
    Track an order.

    - **order_number**: The `CC...` number from the confirmation email; case-insensitive.
    """
    if not order_number or not order_number.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Order number is required")

    order = await repos.orders.get_by_number(order_number)
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")

    items = (await repos.orders.items_for([order.id]))[order.id]
    history = await repos.orders.history_for(order.id)
    return OrderTrackingResponse(
        order_number=order.order_number,
        status=order.status,
        payment_status=order.payment_status,
        created_at=order.created_at,
        tracking_number=order.tracking_number,
        shipped_at=order.shipped_at,
        delivered_at=order.delivered_at,
        items=[OrderTrackingItem(name=item.crystal_name, quantity=item.quantity, price=item.price) for item in items],
        total_amount=order.total_amount,
        status_history=[OrderStatusHistoryRead.model_validate(entry) for entry in history],
    )
