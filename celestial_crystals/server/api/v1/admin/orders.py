"""
Admin order management.

List orders, change their fulfilment status and cancel them. Cancelling
returns every item to stock.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from celestial_crystals.core.database.base import utc_now
from celestial_crystals.core.database.entities.orders import Order, OrderItem
from celestial_crystals.core.database.entities.users import User
from celestial_crystals.core.database.repositories.bundle import SqlRepoBundle
from celestial_crystals.core.logging_config import get_logger
from celestial_crystals.core.models.domain.enums import InventoryChangeType, OrderStatus
from celestial_crystals.core.models.io.common import Pagination, page_offset
from celestial_crystals.core.models.io.orders import (
    AdminOrderList,
    AdminOrderRead,
    OrderCancelRequest,
    OrderStatusUpdate,
)
from celestial_crystals.server.services.deps import RepoDep, SessionDep, require_admin
from celestial_crystals.server.services.inventory import InventoryService

logger = get_logger(__name__)

router = APIRouter(tags=["admin-orders"], dependencies=[Depends(require_admin)])

CANCELLABLE_STATUSES = (OrderStatus.PENDING.value, OrderStatus.PROCESSING.value)


async def _users_by_id(repos: SqlRepoBundle, orders: List[Order]) -> Dict[str, User]:
    users: Dict[str, User] = {}
    for user_id in {order.user_id for order in orders}:
        user = await repos.users.get_by_id(user_id)
        if user is not None:
            users[user_id] = user
    return users


def _admin_order(order: Order, items: List[OrderItem], user: Optional[User]) -> AdminOrderRead:
    return AdminOrderRead.from_entity(
        order,
        items,
        customer_name=(user.full_name or user.email) if user else "Unknown customer",
        customer_email=user.email if user else None,
        item_count=sum(item.quantity for item in items),
    )


async def _load_order(repos: SqlRepoBundle, order_id: str) -> Order:
    order = await repos.orders.get_by_id(order_id)
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return order


async def _order_view(repos: SqlRepoBundle, order: Order) -> AdminOrderRead:
    items = (await repos.orders.items_for([order.id]))[order.id]
    return _admin_order(order, items, await repos.users.get_by_id(order.user_id))


@router.get(
    "",
    response_model=AdminOrderList,
    summary="List Orders",
    description="All orders newest first, with customer details and items.",
)
async def list_orders(
    repos: RepoDep,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    order_status: Optional[str] = Query(default=None, alias="status", description="Status filter; 'all' for every status"),
) -> AdminOrderList:
    """
    List orders.

    - **page** / **limit**: Pagination.
    - **status**: PENDING, PROCESSING, SHIPPED, DELIVERED, CANCELLED or `all`.
    """
    status_filter = None if not order_status or order_status.lower() == "all" else order_status.upper()
    orders, total = await repos.orders.list_page(status=status_filter, limit=limit, offset=page_offset(page, limit))
    items = await repos.orders.items_for([order.id for order in orders])
    users = await _users_by_id(repos, orders)
    return AdminOrderList(
        orders=[_admin_order(order, items[order.id], users.get(order.user_id)) for order in orders],
        pagination=Pagination.build(page, limit, total),
    )


@router.get(
    "/{order_id}",
    response_model=AdminOrderRead,
    summary="Get Order",
    responses={404: {"description": "Order not found"}},
)
async def get_order(order_id: str, repos: RepoDep) -> AdminOrderRead:
    return await _order_view(repos, await _load_order(repos, order_id))


@router.put(
    "/{order_id}/status",
    response_model=AdminOrderRead,
    summary="Update Order Status",
    description="Change the fulfilment status of an order and record it in the status history.",
    responses={
        400: {"description": "Invalid status"},
        404: {"description": "Order not found"},
    },
)
async def update_order_status(order_id: str, body: OrderStatusUpdate, repos: RepoDep, session: SessionDep) -> AdminOrderRead:
    """
    Update an order's status.

    SHIPPED stamps `shipped_at` and stores the tracking number. DELIVERED
    stamps `delivered_at`.

    - **status**: The new status.
    - **note**: Optional note for the history entry.
    - **tracking_number**: Carrier tracking number.
    """
    try:
        new_status = OrderStatus(body.status.upper())
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid order status '{body.status}'")

    order = await _load_order(repos, order_id)
    order.status = new_status.value
    if body.tracking_number:
        order.tracking_number = body.tracking_number
    if new_status == OrderStatus.SHIPPED:
        order.shipped_at = utc_now()
    elif new_status == OrderStatus.DELIVERED:
        order.delivered_at = utc_now()

    await repos.orders.update(order, commit=False)
    await repos.orders.add_status_history(order.id, new_status.value, body.note)
    await session.commit()
    await session.refresh(order)
    logger.info(f"Order {order.order_number} status set to {new_status.value}")
    return await _order_view(repos, order)


@router.post(
    "/{order_id}/cancel",
    response_model=AdminOrderRead,
    summary="Cancel Order",
    description="Cancel a pending or processing order and return its items to stock.",
    responses={
        404: {"description": "Order not found"},
        409: {"description": "Order can no longer be cancelled"},
    },
)
async def cancel_order(
    order_id: str, repos: RepoDep, session: SessionDep, body: Optional[OrderCancelRequest] = None
) -> AdminOrderRead:
    """
    Cancel an order.

    Each item is restocked with a RETURN inventory log referencing the order.
    No refund is issued.

    - **reason**: Optional cancellation reason.
    """
    order = await _load_order(repos, order_id)
    if order.status not in CANCELLABLE_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=f"Order with status {order.status} cannot be cancelled"
        )

    reason = (body.reason if body else None) or "Cancelled by admin"
    inventory = InventoryService(session)
    items = (await repos.orders.items_for([order.id]))[order.id]
    for item in items:
        if await repos.crystals.get_by_id(item.crystal_id) is None:
            logger.warning(f"Cannot restock missing crystal {item.crystal_id} for order {order.order_number}")
            continue
        await inventory.apply_change(
            item.crystal_id,
            item.quantity,
            InventoryChangeType.RETURN.value,
            reason=f"Order {order.order_number} cancelled",
            reference=order.id,
            created_by="admin",
            commit=False,
        )

    order.status = OrderStatus.CANCELLED.value
    await repos.orders.update(order, commit=False)
    await repos.orders.add_status_history(order.id, OrderStatus.CANCELLED.value, reason)
    await session.commit()
    await session.refresh(order)
    logger.info(f"Order {order.order_number} cancelled: {reason}")
    return _admin_order(order, items, await repos.users.get_by_id(order.user_id))
