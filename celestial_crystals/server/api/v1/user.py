"""
Customer account endpoints.

The customer is identified by the ``X-User-Id`` header set by the upstream
authentication layer.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from celestial_crystals.core.logging_config import get_logger
from celestial_crystals.core.models.io.customers import ProfileRead, ProfileUpdate
from celestial_crystals.core.models.io.orders import OrderRead
from celestial_crystals.server.services.deps import CurrentUserDep, RepoDep

logger = get_logger(__name__)

router = APIRouter(tags=["user"])


@router.get(
    "/profile",
    response_model=ProfileRead,
    summary="Get Profile",
    description="Read the current customer's profile.",
    responses={401: {"description": "Missing or unknown customer identity"}},
)
async def get_profile(user: CurrentUserDep) -> ProfileRead:
    return ProfileRead.model_validate(user)


@router.patch(
    "/profile",
    response_model=ProfileRead,
    summary="Update Profile",
    description="Update the current customer's name, phone and marketing preference.",
    responses={401: {"description": "Missing or unknown customer identity"}},
)
async def update_profile(body: ProfileUpdate, user: CurrentUserDep, repos: RepoDep) -> ProfileRead:
    """
    Update the profile.

    Only the fields present in the request are changed.

    - **first_name** / **last_name**: Display names.
    - **phone**: Contact phone.
    - **marketing_emails**: Opt in or out of marketing email.
    """
    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(user, field, value)
    user = await repos.users.update(user)
    logger.info(f"Profile updated for user {user.id}")
    return ProfileRead.model_validate(user)


@router.get(
    "/orders",
    response_model=List[OrderRead],
    summary="List My Orders",
    description="Orders of the current customer, newest first.",
    responses={401: {"description": "Missing or unknown customer identity"}},
)
async def list_my_orders(
    user: CurrentUserDep,
    repos: RepoDep,
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> List[OrderRead]:
    orders, _ = await repos.orders.list_page(user_id=user.id, limit=limit, offset=offset)
    items = await repos.orders.items_for([order.id for order in orders])
    return [OrderRead.from_entity(order, items[order.id]) for order in orders]


@router.get(
    "/orders/{order_id}",
    response_model=OrderRead,
    summary="Get My Order",
    description="One order of the current customer.",
    responses={
        401: {"description": "Missing or unknown customer identity"},
        404: {"description": "Order not found for this customer"},
    },
)
async def get_my_order(order_id: str, user: CurrentUserDep, repos: RepoDep) -> OrderRead:
    order = await repos.orders.get_by_id(order_id)
    if order is None or order.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    items = (await repos.orders.items_for([order.id]))[order.id]
    return OrderRead.from_entity(order, items)
