"""
Admin customer management.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from celestial_crystals.core.logging_config import get_logger
from celestial_crystals.core.models.io.common import Pagination, page_offset
from celestial_crystals.core.models.io.customers import CustomerList, CustomerRead, CustomerUpdate
from celestial_crystals.server.services.deps import RepoDep, require_admin

logger = get_logger(__name__)

router = APIRouter(tags=["admin-customers"], dependencies=[Depends(require_admin)])


@router.get(
    "",
    response_model=CustomerList,
    summary="List Customers",
    description="Customers with their order count, review count and amount spent.",
)
async def list_customers(
    repos: RepoDep,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=200),
    search: Optional[str] = None,
    sort_by: Optional[str] = Query(default=None, description="email or first_name; newest first otherwise"),
) -> CustomerList:
    """
    List customers.

    Only accounts with the USER role are listed.

    - **search**: Case-insensitive text over email, first and last name.
    - **sort_by**: `email` or `first_name`.
    """
    users, total = await repos.users.search_customers(
        search=search, sort_by=sort_by, limit=limit, offset=page_offset(page, limit)
    )
    user_ids = [user.id for user in users]
    order_stats = await repos.users.order_stats_for(user_ids)
    review_counts = await repos.users.review_counts_for(user_ids)

    customers = []
    for user in users:
        order_count, total_spent = order_stats.get(user.id, (0, 0.0))
        customers.append(
            CustomerRead.model_validate(user).model_copy(
                update={
                    "order_count": order_count,
                    "review_count": review_counts.get(user.id, 0),
                    "total_spent": total_spent,
                }
            )
        )
    return CustomerList(customers=customers, pagination=Pagination.build(page, limit, total))


@router.put(
    "/{customer_id}",
    response_model=CustomerRead,
    summary="Update Customer",
    description="Partially update a customer's names, phone and email preferences.",
    responses={404: {"description": "Customer not found"}},
)
async def update_customer(customer_id: str, body: CustomerUpdate, repos: RepoDep) -> CustomerRead:
    user = await repos.users.get_by_id(customer_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")

    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(user, field, value)
    user = await repos.users.update(user)
    logger.info(f"Customer {customer_id} updated by admin")

    order_count, total_spent = (await repos.users.order_stats_for([user.id])).get(user.id, (0, 0.0))
    review_count = (await repos.users.review_counts_for([user.id])).get(user.id, 0)
    return CustomerRead.model_validate(user).model_copy(
        update={"order_count": order_count, "review_count": review_count, "total_spent": total_spent}
    )
