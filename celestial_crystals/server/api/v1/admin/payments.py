"""
Admin payment reconciliation.

Creates the order for a succeeded payment intent whose webhook delivery was
missed. Safe to repeat: an intent never yields more than one order.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from celestial_crystals.core.errors import StorefrontError
from celestial_crystals.core.models.io.orders import OrderRead, ReconcileResult
from celestial_crystals.server.api.v1.webhooks import FulfillmentDep
from celestial_crystals.server.exception_handlers import to_http_exception
from celestial_crystals.server.services.deps import require_admin

router = APIRouter(tags=["admin-payments"], dependencies=[Depends(require_admin)])


@router.post(
    "/{payment_intent_id}/reconcile",
    response_model=ReconcileResult,
    summary="Reconcile Payment Intent",
    description="Fetch a payment intent from Stripe and create its order if it does not exist yet.",
    responses={
        409: {"description": "The payment intent has not succeeded"},
        502: {"description": "Stripe rejected the request"},
        503: {"description": "Stripe is not configured"},
    },
)
async def reconcile_payment(payment_intent_id: str, service: FulfillmentDep) -> ReconcileResult:
    try:
        result = await service.reconcile_payment_intent(payment_intent_id)
    except StorefrontError as e:
        raise to_http_exception(e)
    items = (await service.repos.orders.items_for([result.order.id])).get(result.order.id, [])
    return ReconcileResult(order=OrderRead.from_entity(result.order, items), created=result.created)
