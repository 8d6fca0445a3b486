"""
Stripe webhook endpoint.

Verifies the ``stripe-signature`` header against the raw request body and
dispatches payment intent events to the fulfillment service.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Optional

import stripe
from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from celestial_crystals.core.logging_config import get_logger
from celestial_crystals.core.monitoring import log_webhook_event
from celestial_crystals.server.services.deps import EmailClientDep, GatewayDep, SessionDep, SettingsDep
from celestial_crystals.server.services.fulfillment import OrderFulfillmentService

logger = get_logger(__name__)

router = APIRouter(tags=["webhooks"])


def get_fulfillment_service(
    session: SessionDep, email_client: EmailClientDep, settings: SettingsDep, gateway: GatewayDep
) -> OrderFulfillmentService:
    return OrderFulfillmentService(session, email_client, settings, gateway)


FulfillmentDep = Annotated[OrderFulfillmentService, Depends(get_fulfillment_service)]


async def _handle_event(event: Dict[str, Any], service: OrderFulfillmentService) -> Dict[str, Any]:
    event_type = event["type"]
    obj = (event.get("data") or {}).get("object") or {}
    response: Dict[str, Any] = {"received": True, "event_type": event_type}

    if event_type == "payment_intent.succeeded":
        result = await service.fulfill_payment_intent(obj)
        response.update(order_number=result.order.order_number, created=result.created)
        log_webhook_event(event_type, event.get("id"), "created" if result.created else "duplicate")
    elif event_type == "payment_intent.payment_failed":
        order = await service.mark_payment_failed(obj)
        if order is not None:
            response["order_number"] = order.order_number
        log_webhook_event(event_type, event.get("id"), "payment_failed")
    elif event_type == "checkout.session.completed":
        payment_intent_id: Optional[str] = obj.get("payment_intent")
        existing = await service.repos.orders.get_by_payment_intent(payment_intent_id) if payment_intent_id else None
        if existing is not None:
            logger.info(f"Checkout session {obj.get('id')} already fulfilled as order {existing.order_number}")
            response["order_number"] = existing.order_number
        else:
            logger.info(f"Checkout session {obj.get('id')} completed; waiting for payment_intent.succeeded")
        log_webhook_event(event_type, event.get("id"), "logged")
    else:
        logger.info(f"Unhandled Stripe event type: {event_type}")
        log_webhook_event(event_type, event.get("id"), "unhandled")
    return response


@router.post(
    "/stripe",
    summary="Stripe Webhook",
    description="Receive Stripe events. The body must be the raw signed payload.",
    response_description="Acknowledgement with the event type and, for payments, the order number.",
    responses={
        400: {"description": "Missing or invalid signature"},
        500: {"description": "Webhook secret not configured or handler failure"},
    },
)
async def stripe_webhook(
    request: Request,
    gateway: GatewayDep,
    service: FulfillmentDep,
    stripe_signature: Annotated[Optional[str], Header()] = None,
) -> Dict[str, Any]:
    """
    Handle a Stripe event.

    - `payment_intent.succeeded` creates the order once per payment intent.
    - `payment_intent.payment_failed` marks an existing order as failed.
    - `checkout.session.completed` is logged.
    - Other events are acknowledged and logged as unhandled.
    """
    payload = await request.body()
    if not stripe_signature:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No signature")
    if not gateway.webhook_configured:
        logger.error("Stripe webhook received but STRIPE_WEBHOOK_SECRET is not configured")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Webhook secret not configured")

    try:
        event = gateway.verify_webhook(payload, stripe_signature)
    except (stripe.SignatureVerificationError, ValueError) as e:
        logger.warning(f"Stripe webhook signature verification failed: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid signature")

    logger.info(f"Stripe webhook received: {event['type']} ({event.get('id')})")
    try:
        return await _handle_event(event, service)
    except Exception as e:
        logger.error(f"Stripe webhook handler failed for {event['type']}: {e}", exc_info=True)
        log_webhook_event(event["type"], event.get("id"), "failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Webhook handler failed")


@router.get(
    "/stripe",
    summary="Stripe Webhook Status",
    description="Report whether the webhook signing secret is configured.",
)
async def stripe_webhook_status(gateway: GatewayDep) -> Dict[str, Any]:
    return {"status": "ok", "configured": gateway.webhook_configured}
