"""
Checkout endpoints: server-side cart quotes and Stripe payment intents.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from celestial_crystals.checkout.pricing import quote_with_code
from celestial_crystals.core.errors import CrystalNotFoundError, OrderDataTooLargeError, PaymentGatewayError
from celestial_crystals.core.logging_config import get_logger
from celestial_crystals.core.models.io.checkout import (
    PaymentIntentRequest,
    PaymentIntentResponse,
    QuoteRequest,
    QuoteResponse,
)
from celestial_crystals.payments.metadata import CheckoutOrderData, OrderDataItem, encode_order_metadata
from celestial_crystals.server.exception_handlers import to_http_exception
from celestial_crystals.server.services.deps import GatewayDep, SettingsDep

logger = get_logger(__name__)

router = APIRouter(tags=["checkout"])


@router.post(
    "/quote",
    response_model=QuoteResponse,
    summary="Quote Cart",
    description="Price a cart from catalog prices, with an optional discount code.",
    response_description="Subtotal, discount, shipping, tax and total.",
    responses={400: {"description": "Unknown crystal in the cart"}},
)
async def quote(body: QuoteRequest) -> QuoteResponse:
    """
    Quote a cart.

    Shipping is free from $50 or with a free-shipping code, otherwise $5.99.
    Tax is 8% of the discounted subtotal. An invalid code is reported in
    `discount` and not applied.

    - **items**: `[{"id": crystal id, "quantity": n}]`; client prices are ignored.
    - **discount_code**: Optional code.
    """
    try:
        cart_quote, discount = quote_with_code(body.items, body.discount_code)
    except CrystalNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return QuoteResponse(quote=cart_quote, discount=discount)


@router.post(
    "/payment-intent",
    response_model=PaymentIntentResponse,
    summary="Create Payment Intent",
    description="Price the cart server-side and create a Stripe payment intent carrying the order data.",
    response_description="The client secret and the priced cart.",
    responses={
        400: {"description": "Empty cart, unknown crystal, invalid discount code or oversized order"},
        502: {"description": "Stripe rejected the request"},
        503: {"description": "Stripe is not configured"},
    },
)
async def create_payment_intent(
    body: PaymentIntentRequest, gateway: GatewayDep, settings: SettingsDep
) -> PaymentIntentResponse:
    """
    Create a payment intent for a cart.

    The order data (items, customer info and totals) travels in the intent
    metadata so the payment webhook can create the order once Stripe
    confirms the payment.

    - **items**: Crystal ids and quantities.
    - **customer_info**: Email, names and shipping address.
    - **discount_code**: Optional code; an invalid code is rejected.
    - **user_id**: Optional customer account id.
    - **currency**: Optional currency; defaults to the store currency.
    """
    try:
        cart_quote, discount = quote_with_code(body.items, body.discount_code)
    except CrystalNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    if not cart_quote.items:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cart is empty")
    if discount is not None and not discount.is_valid:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=discount.message)

    order_data = CheckoutOrderData(
        items=[
            OrderDataItem(id=line.id, name=line.name, price=line.price, quantity=line.quantity)
            for line in cart_quote.items
        ],
        customer_info=body.customer_info,
        subtotal=cart_quote.subtotal,
        discount_amount=cart_quote.discount_amount,
        shipping=cart_quote.shipping,
        tax=cart_quote.tax,
        discount_code=cart_quote.discount_code,
        total=cart_quote.total,
    )
    base = {"userId": body.user_id} if body.user_id else {}
    if body.customer_info.email:
        base["customerEmail"] = body.customer_info.email
    try:
        metadata = encode_order_metadata(order_data, base=base)
    except OrderDataTooLargeError as e:
        logger.warning(f"Checkout rejected: {e.message}")
        raise to_http_exception(e)

    currency = (body.currency or settings.stripe.currency).lower()
    amount_cents = int(round(cart_quote.total * 100))
    try:
        intent = await gateway.create_payment_intent(amount_cents, currency, metadata)
    except PaymentGatewayError as e:
        raise to_http_exception(e)

    return PaymentIntentResponse(
        client_secret=intent.get("client_secret"),
        payment_intent_id=intent["id"],
        amount=amount_cents,
        currency=currency,
        quote=cart_quote,
    )
