"""
Stripe payment gateway.

Wraps the blocking ``stripe`` SDK for use from async request handlers.
Payment intents and webhook events are returned as plain dicts.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

import stripe
from fastapi.concurrency import run_in_threadpool

from celestial_crystals.core.errors import PaymentGatewayError
from celestial_crystals.core.logging_config import get_logger

logger = get_logger(__name__)


def stripe_object_to_dict(obj: Any) -> Dict[str, Any]:
    """Convert a ``StripeObject`` into plain nested dicts."""
    if isinstance(obj, dict) and not isinstance(obj, stripe.StripeObject):
        return dict(obj)
    return json.loads(str(obj))


class StripeGateway:
    """
    Thin async facade over the Stripe SDK.

    Args:
        secret_key: Stripe secret API key; calls fail with 503 when unset.
        webhook_secret: Signing secret of the webhook endpoint.
    """

    def __init__(self, secret_key: Optional[str], webhook_secret: Optional[str] = None) -> None:
        self.secret_key = secret_key
        self.webhook_secret = webhook_secret

    @property
    def is_configured(self) -> bool:
        return bool(self.secret_key)

    @property
    def webhook_configured(self) -> bool:
        return bool(self.webhook_secret)

    def _require_key(self) -> str:
        if not self.secret_key:
            raise PaymentGatewayError("Stripe is not configured", status_code=503)
        return self.secret_key

    async def create_payment_intent(
        self, amount_cents: int, currency: str, metadata: Mapping[str, str]
    ) -> Dict[str, Any]:
        """
        Create a payment intent with automatic payment methods.

        Args:
            amount_cents: Amount in the smallest currency unit.
            currency: Three-letter ISO currency code.
            metadata: String metadata, including the encoded order data.

        Returns:
            The created payment intent as a dict.
        """
        api_key = self._require_key()
        try:
            intent = await run_in_threadpool(
                stripe.PaymentIntent.create,
                api_key=api_key,
                amount=amount_cents,
                currency=currency,
                metadata=dict(metadata),
                automatic_payment_methods={"enabled": True},
            )
        except stripe.StripeError as e:
            logger.error(f"Stripe PaymentIntent.create failed: {e}", exc_info=True)
            raise PaymentGatewayError(
                f"Failed to create payment intent: {e.user_message or e}", details=getattr(e, "json_body", None)
            ) from e
        result = stripe_object_to_dict(intent)
        logger.info(f"Created payment intent {result.get('id')} for {amount_cents} {currency}")
        return result

    async def retrieve_payment_intent(self, payment_intent_id: str) -> Dict[str, Any]:
        api_key = self._require_key()
        try:
            intent = await run_in_threadpool(stripe.PaymentIntent.retrieve, payment_intent_id, api_key=api_key)
        except stripe.InvalidRequestError as e:
            raise PaymentGatewayError(f"Payment intent '{payment_intent_id}' not found", status_code=404) from e
        except stripe.StripeError as e:
            logger.error(f"Stripe PaymentIntent.retrieve failed: {e}", exc_info=True)
            raise PaymentGatewayError(f"Failed to retrieve payment intent: {e}") from e
        return stripe_object_to_dict(intent)

    def verify_webhook(self, payload: bytes, signature: str) -> Dict[str, Any]:
        """
        Verify a webhook signature and parse the event.

        Raises:
            stripe.SignatureVerificationError: Signature, timestamp or payload is invalid.
            ValueError: Body is not a JSON event.
        """
        if not self.webhook_secret:
            raise PaymentGatewayError("Webhook secret not configured", status_code=500)
        text = payload.decode("utf-8")
        stripe.WebhookSignature.verify_header(
            text, signature, self.webhook_secret, tolerance=stripe.Webhook.DEFAULT_TOLERANCE
        )
        event = json.loads(text)
        if not isinstance(event, dict) or "type" not in event:
            raise ValueError("Webhook payload is not a Stripe event")
        return event
