"""
Order fulfillment from Stripe payment intents.

A succeeded payment intent becomes exactly one order. Stripe delivers
webhooks at least once and possibly concurrently, so fulfillment looks up
the order by ``payment_intent_id`` first and falls back to the unique
constraint when two deliveries race.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from celestial_crystals.core.database.entities.orders import Order, OrderItem
from celestial_crystals.core.database.entities.users import Address, User
from celestial_crystals.core.database.repositories.bundle import build_sql_repos
from celestial_crystals.core.errors import EmailDeliveryError, OrderStateConflictError, PaymentGatewayError
from celestial_crystals.core.logging_config import get_logger
from celestial_crystals.core.models.domain.enums import OrderStatus, PaymentStatus, UserRole
from celestial_crystals.core.monitoring import log_email_sent, log_order_created
from celestial_crystals.notifications.email import EmailClient
from celestial_crystals.notifications.templates import render_order_confirmation
from celestial_crystals.payments.gateway import StripeGateway
from celestial_crystals.payments.metadata import CheckoutOrderData, CustomerInfo, decode_order_metadata
from celestial_crystals.server.core.config import Settings

from .inventory import InventoryService

logger = get_logger(__name__)

PAYMENT_RECEIVED_NOTE = "Payment received via Stripe"


@dataclass
class FulfillmentResult:
    order: Order
    created: bool


def _charged_amount(intent: Dict[str, Any]) -> float:
    cents = intent.get("amount_received") or intent.get("amount") or 0
    return round(int(cents) / 100, 2)


def _fallback_order_data(intent: Dict[str, Any]) -> CheckoutOrderData:
    """Minimal order data for an intent without decodable metadata."""
    amount = _charged_amount(intent)
    return CheckoutOrderData(items=[], customer_info=CustomerInfo(), subtotal=amount, total=amount)


def _customer_email(intent: Dict[str, Any], order_data: CheckoutOrderData) -> str:
    email = intent.get("receipt_email") or order_data.customer_info.email
    if email:
        return email.strip().lower()
    return f"guest-{intent.get('id')}@celestial.local"


class OrderFulfillmentService:
    """Creates orders from payment intents and keeps their payment state current."""

    def __init__(
        self,
        session: AsyncSession,
        email_client: EmailClient,
        settings: Settings,
        gateway: Optional[StripeGateway] = None,
    ):
        self.session = session
        self.repos = build_sql_repos(session)
        self.inventory = InventoryService(session)
        self.email_client = email_client
        self.settings = settings
        self.gateway = gateway

    async def _resolve_customer(
        self, intent: Dict[str, Any], order_data: CheckoutOrderData, email: str
    ) -> User:
        user_id = (intent.get("metadata") or {}).get("userId")
        if user_id:
            user = await self.repos.users.get_by_id(user_id)
            if user is not None:
                return user
            logger.warning(f"Payment intent {intent.get('id')} references unknown user {user_id}")

        user = await self.repos.users.get_by_email(email)
        if user is not None:
            return user

        info = order_data.customer_info
        user = User(
            email=email,
            first_name=info.first_name or None,
            last_name=info.last_name or None,
            phone=info.phone,
            role=UserRole.USER.value,
        )
        logger.info(f"Creating customer {email} for payment intent {intent.get('id')}")
        return await self.repos.users.create(user, commit=False)

    async def _create_address(self, user: User, info: CustomerInfo) -> Optional[Address]:
        if not info.has_address:
            return None
        address = Address(
            user_id=user.id,
            first_name=info.first_name or None,
            last_name=info.last_name or None,
            address1=info.address,
            city=info.city or "",
            province=info.province or "",
            postal_code=info.postal_code or "",
            country=(info.country or "CA")[:2].upper(),
            phone=info.phone,
        )
        return await self.repos.addresses.create(address, commit=False)

    async def _stage_order(
        self, intent: Dict[str, Any], order_data: CheckoutOrderData, notes: Optional[str]
    ) -> Tuple[Order, List[OrderItem], User, Optional[Address]]:
        """Flush the customer, address, order, lines and sale movements without committing."""
        intent_id = intent["id"]
        email = _customer_email(intent, order_data)
        user = await self._resolve_customer(intent, order_data, email)
        address = await self._create_address(user, order_data.customer_info)

        order = Order(
            user_id=user.id,
            shipping_address_id=address.id if address else None,
            status=OrderStatus.PROCESSING.value,
            payment_status=PaymentStatus.PAID.value,
            payment_method="stripe",
            payment_intent_id=intent_id,
            currency=(intent.get("currency") or self.settings.stripe.currency).lower(),
            subtotal=order_data.subtotal,
            discount_amount=order_data.discount_amount,
            shipping_amount=order_data.shipping,
            tax_amount=order_data.tax,
            total_amount=_charged_amount(intent),
            discount_code=order_data.discount_code,
            notes=notes,
        )
        await self.repos.orders.create(order, commit=False)

        crystals = await self.repos.crystals.get_many([item.id for item in order_data.items])
        items = []
        for item in order_data.items:
            if item.id not in crystals:
                logger.warning(f"Skipping unknown crystal {item.id} on payment intent {intent_id}")
                continue
            items.append(
                await self.repos.orders.add_item(
                    OrderItem(
                        order_id=order.id,
                        crystal_id=item.id,
                        crystal_name=item.name,
                        quantity=item.quantity,
                        price=item.price,
                    )
                )
            )
            await self.inventory.process_sale(item.id, item.quantity, order.id, allow_oversell=True, commit=False)

        await self.repos.orders.add_status_history(order.id, OrderStatus.PROCESSING.value, PAYMENT_RECEIVED_NOTE)
        return order, items, user, address

    async def fulfill_payment_intent(self, intent: Dict[str, Any], source: str = "webhook") -> FulfillmentResult:
        """
        Turn a succeeded payment intent into an order.

        A concurrent delivery that inserts the same payment intent first makes
        the flush or commit here fail on the unique constraint; the session is
        rolled back and the other delivery's order is returned.

        Args:
            intent: Payment intent object as a dict
            source: What triggered fulfillment, for monitoring

        Returns:
            The order and whether this call created it
        """
        intent_id = intent["id"]
        existing = await self.repos.orders.get_by_payment_intent(intent_id)
        if existing is not None:
            logger.info(f"Payment intent {intent_id} already fulfilled as order {existing.order_number}")
            return FulfillmentResult(order=existing, created=False)

        order_data = decode_order_metadata(intent.get("metadata"))
        notes = None
        if order_data is None:
            logger.warning(f"Payment intent {intent_id} has no order data; creating a minimal order")
            order_data = _fallback_order_data(intent)
            notes = "Order created from payment amount; order details were missing from payment metadata"

        try:
            order, items, user, address = await self._stage_order(intent, order_data, notes)
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            existing = await self.repos.orders.get_by_payment_intent(intent_id)
            if existing is None:
                raise
            logger.info(f"Payment intent {intent_id} was fulfilled concurrently as order {existing.order_number}")
            return FulfillmentResult(order=existing, created=False)

        await self.session.refresh(order)
        logger.info(f"Created order {order.order_number} for payment intent {intent_id} ({len(items)} items)")
        log_order_created(order.order_number, order.total_amount, source)

        await self.send_confirmation(order, items, user, address)
        return FulfillmentResult(order=order, created=True)

    async def send_confirmation(self, order: Order, items, user: User, address: Optional[Address]) -> None:
        """Email the order confirmation; failures are logged only, the order is already committed."""
        try:
            rendered = render_order_confirmation(order, items, user.full_name, self.settings.site_url, address=address)
            result = await self.email_client.send(user.email, rendered.subject, rendered.html, rendered.text)
        except EmailDeliveryError as e:
            logger.error(f"Failed to send confirmation for order {order.order_number}: {e}", exc_info=True)
            return
        except Exception as e:
            logger.error(f"Unexpected error sending confirmation for order {order.order_number}: {e}", exc_info=True)
            return
        log_email_sent("order_confirmation", 1, result.simulated)

    async def mark_payment_failed(self, intent: Dict[str, Any]) -> Optional[Order]:
        intent_id = intent["id"]
        order = await self.repos.orders.get_by_payment_intent(intent_id)
        if order is None:
            error = (intent.get("last_payment_error") or {}).get("message")
            logger.info(f"Payment failed for intent {intent_id} without an order: {error}")
            return None

        order.payment_status = PaymentStatus.FAILED.value
        order.status = OrderStatus.CANCELLED.value
        await self.repos.orders.update(order, commit=False)
        await self.repos.orders.add_status_history(order.id, OrderStatus.CANCELLED.value, "Payment failed")
        await self.session.commit()
        await self.session.refresh(order)
        logger.warning(f"Marked order {order.order_number} as payment failed")
        return order

    async def reconcile_payment_intent(self, payment_intent_id: str) -> FulfillmentResult:
        """
        Fulfill a payment intent fetched from Stripe.

        Used by admins when a webhook delivery was missed.

        Raises:
            PaymentGatewayError: Stripe is not configured or the intent is unknown
            OrderStateConflictError: The intent has not succeeded
        """
        if self.gateway is None:
            raise PaymentGatewayError("Stripe is not configured", status_code=503)
        intent = await self.gateway.retrieve_payment_intent(payment_intent_id)
        status = intent.get("status")
        if status != "succeeded":
            raise OrderStateConflictError(
                f"Payment intent {payment_intent_id} has status '{status}', expected 'succeeded'"
            )
        return await self.fulfill_payment_intent(intent, source="reconcile")
