from typing import Any, Dict, Optional

import pytest

from celestial_crystals.core.database.repositories.bundle import build_sql_repos
from celestial_crystals.core.errors import OrderStateConflictError, PaymentGatewayError
from celestial_crystals.payments.metadata import CheckoutOrderData, CustomerInfo, OrderDataItem, encode_order_metadata
from celestial_crystals.server.services.fulfillment import PAYMENT_RECEIVED_NOTE, OrderFulfillmentService
from test.unit_test.server.fakes import FailingEmailClient, MalformedResponseEmailClient


def _intent(
    intent_id: str = "pi_test_1",
    *,
    email: Optional[str] = "jane@example.com",
    quantity: int = 2,
    user_id: Optional[str] = None,
    address: Optional[str] = "1 Main St",
    status: str = "succeeded",
) -> Dict[str, Any]:
    order_data = CheckoutOrderData(
        items=[OrderDataItem(id="howlite-1", name="Howlite Bracelet", price=25.0, quantity=quantity)],
        customer_info=CustomerInfo(
            email=email, first_name="Jane", last_name="Doe", address=address, city="Toronto", country="ca"
        ),
        subtotal=25.0 * quantity,
        shipping=0.0,
        tax=2.0 * quantity,
        total=27.0 * quantity,
    )
    base = {"userId": user_id} if user_id else {}
    return {
        "id": intent_id,
        "object": "payment_intent",
        "amount": 2700 * quantity,
        "amount_received": 2700 * quantity,
        "currency": "usd",
        "status": status,
        "metadata": encode_order_metadata(order_data, base=base),
    }


@pytest.fixture
def service(session, email_client, app_settings, gateway):
    return OrderFulfillmentService(session, email_client, app_settings, gateway)


class TestFulfillPaymentIntent:
    async def test_creates_order_customer_and_sale(self, service, session, email_client, synced_catalog):
        result = await service.fulfill_payment_intent(_intent())
        order = result.order

        assert result.created
        assert order.status == "PROCESSING"
        assert order.payment_status == "PAID"
        assert order.payment_method == "stripe"
        assert order.total_amount == 54.0
        assert order.subtotal == 50.0
        assert order.tax_amount == 4.0

        repos = build_sql_repos(session)
        user = await repos.users.get_by_id(order.user_id)
        assert user.email == "jane@example.com"
        assert user.first_name == "Jane"

        address = await repos.addresses.get_by_id(order.shipping_address_id)
        assert address.country == "CA"

        items = (await repos.orders.items_for([order.id]))[order.id]
        assert [(i.crystal_id, i.quantity, i.price) for i in items] == [("howlite-1", 2, 25.0)]
        assert (await repos.crystals.get_by_id("howlite-1")).stock_quantity == 23

        history = await repos.orders.history_for(order.id)
        assert [(h.status, h.note) for h in history] == [("PROCESSING", PAYMENT_RECEIVED_NOTE)]

        assert email_client.sent == [(["jane@example.com"], f"Order Confirmed: {order.order_number} - Your Crystals Are On Their Way!")]

    async def test_is_idempotent(self, service, session, email_client, synced_catalog):
        first = await service.fulfill_payment_intent(_intent())
        second = await service.fulfill_payment_intent(_intent())

        assert first.created
        assert not second.created
        assert second.order.id == first.order.id
        assert await build_sql_repos(session).orders.count_all() == 1
        assert (await build_sql_repos(session).crystals.get_by_id("howlite-1")).stock_quantity == 23
        assert len(email_client.sent) == 1

    async def test_existing_user_is_reused(self, service, make_user, synced_catalog):
        jane = await make_user("jane@example.com")
        result = await service.fulfill_payment_intent(_intent(email="JANE@example.com "))
        assert result.order.user_id == jane.id

    async def test_user_id_from_metadata(self, service, make_user, synced_catalog):
        account = await make_user("account@example.com")
        result = await service.fulfill_payment_intent(_intent(user_id=account.id))
        assert result.order.user_id == account.id

    async def test_oversell_is_allowed(self, service, session, synced_catalog):
        result = await service.fulfill_payment_intent(_intent(quantity=30))
        assert result.created
        assert (await build_sql_repos(session).crystals.get_by_id("howlite-1")).stock_quantity == 0

    async def test_missing_metadata_creates_minimal_order(self, service, session, synced_catalog):
        intent = {"id": "pi_bare", "amount": 4200, "currency": "usd", "metadata": {}}
        result = await service.fulfill_payment_intent(intent)

        assert result.created
        assert result.order.total_amount == 42.0
        assert "missing" in result.order.notes
        user = await build_sql_repos(session).users.get_by_id(result.order.user_id)
        assert user.email == "guest-pi_bare@celestial.local"
        assert result.order.shipping_address_id is None

    async def test_email_failure_does_not_fail_order(self, session, app_settings, gateway, synced_catalog):
        service = OrderFulfillmentService(session, FailingEmailClient(), app_settings, gateway)
        result = await service.fulfill_payment_intent(_intent())
        assert result.created

    async def test_unexpected_email_error_does_not_fail_order(self, session, app_settings, gateway, synced_catalog):
        service = OrderFulfillmentService(session, MalformedResponseEmailClient(), app_settings, gateway)
        result = await service.fulfill_payment_intent(_intent())
        assert result.created
        assert await build_sql_repos(session).orders.count_all() == 1

    async def test_confirmation_render_error_is_logged(self, service, email_client, synced_catalog, monkeypatch):
        def broken_render(*args, **kwargs):
            raise KeyError("site_url")

        monkeypatch.setattr("celestial_crystals.server.services.fulfillment.render_order_confirmation", broken_render)
        result = await service.fulfill_payment_intent(_intent())
        assert result.created
        assert email_client.sent == []

    async def test_unknown_crystal_line_is_skipped(self, service, session, synced_catalog):
        order_data = CheckoutOrderData(
            items=[
                OrderDataItem(id="retired-crystal", name="Retired Bracelet", price=30.0, quantity=1),
                OrderDataItem(id="howlite-1", name="Howlite Bracelet", price=25.0, quantity=1),
            ],
            customer_info=CustomerInfo(email="jane@example.com"),
            subtotal=55.0,
            total=55.0,
        )
        intent = {"id": "pi_mixed", "amount": 5500, "currency": "usd", "metadata": encode_order_metadata(order_data)}

        result = await service.fulfill_payment_intent(intent)

        assert result.created
        repos = build_sql_repos(session)
        items = (await repos.orders.items_for([result.order.id]))[result.order.id]
        assert [i.crystal_id for i in items] == ["howlite-1"]
        assert (await repos.crystals.get_by_id("howlite-1")).stock_quantity == 24

    async def test_concurrent_delivery_returns_existing_order(
        self, service, session, email_client, synced_catalog, monkeypatch
    ):
        first = await service.fulfill_payment_intent(_intent())
        first_id = first.order.id
        lookup = service.repos.orders.get_by_payment_intent
        calls = []

        async def lookup_before_other_delivery_commits(payment_intent_id):
            calls.append(payment_intent_id)
            if len(calls) == 1:
                return None
            return await lookup(payment_intent_id)

        monkeypatch.setattr(service.repos.orders, "get_by_payment_intent", lookup_before_other_delivery_commits)
        second = await service.fulfill_payment_intent(_intent())

        assert not second.created
        assert second.order.id == first_id
        assert calls == ["pi_test_1", "pi_test_1"]
        repos = build_sql_repos(session)
        assert await repos.orders.count_all() == 1
        assert (await repos.crystals.get_by_id("howlite-1")).stock_quantity == 23
        assert len(email_client.sent) == 1


class TestPaymentFailed:
    async def test_marks_existing_order(self, service, session, synced_catalog):
        created = await service.fulfill_payment_intent(_intent())
        order = await service.mark_payment_failed({"id": "pi_test_1"})

        assert order.id == created.order.id
        assert order.payment_status == "FAILED"
        assert order.status == "CANCELLED"
        history = await build_sql_repos(session).orders.history_for(order.id)
        assert history[-1].note == "Payment failed"

    async def test_unknown_intent(self, service):
        assert await service.mark_payment_failed({"id": "pi_none", "last_payment_error": {"message": "declined"}}) is None


class TestReconcile:
    async def test_reconcile_succeeded_intent(self, service, gateway, synced_catalog):
        gateway.intents["pi_missed"] = _intent("pi_missed")
        result = await service.reconcile_payment_intent("pi_missed")
        assert result.created
        assert result.order.payment_intent_id == "pi_missed"

    async def test_reconcile_unpaid_intent(self, service, gateway, synced_catalog):
        gateway.intents["pi_open"] = _intent("pi_open", status="requires_payment_method")
        with pytest.raises(OrderStateConflictError):
            await service.reconcile_payment_intent("pi_open")

    async def test_reconcile_without_gateway(self, session, email_client, app_settings):
        service = OrderFulfillmentService(session, email_client, app_settings, None)
        with pytest.raises(PaymentGatewayError) as exc_info:
            await service.reconcile_payment_intent("pi_x")
        assert exc_info.value.status_code == 503
