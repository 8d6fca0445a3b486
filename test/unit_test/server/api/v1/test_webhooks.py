from typing import Any, Dict

import pytest
from httpx import AsyncClient

from celestial_crystals.core.database.repositories.bundle import build_sql_repos
from celestial_crystals.payments.metadata import CheckoutOrderData, CustomerInfo, OrderDataItem, encode_order_metadata
from celestial_crystals.server.main import app
from celestial_crystals.server.services.deps import get_email_client, get_payment_gateway
from test.unit_test.server.fakes import FakeStripeGateway, MalformedResponseEmailClient

pytestmark = pytest.mark.asyncio

WEBHOOK_URL = "/api/v1/webhooks/stripe"


def _intent(intent_id: str = "pi_hook_1") -> Dict[str, Any]:
    order_data = CheckoutOrderData(
        items=[OrderDataItem(id="howlite-1", name="Howlite Bracelet", price=25.0, quantity=1)],
        customer_info=CustomerInfo(email="jane@example.com", first_name="Jane", last_name="Doe"),
        subtotal=25.0,
        shipping=5.99,
        tax=2.0,
        total=32.99,
    )
    return {
        "id": intent_id,
        "object": "payment_intent",
        "amount": 3299,
        "currency": "usd",
        "status": "succeeded",
        "metadata": encode_order_metadata(order_data),
    }


async def _post(client: AsyncClient, payload: str, signature: str):
    return await client.post(
        WEBHOOK_URL,
        content=payload,
        headers={"stripe-signature": signature, "content-type": "application/json"},
    )


class TestSignature:
    async def test_missing_signature(self, client: AsyncClient, stripe_event):
        response = await client.post(WEBHOOK_URL, content=stripe_event("payment_intent.succeeded", _intent()))
        assert response.status_code == 400
        assert response.json()["detail"] == "No signature"

    async def test_invalid_signature(self, client: AsyncClient, stripe_event, sign_stripe_payload):
        payload = stripe_event("payment_intent.succeeded", _intent())
        response = await _post(client, payload, sign_stripe_payload(payload, secret="whsec_other"))
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid signature"

    async def test_tampered_payload(self, client: AsyncClient, stripe_event, sign_stripe_payload):
        payload = stripe_event("payment_intent.succeeded", _intent())
        signature = sign_stripe_payload(payload)
        response = await _post(client, payload.replace("32.99", "0.01"), signature)
        assert response.status_code == 400

    async def test_secret_not_configured(self, client: AsyncClient, stripe_event, sign_stripe_payload):
        app.dependency_overrides[get_payment_gateway] = lambda: FakeStripeGateway("sk_test_dummy", None)
        payload = stripe_event("payment_intent.succeeded", _intent())
        response = await _post(client, payload, sign_stripe_payload(payload))
        assert response.status_code == 500

    async def test_status(self, client: AsyncClient):
        response = await client.get(WEBHOOK_URL)
        assert response.json() == {"status": "ok", "configured": True}


class TestEvents:
    async def test_payment_succeeded_creates_order_once(
        self, client: AsyncClient, session, synced_catalog, stripe_event, sign_stripe_payload
    ):
        payload = stripe_event("payment_intent.succeeded", _intent())

        first = await _post(client, payload, sign_stripe_payload(payload))
        assert first.status_code == 200
        data = first.json()
        assert data["received"] is True
        assert data["event_type"] == "payment_intent.succeeded"
        assert data["created"] is True

        second = await _post(client, payload, sign_stripe_payload(payload))
        assert second.json()["created"] is False
        assert second.json()["order_number"] == data["order_number"]

        repos = build_sql_repos(session)
        order = await repos.orders.get_by_number(data["order_number"])
        assert order.payment_intent_id == "pi_hook_1"
        assert order.total_amount == 32.99
        assert (await repos.crystals.get_by_id("howlite-1")).stock_quantity == 24

    async def test_confirmation_failure_still_acknowledges(
        self, client: AsyncClient, session, synced_catalog, stripe_event, sign_stripe_payload
    ):
        app.dependency_overrides[get_email_client] = lambda: MalformedResponseEmailClient()
        payload = stripe_event("payment_intent.succeeded", _intent("pi_hook_mail"))

        response = await _post(client, payload, sign_stripe_payload(payload))

        assert response.status_code == 200
        assert response.json()["created"] is True
        assert await build_sql_repos(session).orders.get_by_payment_intent("pi_hook_mail") is not None

    async def test_payment_failed_marks_existing_order(
        self, client: AsyncClient, session, synced_catalog, stripe_event, sign_stripe_payload
    ):
        succeeded = stripe_event("payment_intent.succeeded", _intent())
        created = await _post(client, succeeded, sign_stripe_payload(succeeded))
        order_number = created.json()["order_number"]

        failed = stripe_event("payment_intent.payment_failed", _intent(), event_id="evt_test_2")
        response = await _post(client, failed, sign_stripe_payload(failed))
        assert response.status_code == 200
        assert response.json()["order_number"] == order_number

        order = await build_sql_repos(session).orders.get_by_number(order_number)
        await session.refresh(order)
        assert order.payment_status == "FAILED"

    async def test_payment_failed_without_order(self, client: AsyncClient, stripe_event, sign_stripe_payload):
        payload = stripe_event("payment_intent.payment_failed", _intent("pi_unknown"))
        response = await _post(client, payload, sign_stripe_payload(payload))
        assert response.status_code == 200
        assert "order_number" not in response.json()

    async def test_checkout_session_completed_is_acknowledged(
        self, client: AsyncClient, stripe_event, sign_stripe_payload
    ):
        payload = stripe_event("checkout.session.completed", {"id": "cs_1", "payment_intent": "pi_x"})
        response = await _post(client, payload, sign_stripe_payload(payload))
        assert response.status_code == 200
        assert response.json() == {"received": True, "event_type": "checkout.session.completed"}

    async def test_unhandled_event(self, client: AsyncClient, stripe_event, sign_stripe_payload):
        payload = stripe_event("customer.created", {"id": "cus_1"})
        response = await _post(client, payload, sign_stripe_payload(payload))
        assert response.status_code == 200
        assert response.json() == {"received": True, "event_type": "customer.created"}
