import hashlib
import hmac
import json
import time

import pytest
import stripe

from celestial_crystals.core.errors import PaymentGatewayError
from celestial_crystals.payments.gateway import StripeGateway, stripe_object_to_dict

WEBHOOK_SECRET = "whsec_unit_secret"


def _sign(payload: str, secret: str = WEBHOOK_SECRET, timestamp=None) -> str:
    ts = timestamp if timestamp is not None else int(time.time())
    digest = hmac.new(secret.encode("utf-8"), f"{ts}.{payload}".encode("utf-8"), hashlib.sha256).hexdigest()
    return f"t={ts},v1={digest}"


class TestConfiguration:
    def test_flags(self):
        gateway = StripeGateway("sk_test_x", None)
        assert gateway.is_configured
        assert not gateway.webhook_configured
        assert not StripeGateway(None).is_configured

    async def test_create_without_key_is_503(self):
        with pytest.raises(PaymentGatewayError) as exc_info:
            await StripeGateway(None).create_payment_intent(1000, "usd", {})
        assert exc_info.value.status_code == 503

    async def test_retrieve_without_key_is_503(self):
        with pytest.raises(PaymentGatewayError) as exc_info:
            await StripeGateway(None).retrieve_payment_intent("pi_1")
        assert exc_info.value.status_code == 503


class TestVerifyWebhook:
    def test_valid_signature(self):
        payload = json.dumps({"id": "evt_1", "type": "payment_intent.succeeded", "data": {"object": {}}})
        event = StripeGateway("sk_test_x", WEBHOOK_SECRET).verify_webhook(payload.encode(), _sign(payload))
        assert event["type"] == "payment_intent.succeeded"

    def test_wrong_secret(self):
        payload = json.dumps({"id": "evt_1", "type": "x"})
        gateway = StripeGateway("sk_test_x", WEBHOOK_SECRET)
        with pytest.raises(stripe.SignatureVerificationError):
            gateway.verify_webhook(payload.encode(), _sign(payload, secret="whsec_other"))

    def test_stale_timestamp(self):
        payload = json.dumps({"id": "evt_1", "type": "x"})
        gateway = StripeGateway("sk_test_x", WEBHOOK_SECRET)
        with pytest.raises(stripe.SignatureVerificationError):
            gateway.verify_webhook(payload.encode(), _sign(payload, timestamp=int(time.time()) - 3600))

    def test_payload_without_type(self):
        payload = json.dumps({"id": "evt_1"})
        gateway = StripeGateway("sk_test_x", WEBHOOK_SECRET)
        with pytest.raises(ValueError):
            gateway.verify_webhook(payload.encode(), _sign(payload))

    def test_unconfigured_secret(self):
        with pytest.raises(PaymentGatewayError) as exc_info:
            StripeGateway("sk_test_x", None).verify_webhook(b"{}", "t=1,v1=abc")
        assert exc_info.value.status_code == 500


def test_stripe_object_to_dict():
    plain = {"id": "pi_1", "metadata": {"a": "b"}}
    assert stripe_object_to_dict(plain) == plain
    obj = stripe.PaymentIntent.construct_from({"id": "pi_2", "metadata": {"orderData": "{}"}}, "sk_test_x")
    converted = stripe_object_to_dict(obj)
    assert converted["id"] == "pi_2"
    assert converted["metadata"] == {"orderData": "{}"}
