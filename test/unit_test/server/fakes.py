"""Test doubles for the external services the storefront talks to."""

from typing import Any, Dict, List, Mapping, Optional, Tuple

from celestial_crystals.core.errors import EmailDeliveryError
from celestial_crystals.notifications.email import EmailClient, EmailResult
from celestial_crystals.payments.gateway import StripeGateway


class RecordingEmailClient(EmailClient):
    """Email client that records messages instead of sending them."""

    def __init__(self) -> None:
        super().__init__(None, "test@celestial.local")
        self.sent: List[Tuple[List[str], str]] = []

    async def send(self, to, subject, html, text=None) -> EmailResult:
        recipients = [to] if isinstance(to, str) else list(to)
        self.sent.append((recipients, subject))
        return EmailResult(success=True, id=f"recorded-{len(self.sent)}", simulated=True)


class FailingEmailClient(RecordingEmailClient):
    """Email client whose every delivery fails."""

    async def send(self, to, subject, html, text=None) -> EmailResult:
        raise EmailDeliveryError("Email delivery failed")


class MalformedResponseEmailClient(RecordingEmailClient):
    """Email client whose provider answers with a body it cannot parse."""

    async def send(self, to, subject, html, text=None) -> EmailResult:
        raise ValueError("Expecting value: line 1 column 1 (char 0)")


class FakeStripeGateway(StripeGateway):
    """Stripe gateway that keeps payment intents in memory; webhook verification is real."""

    def __init__(self, secret_key: Optional[str], webhook_secret: Optional[str]) -> None:
        super().__init__(secret_key, webhook_secret)
        self.intents: Dict[str, Dict[str, Any]] = {}

    async def create_payment_intent(self, amount_cents: int, currency: str, metadata: Mapping[str, str]):
        self._require_key()
        intent_id = f"pi_test_{len(self.intents) + 1}"
        intent = {
            "id": intent_id,
            "object": "payment_intent",
            "amount": amount_cents,
            "currency": currency,
            "metadata": dict(metadata),
            "status": "requires_payment_method",
            "client_secret": f"{intent_id}_secret_abc",
        }
        self.intents[intent_id] = intent
        return intent

    async def retrieve_payment_intent(self, payment_intent_id: str):
        self._require_key()
        return self.intents[payment_intent_id]
