import pytest

from celestial_crystals.core.errors import ContactFormError, EmailDeliveryError, InvalidEmailError
from celestial_crystals.core.models.io.contact import ContactRequest
from celestial_crystals.server.services.contact import THANK_YOU_MESSAGE, ContactService
from test.unit_test.server.fakes import FailingEmailClient

INBOX = "owner@celestial.example"


def _form(**overrides) -> ContactRequest:
    fields = dict(
        name="Jane Doe",
        email="Jane@Example.com",
        subject="Bracelet sizing",
        message="Do your bracelets fit a small wrist?",
    )
    fields.update(overrides)
    return ContactRequest(**fields)


@pytest.fixture
def service(email_client):
    return ContactService(email_client, INBOX, "https://celestial.example")


async def test_message_is_forwarded_to_inbox(service, email_client):
    response = await service.submit(_form())

    assert response.success
    assert response.message == THANK_YOU_MESSAGE
    assert response.received_at.tzinfo is not None
    assert email_client.sent == [([INBOX], "Contact Form: Bracelet sizing")]


@pytest.mark.parametrize("field", ["name", "email", "subject", "message"])
async def test_every_field_is_required(service, email_client, field):
    with pytest.raises(ContactFormError) as exc_info:
        await service.submit(_form(**{field: "   "}))
    assert exc_info.value.message == "All fields are required"
    assert exc_info.value.status_code == 400
    assert email_client.sent == []


async def test_short_message(service):
    with pytest.raises(ContactFormError) as exc_info:
        await service.submit(_form(message="Hi there"))
    assert exc_info.value.message == "Message must be at least 10 characters long"


async def test_invalid_reply_address(service):
    with pytest.raises(InvalidEmailError):
        await service.submit(_form(email="jane-at-example"))


async def test_delivery_failure_propagates():
    service = ContactService(FailingEmailClient(), INBOX, "https://celestial.example")
    with pytest.raises(EmailDeliveryError):
        await service.submit(_form())
