import pytest
from httpx import AsyncClient

from celestial_crystals.server.main import app
from celestial_crystals.server.services.deps import get_email_client
from test.unit_test.server.fakes import FailingEmailClient, RecordingEmailClient

pytestmark = pytest.mark.asyncio

CONTACT_URL = "/api/v1/contact"

FORM = {
    "name": "Jane Doe",
    "email": "jane@example.com",
    "subject": "Order question",
    "message": "When will my amethyst bracelet ship?",
}


async def test_contact_message_is_emailed(client: AsyncClient, app_settings, email_client: RecordingEmailClient):
    response = await client.post(CONTACT_URL, json=FORM)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "Thank you for your message! We'll get back to you within 24 hours."
    assert email_client.sent == [([app_settings.admin_email], "Contact Form: Order question")]


@pytest.mark.parametrize(
    "overrides, detail",
    [
        ({"name": ""}, "All fields are required"),
        ({"email": "not-an-email"}, "Invalid email address"),
        ({"message": "Too short"}, "Message must be at least 10 characters long"),
    ],
)
async def test_invalid_contact_form(client: AsyncClient, email_client: RecordingEmailClient, overrides, detail):
    response = await client.post(CONTACT_URL, json={**FORM, **overrides})
    assert response.status_code == 400
    assert response.json()["detail"] == detail
    assert email_client.sent == []


async def test_delivery_failure(client: AsyncClient):
    app.dependency_overrides[get_email_client] = lambda: FailingEmailClient()
    response = await client.post(CONTACT_URL, json=FORM)
    assert response.status_code == 502
