import pytest
from httpx import AsyncClient

from celestial_crystals.core.database.entities.email_subscribers import EmailSubscriber
from celestial_crystals.core.database.entities.orders import Order
from test.unit_test.server.fakes import RecordingEmailClient

pytestmark = pytest.mark.asyncio

SUBSCRIBERS_URL = "/api/v1/admin/email-subscribers"


@pytest.fixture
async def audience(session, make_user):
    session.add(EmailSubscriber(email="reader@example.com", newsletter=True))
    session.add(EmailSubscriber(email="gone@example.com", newsletter=True, is_active=False))
    session.add(EmailSubscriber(email="jane@example.com", newsletter=True))
    jane = await make_user("jane@example.com", marketing_emails=True)
    await make_user("quiet@example.com")
    session.add(Order(user_id=jane.id, status="PROCESSING", payment_status="PAID", total_amount=32.99))
    await session.commit()


async def test_overview(client: AsyncClient, admin_headers, audience):
    response = await client.get(SUBSCRIBERS_URL, headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["stats"] == {
        "total_newsletter": 3,
        "active_newsletter": 2,
        "total_user_subscribers": 1,
        "total_unique_emails": 3,
    }
    assert [o["customer_email"] for o in data["recent_orders"]] == ["jane@example.com"]


async def test_campaign_to_all_dedupes(
    client: AsyncClient, admin_headers, audience, email_client: RecordingEmailClient
):
    response = await client.post(
        f"{SUBSCRIBERS_URL}/campaigns",
        json={"recipients": "all", "subject": "Full moon sale", "content": "<p>20% off</p>"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json() == {"total": 2, "sent": 2, "failed": 0, "failed_recipients": []}
    assert sorted(recipients[0] for recipients, _ in email_client.sent) == ["jane@example.com", "reader@example.com"]


async def test_campaign_to_address_list(client: AsyncClient, admin_headers, email_client: RecordingEmailClient):
    response = await client.post(
        f"{SUBSCRIBERS_URL}/campaigns",
        json={"recipients": ["A@example.com", "a@example.com"], "subject": "Hi", "content": "<p>x</p>"},
        headers=admin_headers,
    )
    assert response.json()["total"] == 1
    assert email_client.sent[0][0] == ["a@example.com"]


async def test_campaign_unknown_group(client: AsyncClient, admin_headers):
    response = await client.post(
        f"{SUBSCRIBERS_URL}/campaigns",
        json={"recipients": "vip", "subject": "Hi", "content": "<p>x</p>"},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Unknown recipient group 'vip'"


async def test_campaign_rejects_malformed_address(
    client: AsyncClient, admin_headers, email_client: RecordingEmailClient
):
    response = await client.post(
        f"{SUBSCRIBERS_URL}/campaigns",
        json={"recipients": ["reader@example.com", "bad address"], "subject": "Hi", "content": "<p>x</p>"},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid recipient address: bad address"
    assert email_client.sent == []
