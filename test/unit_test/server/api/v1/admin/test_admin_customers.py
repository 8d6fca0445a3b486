import pytest
from httpx import AsyncClient

from celestial_crystals.core.database.entities.orders import Order

pytestmark = pytest.mark.asyncio

CUSTOMERS_URL = "/api/v1/admin/customers"


async def test_lists_customers_with_stats(client: AsyncClient, admin_headers, session, make_user):
    jane = await make_user(first_name="Jane")
    await make_user("boss@example.com", role="ADMIN")
    session.add(Order(user_id=jane.id, status="PROCESSING", payment_status="PAID", total_amount=40.0))
    session.add(Order(user_id=jane.id, status="PENDING", payment_status="PENDING", total_amount=10.0))
    await session.commit()

    response = await client.get(CUSTOMERS_URL, headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert [c["email"] for c in data["customers"]] == ["jane@example.com"]
    customer = data["customers"][0]
    assert customer["role"] == "USER"
    assert customer["order_count"] == 2
    assert customer["review_count"] == 0
    assert customer["total_spent"] == 40.0


async def test_search(client: AsyncClient, admin_headers, make_user):
    await make_user("jane@example.com", first_name="Jane")
    await make_user("john@example.com", first_name="John", last_name="Smith")
    response = await client.get(CUSTOMERS_URL, params={"search": "smith"}, headers=admin_headers)
    assert [c["email"] for c in response.json()["customers"]] == ["john@example.com"]


async def test_update_customer(client: AsyncClient, admin_headers, make_user):
    user = await make_user()
    response = await client.put(
        f"{CUSTOMERS_URL}/{user.id}",
        json={"first_name": "Janet", "newsletter_subscribed": True},
        headers=admin_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["first_name"] == "Janet"
    assert data["newsletter_subscribed"] is True


async def test_update_unknown_customer(client: AsyncClient, admin_headers):
    response = await client.put(f"{CUSTOMERS_URL}/missing", json={"first_name": "X"}, headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Customer not found"
