import pytest
from httpx import AsyncClient

from celestial_crystals.core.database.entities.orders import Order, OrderItem, OrderStatusHistory

pytestmark = pytest.mark.asyncio


@pytest.fixture
async def order(session, make_user):
    user = await make_user()
    order = Order(
        user_id=user.id,
        status="SHIPPED",
        payment_status="PAID",
        total_amount=54.0,
        tracking_number="1Z999",
    )
    session.add(order)
    session.add(OrderItem(order_id=order.id, crystal_id="howlite-1", crystal_name="Howlite Bracelet", quantity=2, price=25.0))
    session.add(OrderStatusHistory(order_id=order.id, status="SHIPPED", note="Shipped with tracking 1Z999"))
    await session.commit()
    return order


async def test_track_order(client: AsyncClient, order):
    response = await client.get("/api/v1/orders/track", params={"order_number": order.order_number.lower()})
    assert response.status_code == 200
    data = response.json()
    assert data["order_number"] == order.order_number
    assert data["status"] == "SHIPPED"
    assert data["tracking_number"] == "1Z999"
    assert data["items"] == [{"name": "Howlite Bracelet", "quantity": 2, "price": 25.0}]
    assert [entry["status"] for entry in data["status_history"]] == ["SHIPPED"]


@pytest.mark.parametrize("params", [{}, {"order_number": "   "}])
async def test_track_requires_number(client: AsyncClient, params):
    response = await client.get("/api/v1/orders/track", params=params)
    assert response.status_code == 400
    assert response.json()["detail"] == "Order number is required"


async def test_track_unknown_order(client: AsyncClient):
    response = await client.get("/api/v1/orders/track", params={"order_number": "CC00000000"})
    assert response.status_code == 404
    assert response.json()["detail"] == "Order not found"
