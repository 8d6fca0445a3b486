import pytest
from httpx import AsyncClient

# Mark all tests in this module as async
pytestmark = pytest.mark.asyncio


async def test_health_check(client: AsyncClient):
    response = await client.get("http://localhost/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_version(client: AsyncClient):
    response = await client.get("http://localhost/version")
    assert response.status_code == 200
    assert response.json() == {"version": "1.0.0", "schema_version": "v1"}


async def test_process_time_header(client: AsyncClient):
    response = await client.get("/health")
    assert float(response.headers["X-Process-Time"]) >= 0
