import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

ADMIN_PATHS = [
    "/api/v1/admin/orders",
    "/api/v1/admin/customers",
    "/api/v1/admin/inventory",
    "/api/v1/admin/email-subscribers",
    "/api/v1/admin/blog-posts",
    "/api/v1/admin/analytics",
    "/api/v1/admin/seo",
]


@pytest.mark.parametrize("path", ADMIN_PATHS)
async def test_requires_bearer_key(client: AsyncClient, path):
    response = await client.get(path)
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.parametrize("path", ADMIN_PATHS)
async def test_rejects_wrong_key(client: AsyncClient, path):
    response = await client.get(path, headers={"Authorization": "Bearer wrong"})
    assert response.status_code == 401


@pytest.mark.parametrize("path", ADMIN_PATHS)
async def test_accepts_admin_key(client: AsyncClient, admin_headers, path):
    response = await client.get(path, headers=admin_headers)
    assert response.status_code == 200


async def test_non_ascii_key_is_unauthorized(client: AsyncClient):
    response = await client.get("/api/v1/admin/orders", headers={"Authorization": "Bearer café".encode("utf-8")})
    assert response.status_code == 401
