import hashlib
import hmac
import json
import time
from typing import Any, AsyncGenerator, Callable, Dict, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from celestial_crystals.content.generator import BlogPostGenerator
from celestial_crystals.server.core.config import Settings
from test.settings import test_settings
from test.unit_test.server.fakes import FakeStripeGateway, RecordingEmailClient


@pytest.fixture
def app_settings() -> Settings:
    storefront = test_settings.storefront
    return Settings(
        ADMIN_API_KEY=storefront.admin_api_key,
        STRIPE_SECRET_KEY=storefront.stripe_secret_key,
        STRIPE_WEBHOOK_SECRET=storefront.stripe_webhook_secret,
        RESEND_API_KEY=None,
        SITE_URL=storefront.site_url,
        ADMIN_EMAIL=storefront.admin_email,
        BLOG_AI_MODEL=None,
    )


@pytest.fixture
def email_client() -> RecordingEmailClient:
    return RecordingEmailClient()


@pytest.fixture
def gateway(app_settings: Settings) -> FakeStripeGateway:
    return FakeStripeGateway(app_settings.stripe_secret_key, app_settings.stripe_webhook_secret)


@pytest.fixture
def admin_headers(app_settings: Settings) -> Dict[str, str]:
    return {"Authorization": f"Bearer {app_settings.admin_api_key}"}


@pytest.fixture
def sign_stripe_payload(app_settings: Settings) -> Callable[[str], str]:
    """Build a ``stripe-signature`` header for a raw payload."""

    def _sign(payload: str, secret: Optional[str] = None, timestamp: Optional[int] = None) -> str:
        ts = timestamp if timestamp is not None else int(time.time())
        key = (secret or app_settings.stripe_webhook_secret).encode("utf-8")
        digest = hmac.new(key, f"{ts}.{payload}".encode("utf-8"), hashlib.sha256).hexdigest()
        return f"t={ts},v1={digest}"

    return _sign


@pytest.fixture
def stripe_event() -> Callable[..., str]:
    """Serialize a Stripe event payload."""

    def _event(event_type: str, obj: Dict[str, Any], event_id: str = "evt_test_1") -> str:
        return json.dumps({"id": event_id, "object": "event", "type": event_type, "data": {"object": obj}})

    return _event


@pytest_asyncio.fixture(name="client")
async def client_fixture(
    session: AsyncSession,
    app_settings: Settings,
    email_client: RecordingEmailClient,
    gateway: FakeStripeGateway,
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with overridden dependencies."""
    from celestial_crystals.core.database.session import get_session
    from celestial_crystals.server.core.config import get_settings
    from celestial_crystals.server.main import app
    from celestial_crystals.server.services.deps import (
        get_blog_generator,
        get_email_client,
        get_payment_gateway,
    )

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_settings] = lambda: app_settings
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    app.dependency_overrides[get_email_client] = lambda: email_client
    app.dependency_overrides[get_blog_generator] = lambda: BlogPostGenerator(None)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()
