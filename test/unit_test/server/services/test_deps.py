import pytest
from fastapi import HTTPException

from celestial_crystals.server.core.config import Settings
from celestial_crystals.server.services.deps import (
    get_blog_generator,
    get_current_user,
    get_payment_gateway,
    get_repos,
    require_admin,
)


class TestRequireAdmin:
    def test_valid_key(self):
        settings = Settings(ADMIN_API_KEY="secret")
        assert require_admin(settings, "Bearer secret") == "admin"
        assert require_admin(settings, "bearer secret") == "admin"

    @pytest.mark.parametrize("header", [None, "", "Bearer wrong", "Basic secret", "secret", "Bearer café"])
    def test_rejected(self, header):
        with pytest.raises(HTTPException) as exc_info:
            require_admin(Settings(ADMIN_API_KEY="secret"), header)
        assert exc_info.value.status_code == 401
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}

    def test_not_configured(self):
        with pytest.raises(HTTPException) as exc_info:
            require_admin(Settings(ADMIN_API_KEY=None), "Bearer anything")
        assert exc_info.value.status_code == 503


class TestCurrentUser:
    async def test_known_user(self, session, make_user):
        user = await make_user()
        assert (await get_current_user(get_repos(session), user.id)).id == user.id

    @pytest.mark.parametrize("user_id", [None, "missing"])
    async def test_unknown_user(self, session, user_id):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(get_repos(session), user_id)
        assert exc_info.value.status_code == 401


def test_factories_follow_settings():
    settings = Settings(STRIPE_SECRET_KEY="sk_test_1", STRIPE_WEBHOOK_SECRET="whsec_1", BLOG_AI_MODEL=None)
    gateway = get_payment_gateway(settings)
    assert gateway.is_configured
    assert gateway.webhook_configured
    assert not get_blog_generator(settings).uses_model
