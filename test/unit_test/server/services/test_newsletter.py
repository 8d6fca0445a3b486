import pytest

from celestial_crystals.core.database.entities.email_subscribers import EmailSubscriber
from celestial_crystals.core.database.repositories.bundle import build_sql_repos
from celestial_crystals.core.errors import InvalidEmailError, SubscriberNotFoundError
from celestial_crystals.server.services.newsletter import NewsletterService, normalize_email
from test.unit_test.server.fakes import FailingEmailClient

SITE_URL = "http://localhost:8000"


@pytest.fixture
def service(session, email_client):
    return NewsletterService(session, email_client, SITE_URL)


class TestSubscribe:
    async def test_new_subscriber_gets_welcome(self, service, session, email_client):
        response = await service.subscribe(" Jane@Example.com ", first_name="Jane")
        assert response.success
        assert response.message == "Successfully subscribed to newsletter"
        assert email_client.sent == [(["jane@example.com"], "Welcome to CELESTIAL Crystals")]

        subscriber = await build_sql_repos(session).subscribers.get_by_email("jane@example.com")
        assert subscriber.is_active
        assert subscriber.first_name == "Jane"

    async def test_already_subscribed(self, service, email_client):
        await service.subscribe("jane@example.com")
        response = await service.subscribe("jane@example.com")
        assert response.message == "Email is already subscribed"
        assert response.already_subscribed
        assert len(email_client.sent) == 1

    async def test_reactivation(self, service, email_client):
        await service.subscribe("jane@example.com", first_name="Jane")
        await service.unsubscribe("jane@example.com")
        response = await service.subscribe("jane@example.com")
        assert response.message == "Welcome back! Your subscription has been reactivated"
        assert len(email_client.sent) == 2

    async def test_flags_matching_user(self, service, session, make_user):
        user = await make_user("jane@example.com")
        await service.subscribe("jane@example.com")
        await session.refresh(user)
        assert user.newsletter_subscribed

    async def test_welcome_failure_still_subscribes(self, session):
        service = NewsletterService(session, FailingEmailClient(), SITE_URL)
        response = await service.subscribe("jane@example.com")
        assert response.success

    @pytest.mark.parametrize("email, message", [(None, "Email is required"), ("  ", "Email is required"), ("jane@", "Invalid email address")])
    async def test_invalid_email(self, service, email, message):
        with pytest.raises(InvalidEmailError) as exc_info:
            await service.subscribe(email)
        assert exc_info.value.message == message


class TestUnsubscribe:
    async def test_unsubscribe(self, service):
        await service.subscribe("jane@example.com")
        subscriber = await service.unsubscribe("JANE@example.com")
        assert not subscriber.is_active
        assert subscriber.unsubscribed_at is not None

    async def test_unknown_subscriber(self, service):
        with pytest.raises(SubscriberNotFoundError):
            await service.unsubscribe("ghost@example.com")


class TestCampaigns:
    async def _seed(self, session, make_user):
        repos = build_sql_repos(session)
        await repos.subscribers.create(EmailSubscriber(email="reader@example.com"))
        await repos.subscribers.create(EmailSubscriber(email="gone@example.com", is_active=False))
        await repos.subscribers.create(EmailSubscriber(email="both@example.com"))
        await make_user("both@example.com", marketing_emails=True)
        await make_user("buyer@example.com", marketing_emails=True)
        await make_user("quiet@example.com")

    async def test_recipient_groups(self, service, session, make_user):
        await self._seed(session, make_user)
        assert set(await service.resolve_recipients("newsletter")) == {"reader@example.com", "both@example.com"}
        assert set(await service.resolve_recipients("customers")) == {"both@example.com", "buyer@example.com"}
        everyone = await service.resolve_recipients("ALL")
        assert sorted(everyone) == ["both@example.com", "buyer@example.com", "reader@example.com"]

    async def test_explicit_list_is_deduplicated(self, service):
        assert await service.resolve_recipients(["A@example.com", "a@example.com ", "", "b@example.com"]) == [
            "a@example.com",
            "b@example.com",
        ]

    async def test_explicit_list_rejects_malformed_addresses(self, service, email_client):
        with pytest.raises(InvalidEmailError) as exc_info:
            await service.send_campaign("newsletter", ["ok@example.com", "not-an-email", "a@b"], "Hi", "<p>Hi</p>")
        assert "not-an-email" in exc_info.value.message
        assert "a@b" in exc_info.value.message
        assert email_client.sent == []

    async def test_unknown_group(self, service):
        with pytest.raises(InvalidEmailError):
            await service.resolve_recipients("vips")

    async def test_send_campaign(self, service, session, make_user, email_client):
        await self._seed(session, make_user)
        result = await service.send_campaign("promotion", "all", "Full Moon Sale", "<p>20% off</p>")
        assert result.total == 3
        assert result.sent == 3
        assert result.failed == 0
        assert {recipients[0] for recipients, _ in email_client.sent} == {
            "both@example.com",
            "buyer@example.com",
            "reader@example.com",
        }

    async def test_failed_deliveries_are_reported(self, session):
        service = NewsletterService(session, FailingEmailClient(), SITE_URL)
        result = await service.send_campaign("newsletter", ["a@example.com", "b@example.com"], "Hi", "<p>Hi</p>")
        assert result.sent == 0
        assert result.failed == 2
        assert result.failed_recipients == ["a@example.com", "b@example.com"]


def test_normalize_email():
    assert normalize_email(" Jane@Example.COM ") == "jane@example.com"
