"""
Newsletter subscriptions and email campaigns.
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence, Union

from sqlalchemy.ext.asyncio import AsyncSession

from celestial_crystals.core.database.base import utc_now
from celestial_crystals.core.database.entities.email_subscribers import EmailSubscriber
from celestial_crystals.core.database.repositories.bundle import build_sql_repos
from celestial_crystals.core.errors import EmailDeliveryError, InvalidEmailError, SubscriberNotFoundError
from celestial_crystals.core.logging_config import get_logger
from celestial_crystals.core.models.io.subscribers import CampaignResult, SubscribeResponse
from celestial_crystals.core.monitoring import log_email_sent
from celestial_crystals.notifications.email import EmailClient
from celestial_crystals.notifications.templates import render_campaign, render_welcome

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
RECIPIENT_GROUPS = ("newsletter", "customers", "all")


def normalize_email(email: Optional[str]) -> str:
    value = (email or "").strip().lower()
    if not value:
        raise InvalidEmailError("Email is required")
    if not EMAIL_PATTERN.match(value):
        raise InvalidEmailError("Invalid email address")
    return value


class NewsletterService:
    """Subscribe, unsubscribe and send campaigns to subscribers."""

    def __init__(self, session: AsyncSession, email_client: EmailClient, site_url: str):
        self.session = session
        self.repos = build_sql_repos(session)
        self.email_client = email_client
        self.site_url = site_url

    async def subscribe(
        self,
        email: Optional[str],
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        source: str = "website",
    ) -> SubscribeResponse:
        """
        Subscribe an address to the newsletter.

        New and reactivated subscribers get the welcome email. A user account
        with the same address is flagged as subscribed.

        Raises:
            InvalidEmailError: Missing or malformed address
        """
        address = normalize_email(email)
        subscriber = await self.repos.subscribers.get_by_email(address)

        if subscriber is not None and subscriber.is_active:
            return SubscribeResponse(success=True, message="Email is already subscribed", already_subscribed=True)

        if subscriber is None:
            subscriber = EmailSubscriber(
                email=address,
                first_name=first_name,
                last_name=last_name,
                source=source,
                newsletter=True,
                promotions=True,
                product_updates=True,
            )
            await self.repos.subscribers.create(subscriber, commit=False)
            message = "Successfully subscribed to newsletter"
        else:
            subscriber.is_active = True
            subscriber.unsubscribed_at = None
            subscriber.first_name = first_name or subscriber.first_name
            subscriber.last_name = last_name or subscriber.last_name
            await self.repos.subscribers.update(subscriber, commit=False)
            message = "Welcome back! Your subscription has been reactivated"

        user = await self.repos.users.get_by_email(address)
        if user is not None:
            user.newsletter_subscribed = True
            await self.repos.users.update(user, commit=False)

        await self.session.commit()
        logger.info(f"Newsletter subscription for {address} ({source})")

        await self._send_welcome(address, subscriber.first_name)
        return SubscribeResponse(success=True, message=message)

    async def _send_welcome(self, address: str, first_name: Optional[str]) -> None:
        rendered = render_welcome(first_name, self.site_url)
        try:
            result = await self.email_client.send(address, rendered.subject, rendered.html, rendered.text)
        except EmailDeliveryError as e:
            logger.error(f"Failed to send welcome email to {address}: {e}", exc_info=True)
            return
        log_email_sent("welcome", 1, result.simulated)

    async def unsubscribe(self, email: Optional[str]) -> EmailSubscriber:
        """
        Deactivate a subscriber.

        Raises:
            InvalidEmailError: Missing or malformed address
            SubscriberNotFoundError: Address is not subscribed
        """
        address = normalize_email(email)
        subscriber = await self.repos.subscribers.get_by_email(address)
        if subscriber is None:
            raise SubscriberNotFoundError(f"Subscriber '{address}' not found")

        subscriber.is_active = False
        subscriber.unsubscribed_at = utc_now()
        await self.repos.subscribers.update(subscriber)
        logger.info(f"Newsletter unsubscribe for {address}")
        return subscriber

    async def resolve_recipients(self, recipients: Union[str, Sequence[str]]) -> List[str]:
        """
        Expand a recipient group into addresses.

        ``newsletter`` is active newsletter subscribers, ``customers`` is users
        that accept marketing email and ``all`` is the union of both. A list
        is normalized like a subscription address and rejected whole if any
        entry is malformed. Duplicates are dropped, keeping the first occurrence.

        Raises:
            InvalidEmailError: Unknown group or malformed address in the list
        """
        if isinstance(recipients, str):
            group = recipients.lower()
            if group not in RECIPIENT_GROUPS:
                raise InvalidEmailError(f"Unknown recipient group '{recipients}'")
            emails: List[str] = []
            if group in ("newsletter", "all"):
                emails.extend(await self.repos.subscribers.active_newsletter_emails())
            if group in ("customers", "all"):
                emails.extend(user.email for user in await self.repos.users.marketing_recipients())
        else:
            emails = []
            invalid = []
            for email in recipients:
                if not email or not email.strip():
                    continue
                try:
                    emails.append(normalize_email(email))
                except InvalidEmailError:
                    invalid.append(email.strip())
            if invalid:
                raise InvalidEmailError(f"Invalid recipient address: {', '.join(invalid)}")
        return list(dict.fromkeys(emails))

    async def send_campaign(
        self, email_type: str, recipients: Union[str, Sequence[str]], subject: str, content: str
    ) -> CampaignResult:
        """Send a rendered campaign to every recipient, one message each."""
        addresses = await self.resolve_recipients(recipients)
        rendered = render_campaign(subject, content, self.site_url)

        sent = 0
        failed: List[str] = []
        simulated = False
        for address in addresses:
            try:
                result = await self.email_client.send(address, rendered.subject, rendered.html, rendered.text)
            except EmailDeliveryError as e:
                logger.warning(f"Campaign email to {address} failed: {e}")
                failed.append(address)
                continue
            simulated = simulated or result.simulated
            sent += 1

        logger.info(f"Campaign '{subject}' ({email_type}): {sent} sent, {len(failed)} failed")
        log_email_sent(email_type, sent, simulated)
        return CampaignResult(total=len(addresses), sent=sent, failed=len(failed), failed_recipients=failed)
