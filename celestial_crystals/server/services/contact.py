"""
Contact form messages.

Messages are not stored; each one is forwarded to the store inbox.
"""

from __future__ import annotations

from celestial_crystals.core.database.base import utc_now
from celestial_crystals.core.errors import ContactFormError
from celestial_crystals.core.logging_config import get_logger
from celestial_crystals.core.models.io.contact import ContactRequest, ContactResponse
from celestial_crystals.core.monitoring import log_email_sent
from celestial_crystals.notifications.email import EmailClient
from celestial_crystals.notifications.templates import render_contact_message

from .newsletter import normalize_email

logger = get_logger(__name__)

MIN_MESSAGE_LENGTH = 10
THANK_YOU_MESSAGE = "Thank you for your message! We'll get back to you within 24 hours."


class ContactService:
    def __init__(self, email_client: EmailClient, inbox: str, site_url: str):
        self.email_client = email_client
        self.inbox = inbox
        self.site_url = site_url

    async def submit(self, form: ContactRequest) -> ContactResponse:
        """
        Validate a contact form and forward it to the store inbox.

        Raises:
            ContactFormError: A field is missing or the message is too short
            InvalidEmailError: The reply address is malformed
            EmailDeliveryError: The message could not be forwarded
        """
        name, subject, message = form.name.strip(), form.subject.strip(), form.message.strip()
        if not (name and form.email.strip() and subject and message):
            raise ContactFormError("All fields are required")
        email = normalize_email(form.email)
        if len(message) < MIN_MESSAGE_LENGTH:
            raise ContactFormError(f"Message must be at least {MIN_MESSAGE_LENGTH} characters long")

        rendered = render_contact_message(name, email, subject, message, self.site_url)
        result = await self.email_client.send(self.inbox, rendered.subject, rendered.html, rendered.text)
        log_email_sent("contact", 1, result.simulated)
        logger.info(f"Contact message from {email} forwarded to {self.inbox}")
        return ContactResponse(success=True, message=THANK_YOU_MESSAGE, received_at=utc_now())
