"""Outgoing email: the Resend client and the Jinja2-rendered message bodies."""

from .email import EmailClient, EmailResult
from .templates import (
    RenderedEmail,
    html_to_text,
    render_campaign,
    render_contact_message,
    render_inventory_alert,
    render_order_confirmation,
    render_welcome,
)

__all__ = [
    "EmailClient",
    "EmailResult",
    "RenderedEmail",
    "html_to_text",
    "render_campaign",
    "render_contact_message",
    "render_inventory_alert",
    "render_order_confirmation",
    "render_welcome",
]
