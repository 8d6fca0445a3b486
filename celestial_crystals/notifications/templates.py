"""
HTML email rendering.

Every email body is rendered with Jinja2 into the shared branded layout and
returned as a ``RenderedEmail`` with subject, HTML and plain-text parts.
"""

from __future__ import annotations

import html as html_lib
import re
from datetime import datetime
from typing import Any, Optional, Sequence

from jinja2 import DictLoader, Environment, select_autoescape
from pydantic import BaseModel

_LAYOUT = """\
<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{{ title }}</title>
  <style>
    body { font-family: Georgia, serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px; }
    .header { text-align: center; padding: 20px 0; border-bottom: 2px solid #6b46c1; }
    .highlight { background: #f5f3ff; border-radius: 8px; padding: 15px; margin: 20px 0; }
    .button { display: inline-block; background: #6b46c1; color: #fff; padding: 12px 24px; border-radius: 6px; text-decoration: none; }
    .footer { font-size: 12px; color: #888; text-align: center; border-top: 1px solid #eee; margin-top: 30px; padding-top: 15px; }
  </style>
</head>
<body>
  <div class="header"><h2>CELESTIAL Crystals</h2></div>
  {% block content %}{% endblock %}
  <div class="footer">
    <p>CELESTIAL Crystals &middot; <a href="{{ site_url }}">{{ site_url }}</a></p>
    <p>Free shipping across North America on orders over $50.</p>
  </div>
</body>
</html>
"""

_ORDER_CONFIRMATION = """\
{% extends "layout.html" %}
{% block content %}
<h1>Order Confirmation - {{ order.order_number }}</h1>
<p>Dear {{ customer_name }},</p>
<p>Thank you for your order! We're excited to send you these beautiful crystals to enhance your spiritual journey.</p>
<div class="highlight">
  <h3>Order Details</h3>
  <p><strong>Order Number:</strong> {{ order.order_number }}</p>
  <p><strong>Order Date:</strong> {{ order.created_at.strftime("%B %d, %Y") }}</p>
  <p><strong>Payment Method:</strong> {{ "Credit Card" if order.payment_method == "stripe" else order.payment_method }}</p>
</div>
<h3>Items Ordered</h3>
<table style="width: 100%; border-collapse: collapse;">
  {% for item in items %}
  <tr>
    <td><strong>{{ item.crystal_name }}</strong><br><small>Qty: {{ item.quantity }}</small></td>
    <td style="text-align: right;">{{ money(item.price * item.quantity) }}</td>
  </tr>
  {% endfor %}
  <tr><td><strong>Subtotal:</strong></td><td style="text-align: right;">{{ money(order.subtotal) }}</td></tr>
  {% if order.discount_amount %}
  <tr><td>Discount{% if order.discount_code %} ({{ order.discount_code }}){% endif %}:</td><td style="text-align: right;">-{{ money(order.discount_amount) }}</td></tr>
  {% endif %}
  <tr><td>Shipping:</td><td style="text-align: right;">{{ "FREE" if not order.shipping_amount else money(order.shipping_amount) }}</td></tr>
  <tr><td>Tax:</td><td style="text-align: right;">{{ money(order.tax_amount) }}</td></tr>
  <tr><td><strong>Total:</strong></td><td style="text-align: right;"><strong>{{ money(order.total_amount) }}</strong></td></tr>
</table>
{% if address %}
<h3>Shipping Information</h3>
<p>{{ address.first_name }} {{ address.last_name }}<br>
{{ address.address1 }}<br>
{{ address.city }}, {{ address.province }} {{ address.postal_code }}<br>
{{ address.country }}</p>
{% endif %}
<div class="highlight">
  <h3>Track Your Order</h3>
  <p>You'll receive a tracking number once your order ships, typically within 1-2 business days.</p>
  <a class="button" href="{{ site_url }}/orders/track?order_number={{ order.order_number }}">Track Order</a>
</div>
<h3>Crystal Care Reminder</h3>
<ul>
  <li>Cleanse them with sage, moonlight, or running water</li>
  <li>Set your intentions for how you'd like them to support you</li>
  <li>Keep them in a special place where their energy can work for you</li>
</ul>
<p>With gratitude,<br>The Celestial Crystals Team</p>
{% endblock %}
"""

_WELCOME = """\
{% extends "layout.html" %}
{% block content %}
<h1>Welcome to CELESTIAL{% if first_name %}, {{ first_name }}{% endif %}!</h1>
<p>Thank you for joining our crystal community. Each week we share crystal wisdom, chakra guides and seasonal rituals.</p>
<div class="highlight">
  <h3>Your welcome gift</h3>
  <p>Use code <strong>WELCOME15</strong> for 15% off your first order.</p>
</div>
<a class="button" href="{{ site_url }}/crystals">Explore Crystals</a>
<p>Not sure where to start? Discover your birthstone crystals in our <a href="{{ site_url }}/birthdate-guide">birth date guide</a>.</p>
{% endblock %}
"""

_CAMPAIGN = """\
{% extends "layout.html" %}
{% block content %}
<h1>{{ subject }}</h1>
{{ content | safe }}
<p><a class="button" href="{{ site_url }}/crystals">Shop Crystals</a></p>
<p style="font-size: 12px; color: #888;">You are receiving this because you subscribed to CELESTIAL updates.</p>
{% endblock %}
"""

_INVENTORY_ALERT = """\
{% extends "layout.html" %}
{% block content %}
<h1>Inventory Alert - Celestial Crystals</h1>
<p>This is an automated inventory alert for items that need attention:</p>
<div class="highlight">
  <h3>Summary</h3>
  <ul>
    <li><strong>Low Stock Items:</strong> {{ low_stock | length }}</li>
    <li><strong>Out of Stock Items:</strong> {{ out_of_stock | length }}</li>
    <li><strong>Alert Date:</strong> {{ alert_date.strftime("%B %d, %Y") }}</li>
  </ul>
</div>
{% if low_stock %}
<h3 style="color: #f59e0b;">Low Stock Items</h3>
<table style="width: 100%; border-collapse: collapse;">
  <tr><th style="text-align: left;">Product</th><th>Current Stock</th><th>Threshold</th><th>Price</th></tr>
  {% for crystal in low_stock %}
  <tr>
    <td>{{ crystal.name }}</td>
    <td style="text-align: center; color: #f59e0b;"><strong>{{ crystal.stock_quantity }}</strong></td>
    <td style="text-align: center;">{{ crystal.low_stock_threshold }}</td>
    <td style="text-align: right;">{{ money(crystal.price) }}</td>
  </tr>
  {% endfor %}
</table>
{% endif %}
{% if out_of_stock %}
<h3 style="color: #ef4444;">Out of Stock Items</h3>
<table style="width: 100%; border-collapse: collapse;">
  <tr><th style="text-align: left;">Product</th><th>Price</th></tr>
  {% for crystal in out_of_stock %}
  <tr><td>{{ crystal.name }}</td><td style="text-align: right;">{{ money(crystal.price) }}</td></tr>
  {% endfor %}
</table>
{% endif %}
<h3>Recommended Actions</h3>
<ul>
  <li>Review sales velocity for out-of-stock items with high demand</li>
  <li>Place restock orders for low stock items</li>
  <li>Consider adjusting low stock thresholds for fast-moving items</li>
</ul>
<a class="button" href="{{ site_url }}/admin/inventory">Open Inventory</a>
{% endblock %}
"""

_CONTACT_MESSAGE = """\
{% extends "layout.html" %}
{% block content %}
<h1>New Contact Message</h1>
<div class="highlight">
  <p><strong>From:</strong> {{ name }} &lt;{{ email }}&gt;</p>
  <p><strong>Subject:</strong> {{ subject }}</p>
</div>
<p style="white-space: pre-wrap;">{{ message }}</p>
{% endblock %}
"""

_env = Environment(
    loader=DictLoader(
        {
            "layout.html": _LAYOUT,
            "order_confirmation.html": _ORDER_CONFIRMATION,
            "welcome.html": _WELCOME,
            "campaign.html": _CAMPAIGN,
            "inventory_alert.html": _INVENTORY_ALERT,
            "contact_message.html": _CONTACT_MESSAGE,
        }
    ),
    autoescape=select_autoescape(["html"]),
)
_env.globals["money"] = lambda value: f"${float(value or 0):.2f}"


class RenderedEmail(BaseModel):
    subject: str
    html: str
    text: str


_TAG_RE = re.compile(r"<[^>]+>")
_STYLE_RE = re.compile(r"<(style|title|head)[^>]*>.*?</\1>", re.DOTALL | re.IGNORECASE)
_BLANK_LINES_RE = re.compile(r"\n\s*\n+")


def html_to_text(html: str) -> str:
    """Strip markup for the plain-text alternative of an email."""
    text = _STYLE_RE.sub("", html)
    text = re.sub(r"<br\s*/?>", "\n", text, flags=re.IGNORECASE)
    text = re.sub(r"</(p|h[1-6]|li|tr|div)>", "\n", text, flags=re.IGNORECASE)
    text = html_lib.unescape(_TAG_RE.sub("", text))
    lines = [line.strip() for line in text.splitlines()]
    return _BLANK_LINES_RE.sub("\n\n", "\n".join(lines)).strip()


def _render(template: str, title: str, site_url: str, **context: Any) -> str:
    return _env.get_template(template).render(title=title, site_url=site_url.rstrip("/"), **context)


def render_order_confirmation(
    order: Any,
    items: Sequence[Any],
    customer_name: str,
    site_url: str,
    address: Optional[Any] = None,
) -> RenderedEmail:
    """Render the order confirmation for an ``Order`` and its ``OrderItem`` rows."""
    title = f"Order Confirmation - {order.order_number}"
    html = _render(
        "order_confirmation.html",
        title,
        site_url,
        order=order,
        items=items,
        customer_name=customer_name or "Crystal Lover",
        address=address,
    )
    return RenderedEmail(
        subject=f"Order Confirmed: {order.order_number} - Your Crystals Are On Their Way!",
        html=html,
        text=html_to_text(html),
    )


def render_welcome(first_name: Optional[str], site_url: str) -> RenderedEmail:
    html = _render("welcome.html", "Welcome to CELESTIAL", site_url, first_name=first_name)
    return RenderedEmail(subject="Welcome to CELESTIAL Crystals", html=html, text=html_to_text(html))


def render_campaign(subject: str, content: str, site_url: str) -> RenderedEmail:
    """Render an admin campaign; ``content`` is trusted admin HTML."""
    html = _render("campaign.html", subject, site_url, subject=subject, content=content)
    return RenderedEmail(subject=subject, html=html, text=html_to_text(html))


def render_inventory_alert(
    low_stock: Sequence[Any], out_of_stock: Sequence[Any], site_url: str, alert_date: datetime
) -> RenderedEmail:
    """Render the admin alert for ``Crystal`` rows that are low on or out of stock."""
    html = _render(
        "inventory_alert.html",
        "Inventory Alert",
        site_url,
        low_stock=low_stock,
        out_of_stock=out_of_stock,
        alert_date=alert_date,
    )
    subject = f"Inventory Alert: {len(low_stock)} low stock, {len(out_of_stock)} out of stock"
    return RenderedEmail(subject=subject, html=html, text=html_to_text(html))


def render_contact_message(
    name: str, email: str, subject: str, message: str, site_url: str
) -> RenderedEmail:
    html = _render(
        "contact_message.html", "New Contact Message", site_url, name=name, email=email, subject=subject, message=message
    )
    return RenderedEmail(subject=f"Contact Form: {subject}", html=html, text=html_to_text(html))
