from datetime import datetime
from types import SimpleNamespace

from celestial_crystals.notifications.templates import (
    html_to_text,
    render_campaign,
    render_contact_message,
    render_inventory_alert,
    render_order_confirmation,
    render_welcome,
)

SITE_URL = "https://celestial.example/"


def _order(**overrides):
    fields = dict(
        order_number="CC-20260301-ABC123",
        created_at=datetime(2026, 3, 1, 12, 0),
        payment_method="stripe",
        subtotal=64.0,
        discount_amount=6.4,
        discount_code="WELCOME10",
        shipping_amount=0.0,
        tax_amount=4.61,
        total_amount=62.21,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


class TestOrderConfirmation:
    def test_contents(self):
        items = [SimpleNamespace(crystal_name="Tiger Eye Bracelet", quantity=2, price=32.0)]
        address = SimpleNamespace(
            first_name="Jane", last_name="Doe", address1="1 Main St", city="Toronto", province="ON",
            postal_code="M5V 1A1", country="CA",
        )
        email = render_order_confirmation(_order(), items, "Jane Doe", SITE_URL, address=address)

        assert email.subject == "Order Confirmed: CC-20260301-ABC123 - Your Crystals Are On Their Way!"
        assert "Dear Jane Doe" in email.html
        assert "Tiger Eye Bracelet" in email.html
        assert "$64.00" in email.html
        assert "Discount (WELCOME10)" in email.html
        assert "FREE" in email.html
        assert "Credit Card" in email.html
        assert "https://celestial.example/orders/track?order_number=CC-20260301-ABC123" in email.html
        assert "1 Main St" in email.html
        assert "<" not in email.text

    def test_defaults_without_name_or_address(self):
        email = render_order_confirmation(_order(discount_amount=0, shipping_amount=5.99), [], "", SITE_URL)
        assert "Dear Crystal Lover" in email.html
        assert "Shipping Information" not in email.html
        assert "Discount" not in email.html
        assert "$5.99" in email.html

    def test_customer_name_is_escaped(self):
        email = render_order_confirmation(_order(), [], "<script>x</script>", SITE_URL)
        assert "<script>x</script>" not in email.html
        assert "&lt;script&gt;" in email.html


def test_welcome_email():
    email = render_welcome("Ann", SITE_URL)
    assert email.subject == "Welcome to CELESTIAL Crystals"
    assert "Welcome to CELESTIAL, Ann!" in email.html
    assert "WELCOME15" in email.text


def test_campaign_keeps_admin_html():
    email = render_campaign("Full Moon Sale", "<p><strong>20% off</strong> moonstone</p>", SITE_URL)
    assert email.subject == "Full Moon Sale"
    assert "<strong>20% off</strong>" in email.html
    assert "20% off moonstone" in email.text


def test_html_to_text():
    html = "<html><head><title>T</title><style>p {}</style></head><body><p>One</p><p>Two<br>Three &amp; four</p></body></html>"
    assert html_to_text(html) == "One\nTwo\nThree & four"


def test_inventory_alert():
    low = SimpleNamespace(name="Citrine Bracelet", stock_quantity=2, low_stock_threshold=5, price=29.0)
    out = SimpleNamespace(name="Howlite Bracelet", stock_quantity=0, low_stock_threshold=5, price=25.0)
    email = render_inventory_alert([low], [out], SITE_URL, datetime(2026, 3, 1, 8, 0))

    assert email.subject == "Inventory Alert: 1 low stock, 1 out of stock"
    assert "Citrine Bracelet" in email.html
    assert "$25.00" in email.html
    assert "March 01, 2026" in email.text
    assert 'href="https://celestial.example/admin/inventory"' in email.html


def test_contact_message_is_escaped():
    email = render_contact_message(
        "Jane <b>Doe</b>", "jane@example.com", "Sizing", "Will it fit?\n<script>x</script>", SITE_URL
    )
    assert email.subject == "Contact Form: Sizing"
    assert "Jane &lt;b&gt;Doe&lt;/b&gt;" in email.html
    assert "&lt;script&gt;" in email.html
    assert "jane@example.com" in email.text
