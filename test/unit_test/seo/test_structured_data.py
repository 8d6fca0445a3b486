import json
from datetime import datetime, timezone

from celestial_crystals.catalog.data import get_crystal
from celestial_crystals.core.database.entities.blog_posts import BlogPost
from celestial_crystals.seo.structured_data import (
    article_schema,
    breadcrumb_schema,
    organization_schema,
    product_schema,
    to_json_ld,
)

SITE_URL = "https://celestial.example"


def test_organization():
    schema = organization_schema(SITE_URL)
    assert schema["@type"] == "Organization"
    assert schema["logo"] == "https://celestial.example/logo.png"


class TestProductSchema:
    def test_offer(self):
        crystal = get_crystal("tiger-eye-1")
        schema = product_schema(crystal, SITE_URL)
        assert schema["sku"] == "tiger-eye-1"
        assert schema["url"] == "https://celestial.example/crystals/tiger-eye-1"
        assert schema["offers"]["price"] == "32.00"
        assert schema["offers"]["priceCurrency"] == "USD"
        assert schema["offers"]["availability"] == "https://schema.org/InStock"
        assert all(image.startswith(SITE_URL) for image in schema["image"])
        assert "aggregateRating" not in schema

    def test_out_of_stock_with_rating(self):
        schema = product_schema(get_crystal("howlite-1"), SITE_URL, currency="cad", in_stock=False, rating=(4.5, 2))
        assert schema["offers"]["availability"] == "https://schema.org/OutOfStock"
        assert schema["offers"]["priceCurrency"] == "CAD"
        assert schema["aggregateRating"] == {"@type": "AggregateRating", "ratingValue": 4.5, "reviewCount": 2}

    def test_zero_reviews_has_no_rating(self):
        assert "aggregateRating" not in product_schema(get_crystal("howlite-1"), SITE_URL, rating=(0.0, 0))


def test_article():
    post = BlogPost(
        title="Moon Rituals",
        slug="moon-rituals",
        content="<p>x</p>",
        excerpt="Rituals for the full moon.",
        author="Luna",
        published_at=datetime(2026, 3, 5, 9, 30, tzinfo=timezone.utc),
    )
    post.set_tags_list(["moon", "rituals"])
    schema = article_schema(post, SITE_URL)
    assert schema["headline"] == "Moon Rituals"
    assert schema["description"] == "Rituals for the full moon."
    assert schema["image"] == "https://celestial.example/og-image.jpg"
    assert schema["datePublished"] == "2026-03-05T09:30:00+00:00"
    assert schema["mainEntityOfPage"]["@id"] == "https://celestial.example/blog/moon-rituals"
    assert schema["keywords"] == "moon, rituals"


def test_breadcrumbs():
    schema = breadcrumb_schema([("Home", "/"), ("Crystals", "/crystals")], SITE_URL)
    assert [item["position"] for item in schema["itemListElement"]] == [1, 2]
    assert schema["itemListElement"][1]["item"] == "https://celestial.example/crystals"


def test_json_ld_cannot_close_script_tag():
    encoded = to_json_ld({"name": "</script><script>alert(1)</script>"})
    assert "</script>" not in encoded
    assert json.loads(encoded)["name"] == "</script><script>alert(1)</script>"
