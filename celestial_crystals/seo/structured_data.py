"""schema.org JSON-LD objects embedded in storefront pages."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence, Tuple

from celestial_crystals.catalog.data import CatalogCrystal

SCHEMA_CONTEXT = "https://schema.org"
BRAND_NAME = "CELESTIAL"


def _absolute(site_url: str, path: str) -> str:
    return f"{site_url.rstrip('/')}{path}" if path.startswith("/") else path


def organization_schema(site_url: str) -> Dict[str, Any]:
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "Organization",
        "name": BRAND_NAME,
        "description": "Premium natural crystal bracelets and healing crystals",
        "url": site_url,
        "logo": _absolute(site_url, "/logo.png"),
        "address": {"@type": "PostalAddress", "addressCountry": "CA", "addressRegion": "North America"},
        "contactPoint": {
            "@type": "ContactPoint",
            "contactType": "customer service",
            "availableLanguage": ["English", "French"],
        },
    }


def product_schema(
    crystal: CatalogCrystal,
    site_url: str,
    *,
    currency: str = "usd",
    in_stock: bool = True,
    rating: Optional[Tuple[float, int]] = None,
) -> Dict[str, Any]:
    """
    Build a ``Product`` with an ``Offer`` for a catalog crystal.

    Args:
        crystal: Catalog entry.
        site_url: Absolute site base used for image and product URLs.
        currency: Price currency (ISO code, any case).
        in_stock: Whether the synced stock level is above zero.
        rating: Optional ``(average, count)`` from approved reviews.
    """
    schema: Dict[str, Any] = {
        "@context": SCHEMA_CONTEXT,
        "@type": "Product",
        "name": crystal.name,
        "description": crystal.description,
        "image": [_absolute(site_url, image) for image in crystal.gallery],
        "sku": crystal.id,
        "brand": {"@type": "Brand", "name": BRAND_NAME},
        "category": crystal.category,
        "url": _absolute(site_url, f"/crystals/{crystal.id}"),
        "offers": {
            "@type": "Offer",
            "price": f"{crystal.price:.2f}",
            "priceCurrency": currency.upper(),
            "availability": "https://schema.org/InStock" if in_stock else "https://schema.org/OutOfStock",
            "seller": {"@type": "Organization", "name": BRAND_NAME},
        },
        "additionalProperty": [
            {"@type": "PropertyValue", "name": "Healing Property", "value": prop} for prop in crystal.properties
        ],
    }
    if rating is not None and rating[1] > 0:
        schema["aggregateRating"] = {"@type": "AggregateRating", "ratingValue": rating[0], "reviewCount": rating[1]}
    return schema


def article_schema(post: Any, site_url: str) -> Dict[str, Any]:
    """Build an ``Article`` for a ``BlogPost`` row."""
    published = post.published_at or post.created_at
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "Article",
        "headline": post.title,
        "description": post.excerpt or post.meta_description or "",
        "image": _absolute(site_url, post.featured_image or "/og-image.jpg"),
        "author": {"@type": "Person", "name": post.author},
        "publisher": {"@type": "Organization", "name": BRAND_NAME},
        "datePublished": published.isoformat() if published else None,
        "dateModified": post.updated_at.isoformat() if post.updated_at else None,
        "mainEntityOfPage": {"@type": "WebPage", "@id": _absolute(site_url, f"/blog/{post.slug}")},
        "keywords": ", ".join(post.get_tags_list()) or "crystal healing, natural crystals, spiritual wellness",
    }


def breadcrumb_schema(crumbs: Sequence[Tuple[str, str]], site_url: str) -> Dict[str, Any]:
    items: List[Dict[str, Any]] = [
        {"@type": "ListItem", "position": index, "name": name, "item": _absolute(site_url, path)}
        for index, (name, path) in enumerate(crumbs, start=1)
    ]
    return {"@context": SCHEMA_CONTEXT, "@type": "BreadcrumbList", "itemListElement": items}


def to_json_ld(schema: Dict[str, Any]) -> str:
    """Serialize for a ``<script type="application/ld+json">`` block."""
    # "</" would close the script element early.
    return json.dumps(schema, ensure_ascii=False).replace("</", "<\\/")
