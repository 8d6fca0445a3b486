"""sitemap.xml and robots.txt generation."""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional, Sequence
from xml.etree import ElementTree

from pydantic import BaseModel

from celestial_crystals.catalog.data import CRYSTAL_CATALOG, CatalogCrystal

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"


class SitemapEntry(BaseModel):
    path: str
    priority: float
    changefreq: str
    lastmod: Optional[datetime] = None


STATIC_PAGES: List[SitemapEntry] = [
    SitemapEntry(path="/", priority=1.0, changefreq="daily"),
    SitemapEntry(path="/crystals", priority=0.9, changefreq="daily"),
    SitemapEntry(path="/categories", priority=0.8, changefreq="weekly"),
    SitemapEntry(path="/birthdate-guide", priority=0.8, changefreq="monthly"),
    SitemapEntry(path="/about", priority=0.6, changefreq="monthly"),
    SitemapEntry(path="/contact", priority=0.5, changefreq="monthly"),
    SitemapEntry(path="/faq", priority=0.5, changefreq="monthly"),
    SitemapEntry(path="/shipping", priority=0.4, changefreq="monthly"),
    SitemapEntry(path="/returns", priority=0.4, changefreq="monthly"),
    SitemapEntry(path="/privacy", priority=0.3, changefreq="yearly"),
    SitemapEntry(path="/terms", priority=0.3, changefreq="yearly"),
]

CRYSTAL_PRIORITY = 0.8
BLOG_POST_PRIORITY = 0.7


def sitemap_entries(
    published_posts: Sequence[Any] = (),
    catalog: Sequence[CatalogCrystal] = CRYSTAL_CATALOG,
) -> List[SitemapEntry]:
    """Static pages, then every catalog crystal, then every published post."""
    entries = list(STATIC_PAGES)
    entries.extend(
        SitemapEntry(path=f"/crystals/{crystal.id}", priority=CRYSTAL_PRIORITY, changefreq="weekly")
        for crystal in catalog
    )
    entries.extend(
        SitemapEntry(
            path=f"/blog/{post.slug}",
            priority=BLOG_POST_PRIORITY,
            changefreq="monthly",
            lastmod=post.updated_at or post.published_at,
        )
        for post in published_posts
    )
    return entries


def render_sitemap_xml(entries: Sequence[SitemapEntry], site_url: str) -> str:
    base = site_url.rstrip("/")
    urlset = ElementTree.Element("urlset", xmlns=SITEMAP_NAMESPACE)
    for entry in entries:
        url = ElementTree.SubElement(urlset, "url")
        ElementTree.SubElement(url, "loc").text = f"{base}{entry.path}"
        if entry.lastmod is not None:
            ElementTree.SubElement(url, "lastmod").text = entry.lastmod.date().isoformat()
        ElementTree.SubElement(url, "changefreq").text = entry.changefreq
        ElementTree.SubElement(url, "priority").text = f"{entry.priority:.1f}"
    body = ElementTree.tostring(urlset, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'


def render_robots_txt(site_url: str) -> str:
    return "\n".join(
        [
            "User-agent: *",
            "Allow: /",
            "Disallow: /api/",
            "Disallow: /admin",
            "",
            f"Sitemap: {site_url.rstrip('/')}/sitemap.xml",
            "",
        ]
    )
