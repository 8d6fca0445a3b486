"""Sitemap, robots.txt, JSON-LD structured data and the SEO coverage report."""

from .audit import SeoItemReport, SeoReport, audit_blog_post, audit_product, seo_report
from .sitemap import STATIC_PAGES, SitemapEntry, render_robots_txt, render_sitemap_xml, sitemap_entries
from .structured_data import (
    article_schema,
    breadcrumb_schema,
    organization_schema,
    product_schema,
    to_json_ld,
)

__all__ = [
    "STATIC_PAGES",
    "SeoItemReport",
    "SeoReport",
    "SitemapEntry",
    "article_schema",
    "audit_blog_post",
    "audit_product",
    "breadcrumb_schema",
    "organization_schema",
    "product_schema",
    "render_robots_txt",
    "render_sitemap_xml",
    "seo_report",
    "sitemap_entries",
    "to_json_ld",
]
