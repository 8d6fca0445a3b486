"""
Server-rendered storefront pages.

HTML is rendered with Jinja2 from ``server/templates``. Catalog pages read
the static catalog; stock levels, reviews and blog posts come from the
database. ``sitemap.xml`` and ``robots.txt`` are served from here too.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from fastapi.templating import Jinja2Templates

from celestial_crystals.catalog.data import CRYSTAL_CATALOG, get_crystal
from celestial_crystals.catalog.query import CatalogQuery, all_categories, catalog_options, crystals_by_category, query_catalog
from celestial_crystals.core.logging_config import get_logger
from celestial_crystals.core.models.domain.enums import BlogPostStatus
from celestial_crystals.seo.sitemap import render_robots_txt, render_sitemap_xml, sitemap_entries
from celestial_crystals.seo.structured_data import (
    article_schema,
    breadcrumb_schema,
    organization_schema,
    product_schema,
    to_json_ld,
)
from celestial_crystals.server.api.v1.recommendations import build_recommendations, parse_birth_date
from celestial_crystals.server.core.config import Settings
from celestial_crystals.server.services.deps import RepoDep, SettingsDep

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(include_in_schema=False)

FEATURED_LIMIT = 6
RELATED_LIMIT = 4
REVIEWS_ON_PAGE = 10
BLOG_PAGE_SIZE = 12


def _render(
    request: Request,
    template: str,
    context: Dict[str, Any],
    settings: Settings,
    *,
    json_ld: Optional[List[Dict[str, Any]]] = None,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    schemas = [organization_schema(settings.site_url), *(json_ld or [])]
    context = {
        **context,
        "site_url": settings.site_url.rstrip("/"),
        "categories": all_categories(),
        "json_ld": [to_json_ld(schema) for schema in schemas],
    }
    return templates.TemplateResponse(request, template, context, status_code=status_code)


def _not_found(request: Request, settings: Settings, message: str) -> HTMLResponse:
    return _render(
        request, "not_found.html", {"title": "Not found", "message": message}, settings,
        status_code=status.HTTP_404_NOT_FOUND,
    )


@router.get("/", response_class=HTMLResponse)
async def home(request: Request, settings: SettingsDep) -> HTMLResponse:
    featured = sorted(CRYSTAL_CATALOG, key=lambda c: c.rarity.rank, reverse=True)[:FEATURED_LIMIT]
    return _render(request, "home.html", {"title": "Natural Crystal Bracelets", "featured": featured}, settings)


@router.get("/crystals", response_class=HTMLResponse)
async def crystal_listing(
    request: Request,
    settings: SettingsDep,
    category: Optional[str] = None,
    search: Optional[str] = None,
    rarity: Optional[str] = None,
    min_price: Optional[float] = Query(default=None, ge=0),
    max_price: Optional[float] = Query(default=None, ge=0),
    chakra: Optional[str] = None,
    zodiac: Optional[str] = None,
    sort_by: Optional[str] = None,
) -> HTMLResponse:
    query = CatalogQuery(
        category=category,
        search=search,
        rarity=rarity,
        min_price=min_price,
        max_price=max_price,
        chakra=chakra,
        zodiac=zodiac,
        sort_by=sort_by,
    )
    result = query_catalog(query)
    return _render(
        request,
        "crystals.html",
        {"title": "All Crystals", "page": result, "query": query, "options": catalog_options()},
        settings,
    )


@router.get("/crystals/{crystal_id}", response_class=HTMLResponse)
async def crystal_detail(crystal_id: str, request: Request, repos: RepoDep, settings: SettingsDep) -> HTMLResponse:
    crystal = get_crystal(crystal_id)
    if crystal is None:
        return _not_found(request, settings, f"We could not find the crystal '{crystal_id}'.")

    row = await repos.crystals.get_by_id(crystal_id)
    stock_quantity = row.stock_quantity if row is not None else None
    in_stock = row is None or (row.stock_quantity > 0 and row.is_active)

    reviews, _ = await repos.reviews.approved_for_crystal(crystal_id, limit=REVIEWS_ON_PAGE, offset=0)
    distribution = await repos.reviews.rating_distribution(crystal_id)
    review_count = sum(distribution.values())
    average = round(sum(star * n for star, n in distribution.items()) / review_count, 1) if review_count else 0.0
    related = [c for c in crystals_by_category(crystal.category) if c.id != crystal.id][:RELATED_LIMIT]

    json_ld = [
        product_schema(
            crystal,
            settings.site_url,
            currency=settings.stripe.currency,
            in_stock=in_stock,
            rating=(average, review_count),
        ),
        breadcrumb_schema(
            [("Home", "/"), (crystal.category, f"/categories/{crystal.category}"), (crystal.name, f"/crystals/{crystal.id}")],
            settings.site_url,
        ),
    ]
    return _render(
        request,
        "crystal_detail.html",
        {
            "title": crystal.name,
            "crystal": crystal,
            "stock_quantity": stock_quantity,
            "in_stock": in_stock,
            "reviews": reviews,
            "average_rating": average,
            "review_count": review_count,
            "related": related,
        },
        settings,
        json_ld=json_ld,
    )


@router.get("/categories", response_class=HTMLResponse)
async def category_index(request: Request, settings: SettingsDep) -> HTMLResponse:
    counts = {category: len(crystals_by_category(category)) for category in all_categories()}
    return _render(request, "categories.html", {"title": "Shop by Category", "counts": counts}, settings)


@router.get("/categories/{category}", response_class=HTMLResponse)
async def category_page(category: str, request: Request, settings: SettingsDep) -> HTMLResponse:
    crystals = crystals_by_category(category)
    if not crystals:
        return _not_found(request, settings, f"There is no category named '{category}'.")
    return _render(
        request, "category.html", {"title": category, "category": category, "crystals": crystals}, settings
    )


@router.get("/birthdate-guide", response_class=HTMLResponse)
async def birthdate_guide(
    request: Request, settings: SettingsDep, birth_date: Optional[str] = None
) -> HTMLResponse:
    context: Dict[str, Any] = {"title": "Birthdate Crystal Guide", "birth_date": birth_date or "", "error": None}
    if birth_date is not None:
        try:
            parsed: date = parse_birth_date(birth_date)
        except HTTPException as e:
            context["error"] = e.detail
        else:
            context["result"] = build_recommendations(parsed, limit=6)
    return _render(request, "birthdate_guide.html", context, settings)


@router.get("/blog", response_class=HTMLResponse)
async def blog_index(
    request: Request, repos: RepoDep, settings: SettingsDep, page: int = Query(default=1, ge=1)
) -> HTMLResponse:
    posts, total = await repos.blog_posts.list_page(
        status=BlogPostStatus.published.value, limit=BLOG_PAGE_SIZE, offset=(page - 1) * BLOG_PAGE_SIZE
    )
    return _render(
        request,
        "blog.html",
        {"title": "Crystal Journal", "posts": posts, "page": page, "has_next": page * BLOG_PAGE_SIZE < total},
        settings,
    )


@router.get("/blog/{slug}", response_class=HTMLResponse)
async def blog_post(slug: str, request: Request, repos: RepoDep, settings: SettingsDep) -> HTMLResponse:
    post = await repos.blog_posts.get_by_slug(slug, published_only=True)
    if post is None:
        return _not_found(request, settings, "That article does not exist or is not published yet.")
    return _render(
        request,
        "blog_post.html",
        {"title": post.title, "post": post, "tags": post.get_tags_list()},
        settings,
        json_ld=[article_schema(post, settings.site_url)],
    )


@router.get("/sitemap.xml")
async def sitemap(repos: RepoDep, settings: SettingsDep) -> Response:
    entries = sitemap_entries(await repos.blog_posts.published())
    logger.debug(f"Serving sitemap with {len(entries)} urls")
    return Response(content=render_sitemap_xml(entries, settings.site_url), media_type="application/xml")


@router.get("/robots.txt", response_class=PlainTextResponse)
async def robots(settings: SettingsDep) -> PlainTextResponse:
    return PlainTextResponse(render_robots_txt(settings.site_url))
