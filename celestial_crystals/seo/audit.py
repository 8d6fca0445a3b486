"""
SEO coverage report for the admin dashboard.

Each product and blog post is checked against a short list of on-page rules.
An item's score is the percentage of rules it passes; the overall score is
the average over all items.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple

from pydantic import BaseModel

from celestial_crystals.catalog.data import CRYSTAL_CATALOG, CatalogCrystal

TITLE_LENGTH = (10, 70)
META_DESCRIPTION_LENGTH = (50, 160)
MIN_PRODUCT_IMAGES = 3


class SeoItemReport(BaseModel):
    id: str
    name: str
    issues: List[str]
    score: int


class SeoReport(BaseModel):
    products: List[SeoItemReport]
    blog_posts: List[SeoItemReport]
    sitemap_url_count: int
    overall_score: int


Check = Tuple[bool, str]


def _length_issue(value: Optional[str], bounds: Tuple[int, int], label: str) -> Check:
    low, high = bounds
    if not value:
        return False, f"{label} is missing"
    length = len(value)
    if length < low:
        return False, f"{label} is too short ({length} < {low} characters)"
    if length > high:
        return False, f"{label} is too long ({length} > {high} characters)"
    return True, ""


def _score(checks: Sequence[Check]) -> Tuple[List[str], int]:
    issues = [message for passed, message in checks if not passed]
    passed = len(checks) - len(issues)
    return issues, round(100 * passed / len(checks)) if checks else 100


def audit_product(crystal: CatalogCrystal) -> SeoItemReport:
    checks: List[Check] = [
        _length_issue(crystal.name, TITLE_LENGTH, "Title"),
        _length_issue(crystal.description, META_DESCRIPTION_LENGTH, "Description"),
        (bool(crystal.image), "Main image is missing"),
        (
            len(crystal.gallery) >= MIN_PRODUCT_IMAGES,
            f"Only {len(crystal.gallery)} image(s); at least {MIN_PRODUCT_IMAGES} recommended",
        ),
    ]
    issues, score = _score(checks)
    return SeoItemReport(id=crystal.id, name=crystal.name, issues=issues, score=score)


def audit_blog_post(post: Any) -> SeoItemReport:
    checks: List[Check] = [
        _length_issue(post.meta_description, META_DESCRIPTION_LENGTH, "Meta description"),
        (bool(post.get_keywords_list()), "Keywords are missing"),
        (bool(post.featured_image), "Featured image is missing"),
        (bool(post.excerpt), "Excerpt is missing"),
    ]
    issues, score = _score(checks)
    return SeoItemReport(id=post.id, name=post.title, issues=issues, score=score)


def seo_report(
    blog_posts: Sequence[Any],
    sitemap_url_count: int,
    catalog: Sequence[CatalogCrystal] = CRYSTAL_CATALOG,
) -> SeoReport:
    """Audit every catalog crystal and the given blog posts."""
    products = [audit_product(crystal) for crystal in catalog]
    posts = [audit_blog_post(post) for post in blog_posts]
    scores = [item.score for item in [*products, *posts]]
    overall = round(sum(scores) / len(scores)) if scores else 100
    return SeoReport(products=products, blog_posts=posts, sitemap_url_count=sitemap_url_count, overall_score=overall)
