"""
Admin SEO audit.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from celestial_crystals.seo.audit import SeoReport, seo_report
from celestial_crystals.seo.sitemap import sitemap_entries
from celestial_crystals.server.services.deps import RepoDep, require_admin

router = APIRouter(tags=["admin-seo"], dependencies=[Depends(require_admin)])


@router.get(
    "",
    response_model=SeoReport,
    summary="SEO Audit",
    description="Score every catalog crystal and published blog post on titles, descriptions and images.",
)
async def seo_audit(repos: RepoDep) -> SeoReport:
    posts = await repos.blog_posts.published()
    return seo_report(posts, len(sitemap_entries(posts)))
