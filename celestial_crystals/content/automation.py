"""
Scheduled and on-demand blog post drafts.

``BlogAutomation`` picks the subject of a post (this week's crystal, this
month's chakra, the current season), generates the article and stores it as a
draft for an editor to review and publish.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from celestial_crystals.catalog.data import CRYSTAL_CATALOG, CatalogCrystal, get_crystal
from celestial_crystals.core.database.entities.blog_posts import BlogPost
from celestial_crystals.core.database.repositories.blog_posts import BlogPostRepository
from celestial_crystals.core.errors import ContentTemplateNotFoundError, CrystalNotFoundError
from celestial_crystals.core.logging_config import get_logger
from celestial_crystals.core.models.domain.enums import BlogPostStatus

from .generator import BlogPostGenerator, GeneratedPost
from .templates import BLOG_TEMPLATES, CHAKRAS, chakra_color, chakra_element, season_for_month, seasonal_energy

logger = get_logger(__name__)

_EPOCH = date(1970, 1, 1)
DEFAULT_CRYSTAL_IMAGE = "/blog/crystal-default.jpg"

TEMPLATE_CATEGORIES: Dict[str, str] = {
    "crystalGuide": "Crystal Guides",
    "chakraGuide": "Chakra Healing",
    "birthstoneGuide": "Birthstone Guides",
    "howToGuide": "How-To Guides",
    "seasonalGuide": "Seasonal Healing",
}


def weekly_crystal_for(today: date) -> CatalogCrystal:
    week_number = (today.toordinal() - _EPOCH.toordinal()) // 7
    return CRYSTAL_CATALOG[week_number % len(CRYSTAL_CATALOG)]


def monthly_chakra_for(today: date) -> str:
    return CHAKRAS[(today.month - 1) % len(CHAKRAS)]


def crystal_variables(crystal: CatalogCrystal) -> Dict[str, str]:
    return {
        "crystal": crystal.short_name,
        "benefit": crystal.properties[0] if crystal.properties else "healing",
        "chakra": crystal.chakra,
        "color": crystal.colors[0] if crystal.colors else "natural",
    }


class BlogAutomation:
    """Create draft blog posts.

    Args:
        session: Database session the drafts are written with.
        generator: Article generator (template-only or model-backed).
        author: Author name stored on every draft.
    """

    def __init__(self, session: AsyncSession, generator: BlogPostGenerator, author: str = "CELESTIAL Team") -> None:
        self.session = session
        self.generator = generator
        self.author = author
        self.posts = BlogPostRepository(session)

    async def _unique_slug(self, slug: str) -> str:
        candidate = slug
        suffix = 2
        while await self.posts.slug_exists(candidate):
            candidate = f"{slug}-{suffix}"
            suffix += 1
        return candidate

    async def save_draft(
        self,
        generated: GeneratedPost,
        *,
        category: str,
        tags: List[str],
        featured_image: Optional[str],
        crystal_id: Optional[str] = None,
    ) -> BlogPost:
        post = BlogPost(
            title=generated.title,
            slug=await self._unique_slug(generated.slug),
            content=generated.content,
            excerpt=generated.excerpt,
            meta_description=generated.meta_description,
            category=category,
            featured_image=featured_image,
            crystal_id=crystal_id,
            author=self.author,
            status=BlogPostStatus.draft.value,
            is_ai_generated=True,
            reading_time=generated.reading_time,
        )
        post.set_keywords_list(generated.keywords)
        post.set_tags_list(tags)
        saved = await self.posts.create(post)
        logger.info(f"Saved draft blog post '{saved.title}' ({saved.slug})")
        return saved

    async def crystal_post(self, crystal_id: str) -> BlogPost:
        crystal = get_crystal(crystal_id)
        if crystal is None:
            raise CrystalNotFoundError(crystal_id)
        generated = await self.generator.generate("crystalGuide", crystal_variables(crystal))
        return await self.save_draft(
            generated,
            category=TEMPLATE_CATEGORIES["crystalGuide"],
            tags=["crystal healing", crystal.short_name.lower(), crystal.category.lower()],
            featured_image=crystal.image or DEFAULT_CRYSTAL_IMAGE,
            crystal_id=crystal.id,
        )

    async def weekly_crystal_post(self, today: Optional[date] = None) -> BlogPost:
        """Draft the crystal guide for the crystal of the week."""
        crystal = weekly_crystal_for(today or date.today())
        return await self.crystal_post(crystal.id)

    async def monthly_chakra_post(self, today: Optional[date] = None) -> BlogPost:
        chakra = monthly_chakra_for(today or date.today())
        generated = await self.generator.generate(
            "chakraGuide",
            {"chakra": chakra, "color": chakra_color(chakra), "element": chakra_element(chakra)},
        )
        return await self.save_draft(
            generated,
            category=TEMPLATE_CATEGORIES["chakraGuide"],
            tags=["chakra healing", chakra.lower(), "energy healing"],
            featured_image=f"/blog/chakra-{chakra.lower().replace(' ', '-')}.jpg",
        )

    async def seasonal_post(self, today: Optional[date] = None) -> BlogPost:
        today = today or date.today()
        season = season_for_month(today.month)
        generated = await self.generator.generate(
            "seasonalGuide",
            {"season": season, "month": today.strftime("%B"), "energy": seasonal_energy(season)},
        )
        return await self.save_draft(
            generated,
            category=TEMPLATE_CATEGORIES["seasonalGuide"],
            tags=["seasonal healing", season.lower(), "crystal rituals"],
            featured_image=f"/blog/season-{season.lower()}.jpg",
        )

    async def custom_post(self, template: str, variables: Mapping[str, str], crystal_id: Optional[str] = None) -> BlogPost:
        """Draft a post from any template with caller-supplied variables."""
        if template not in BLOG_TEMPLATES:
            raise ContentTemplateNotFoundError(f"Template {template} not found")
        values = dict(variables)
        crystal = get_crystal(crystal_id) if crystal_id else None
        if crystal_id and crystal is None:
            raise CrystalNotFoundError(crystal_id)
        if crystal is not None:
            values = {**crystal_variables(crystal), **values}

        generated = await self.generator.generate(template, values)
        tags = [value.lower() for value in values.values() if value][:3]
        return await self.save_draft(
            generated,
            category=TEMPLATE_CATEGORIES[template],
            tags=tags,
            featured_image=crystal.image if crystal else None,
            crystal_id=crystal.id if crystal else None,
        )
