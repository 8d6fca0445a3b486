from datetime import date

import pytest

from celestial_crystals.catalog.data import CRYSTAL_CATALOG
from celestial_crystals.content.automation import (
    TEMPLATE_CATEGORIES,
    BlogAutomation,
    crystal_variables,
    monthly_chakra_for,
    weekly_crystal_for,
)
from celestial_crystals.content.generator import BlogPostGenerator
from celestial_crystals.core.errors import ContentTemplateNotFoundError, CrystalNotFoundError


@pytest.fixture
def automation(session):
    return BlogAutomation(session, BlogPostGenerator(None), author="Test Author")


class TestSubjects:
    def test_weekly_crystal_rotates(self):
        assert weekly_crystal_for(date(1970, 1, 1)).id == CRYSTAL_CATALOG[0].id
        assert weekly_crystal_for(date(1970, 1, 8)).id == CRYSTAL_CATALOG[1].id
        assert weekly_crystal_for(date(1970, 1, 7)).id == CRYSTAL_CATALOG[0].id

    def test_monthly_chakra(self):
        assert monthly_chakra_for(date(2026, 1, 15)) == "Root"
        assert monthly_chakra_for(date(2026, 7, 1)) == "Crown"
        assert monthly_chakra_for(date(2026, 8, 1)) == "Root"

    def test_crystal_variables_use_short_name(self):
        crystal = next(c for c in CRYSTAL_CATALOG if c.id == "howlite-1")
        variables = crystal_variables(crystal)
        assert variables["crystal"] == crystal.short_name
        assert variables["chakra"] == crystal.chakra


class TestDrafts:
    async def test_crystal_post_is_saved_as_draft(self, automation):
        post = await automation.crystal_post("howlite-1")
        assert post.id
        assert post.status == "draft"
        assert post.is_ai_generated
        assert post.author == "Test Author"
        assert post.crystal_id == "howlite-1"
        assert post.category == TEMPLATE_CATEGORIES["crystalGuide"]
        assert "crystal healing" in post.get_tags_list()
        assert post.get_keywords_list()

    async def test_duplicate_slugs_get_suffix(self, automation):
        first = await automation.crystal_post("howlite-1")
        second = await automation.crystal_post("howlite-1")
        third = await automation.crystal_post("howlite-1")
        assert second.slug == f"{first.slug}-2"
        assert third.slug == f"{first.slug}-3"

    async def test_unknown_crystal(self, automation):
        with pytest.raises(CrystalNotFoundError):
            await automation.crystal_post("nope-1")

    async def test_weekly_post(self, automation):
        post = await automation.weekly_crystal_post(today=date(1970, 1, 8))
        assert post.crystal_id == CRYSTAL_CATALOG[1].id

    async def test_monthly_chakra_post(self, automation):
        post = await automation.monthly_chakra_post(today=date(2026, 4, 2))
        assert "Heart Chakra" in post.title
        assert post.featured_image == "/blog/chakra-heart.jpg"
        assert post.crystal_id is None

    async def test_seasonal_post(self, automation):
        post = await automation.seasonal_post(today=date(2026, 10, 19))
        assert post.title.startswith("Fall Crystal Rituals")
        assert post.category == "Seasonal Healing"

    async def test_custom_post_with_crystal(self, automation):
        post = await automation.custom_post("howToGuide", {"action": "Meditate"}, crystal_id="tiger-eye-1")
        assert post.title.startswith("How to Meditate with Crystals")
        assert post.crystal_id == "tiger-eye-1"
        assert post.category == "How-To Guides"

    async def test_custom_post_unknown_template(self, automation):
        with pytest.raises(ContentTemplateNotFoundError):
            await automation.custom_post("limerick", {})
