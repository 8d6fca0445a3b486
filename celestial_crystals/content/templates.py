"""
Blog post templates and text helpers.

Templates carry a title, SEO keywords and section headings with ``{name}``
placeholders. The helpers turn generated HTML into the slug, excerpt, meta
description and reading time stored with a post.
"""

from __future__ import annotations

import html as html_lib
import math
import re
from typing import Dict, List, Mapping

from pydantic import BaseModel, ConfigDict


class BlogTemplate(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    keywords: List[str]
    sections: List[str]


BLOG_TEMPLATES: Dict[str, BlogTemplate] = {
    "crystalGuide": BlogTemplate(
        title="The Complete Guide to {crystal} Crystal: Healing Properties & Benefits",
        keywords=["{crystal} crystal", "healing properties", "{crystal} benefits", "crystal healing", "spiritual stones"],
        sections=[
            "Introduction to {crystal}",
            "Healing Properties of {crystal}",
            "How to Use {crystal} for {benefit}",
            "Chakra Connection: {crystal} and the {chakra} Chakra",
            "Caring for Your {crystal} Crystal",
            "Where to Buy Authentic {crystal} Crystals",
        ],
    ),
    "chakraGuide": BlogTemplate(
        title="Best Crystals for {chakra} Chakra Healing: Complete Guide",
        keywords=["{chakra} chakra", "chakra healing", "chakra crystals", "spiritual healing", "energy healing"],
        sections=[
            "Understanding the {chakra} Chakra",
            "Signs of {chakra} Chakra Imbalance",
            "Top 5 Crystals for {chakra} Chakra Healing",
            "How to Use {chakra} Chakra Crystals",
            "Meditation Techniques with {chakra} Crystals",
            "Shop {chakra} Chakra Crystal Bracelets",
        ],
    ),
    "birthstoneGuide": BlogTemplate(
        title="{month} Birthstone Guide: Perfect Crystals for {zodiac} Season",
        keywords=["{month} birthstone", "{zodiac} crystals", "birthstone jewelry", "zodiac healing", "astrological crystals"],
        sections=[
            "{month} Birthstone Overview",
            "Traditional vs Modern {month} Birthstones",
            "Healing Properties for {zodiac} Signs",
            "How to Choose Your Perfect {month} Crystal",
            "Styling {month} Birthstone Jewelry",
            "Shop {month} Birthstone Collection",
        ],
    ),
    "howToGuide": BlogTemplate(
        title="How to {action} with Crystals: Beginner's Guide to Crystal Healing",
        keywords=["crystal healing", "how to use crystals", "{action} crystals", "crystal meditation", "spiritual healing"],
        sections=[
            "Getting Started with Crystal {action}",
            "Best Crystals for {action}",
            "Step-by-Step {action} Process",
            "Common Mistakes to Avoid",
            "Advanced {action} Techniques",
            "Recommended Crystal Sets for {action}",
        ],
    ),
    "seasonalGuide": BlogTemplate(
        title="{season} Crystal Rituals: Seasonal Healing & Energy Alignment",
        keywords=["{season} crystals", "seasonal healing", "{season} rituals", "crystal energy", "seasonal wellness"],
        sections=[
            "Understanding {season} Energy",
            "Best Crystals for {season} Season",
            "{season} Crystal Cleansing Rituals",
            "Creating Your {season} Crystal Altar",
            "{season} Meditation Practices",
            "Shop {season} Crystal Collections",
        ],
    ),
}

CHAKRAS: List[str] = ["Root", "Sacral", "Solar Plexus", "Heart", "Throat", "Third Eye", "Crown"]

_CHAKRA_COLORS = {
    "Root": "red",
    "Sacral": "orange",
    "Solar Plexus": "yellow",
    "Heart": "green",
    "Throat": "blue",
    "Third Eye": "indigo",
    "Crown": "violet",
}

_CHAKRA_ELEMENTS = {
    "Root": "earth",
    "Sacral": "water",
    "Solar Plexus": "fire",
    "Heart": "air",
    "Throat": "sound",
    "Third Eye": "light",
    "Crown": "thought",
}

_SEASONAL_ENERGY = {
    "Spring": "renewal and growth",
    "Summer": "abundance and vitality",
    "Fall": "harvest and gratitude",
    "Winter": "reflection and rest",
}

EXCERPT_LENGTH = 160
WORDS_PER_MINUTE = 200
META_DESCRIPTION_MAX = 160

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")
_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


def replace_variables(text: str, variables: Mapping[str, str]) -> str:
    """Fill ``{name}`` placeholders; unknown or empty ones are left as is."""
    return _PLACEHOLDER_RE.sub(lambda m: variables.get(m.group(1)) or m.group(0), text)


def generate_slug(title: str) -> str:
    slug = title.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def strip_tags(html: str) -> str:
    """Plain text of an HTML fragment with entities decoded."""
    return _WHITESPACE_RE.sub(" ", html_lib.unescape(_TAG_RE.sub(" ", html))).strip()


def generate_excerpt(html: str) -> str:
    return strip_tags(html)[:EXCERPT_LENGTH] + "..."


def generate_meta_description(title: str, variables: Mapping[str, str]) -> str:
    """Search snippet for a generated post, cut at a word to fit the audit limit."""
    crystal = variables.get("crystal") or "crystals"
    text = (
        f"Discover the healing properties of {crystal} crystal. Complete guide to crystal healing, benefits, "
        "and usage. Shop authentic crystal bracelets with free shipping across North America."
    )
    if len(text) <= META_DESCRIPTION_MAX:
        return text
    return text[: META_DESCRIPTION_MAX - 3].rsplit(" ", 1)[0].rstrip(",.") + "..."


def reading_time(content: str) -> int:
    """Minutes to read the text of ``content``, at least one."""
    words = len(strip_tags(content).split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def chakra_color(chakra: str) -> str:
    return _CHAKRA_COLORS.get(chakra, "white")


def chakra_element(chakra: str) -> str:
    return _CHAKRA_ELEMENTS.get(chakra, "universal")


def seasonal_energy(season: str) -> str:
    return _SEASONAL_ENERGY.get(season, "balance")


def season_for_month(month: int) -> str:
    if 3 <= month <= 5:
        return "Spring"
    if 6 <= month <= 8:
        return "Summer"
    if 9 <= month <= 11:
        return "Fall"
    return "Winter"
