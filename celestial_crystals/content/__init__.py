"""
Blog content generation.

Purpose:
- Keep the blog templates and the slug/excerpt/meta helpers.
- Generate article copy with a Pydantic AI agent, falling back to template
  content when no model is configured or the call fails.
- Store generated articles as drafts on a schedule (weekly crystal, monthly
  chakra, seasonal) or on demand.
"""

from .automation import BlogAutomation, monthly_chakra_for, weekly_crystal_for
from .generator import BlogCopy, BlogPostGenerator, GeneratedPost, template_content
from .templates import (
    BLOG_TEMPLATES,
    CHAKRAS,
    BlogTemplate,
    chakra_color,
    chakra_element,
    generate_excerpt,
    generate_meta_description,
    generate_slug,
    reading_time,
    replace_variables,
    season_for_month,
    seasonal_energy,
)

__all__ = [
    "BLOG_TEMPLATES",
    "CHAKRAS",
    "BlogAutomation",
    "BlogCopy",
    "BlogPostGenerator",
    "BlogTemplate",
    "GeneratedPost",
    "chakra_color",
    "chakra_element",
    "generate_excerpt",
    "generate_meta_description",
    "generate_slug",
    "monthly_chakra_for",
    "reading_time",
    "replace_variables",
    "season_for_month",
    "seasonal_energy",
    "template_content",
    "weekly_crystal_for",
]
