"""Blog post generation.

``BlogPostGenerator`` fills a blog template and asks a language model for the
article body.

Modes
-----

- ``model=None``: deterministic template content. Used in tests and in
  deployments without an LLM key.
- ``model!=None``: a Pydantic AI agent returns ``BlogCopy`` (HTML body plus an
  optional excerpt). Any failure of the model call falls back to the template
  content, so an admin request always yields a draft.
"""

from __future__ import annotations

import html
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field
from pydantic_ai import Agent

from celestial_crystals.core.errors import ContentTemplateNotFoundError
from celestial_crystals.core.logging_config import get_logger
from celestial_crystals.core.monitoring import log_content_generated

from .templates import (
    BLOG_TEMPLATES,
    generate_excerpt,
    generate_meta_description,
    generate_slug,
    reading_time,
    replace_variables,
)

logger = get_logger(__name__)

SYSTEM_PROMPT = (
    "You are the content writer of CELESTIAL, an online crystal bracelet store. "
    "Write educational, spiritual and trustworthy articles in HTML using <h2>, <h3>, <p>, <ul> and <ol>. "
    "Never make medical claims."
)


class BlogCopy(BaseModel):
    """Structured article copy returned by the model."""

    content: str = Field(description="Article body as HTML, starting with the first <h2> section")
    excerpt: Optional[str] = Field(default=None, description="One or two sentence teaser, plain text")


class GeneratedPost(BaseModel):
    template: str
    title: str
    slug: str
    content: str
    excerpt: str
    keywords: List[str]
    meta_description: str
    reading_time: int
    used_llm: bool = False


def build_prompt(title: str, sections: List[str]) -> str:
    return (
        "Write a comprehensive, SEO-optimized blog post about crystal healing for a North American audience.\n\n"
        f"Title: {title}\n"
        f"Sections: {', '.join(sections)}\n"
        "Target Keywords: healing crystals, crystal bracelets, spiritual wellness\n"
        "Audience: North American crystal enthusiasts, wellness seekers\n"
        "Tone: Educational, spiritual, trustworthy\n"
        "Length: 1500-2000 words\n\n"
        "Include practical usage tips, safety considerations and a call-to-action to shop crystals."
    )


def template_content(title: str, sections: List[str], variables: Mapping[str, str]) -> str:
    """Render article HTML without a model: one ``<h2>`` per section."""
    esc = html.escape
    crystal = esc(variables.get("crystal") or "Crystal")
    benefit = esc(variables.get("benefit") or "healing")

    parts = [
        f"<h1>{esc(title)}</h1>",
        f"<p>Welcome to your complete guide to {crystal} crystal healing. In this article, we'll explore the "
        f"healing properties of {crystal} and how it can support your spiritual journey across North America.</p>",
    ]
    for section in sections:
        parts.append(f"<h2>{esc(section)}</h2>")
        parts.append(
            f"<p>{crystal} is treasured for its {benefit} properties. Wear it as a bracelet to keep its energy close, "
            "hold it during meditation, or place it in your living space to invite calm and positive energy.</p>"
        )
    parts.extend(
        [
            "<h3>Cleansing Methods:</h3>",
            "<ul>"
            "<li>Moonlight cleansing under the full moon</li>"
            "<li>Sage or palo santo smoke cleansing</li>"
            "<li>Sound cleansing with singing bowls</li>"
            "<li>Running water cleansing (if safe for the crystal)</li>"
            "</ul>",
            f'<p>Ready to experience the healing power of {crystal}? <a href="/crystals">Browse our collection</a> of '
            "authentic crystal bracelets, carefully sourced and energetically cleansed.</p>",
            "<p><strong>Free shipping across North America on orders over $50!</strong></p>",
            "<p><em>Disclaimer: Crystal healing is a complementary practice and should not replace professional "
            "medical advice. Always consult healthcare providers for medical concerns.</em></p>",
        ]
    )
    return "\n".join(parts)


class BlogPostGenerator:
    """Generate blog posts from templates, with an optional language model.

    Args:
        model: A Pydantic AI model or model name (e.g. ``"openai:gpt-4o"``).
            ``None`` keeps generation deterministic.
    """

    def __init__(self, model: Any | None = None) -> None:
        self._model = model

    @property
    def uses_model(self) -> bool:
        return self._model is not None

    async def _write_copy(self, title: str, sections: List[str]) -> Optional[BlogCopy]:
        if self._model is None:
            return None
        try:
            agent: Agent = Agent(self._model, output_type=BlogCopy, system_prompt=SYSTEM_PROMPT)
            result = await agent.run(build_prompt(title, sections))
        except Exception as e:
            logger.warning(f"Blog copy generation failed, using template content: {e}", exc_info=True)
            return None
        return result.output

    async def generate(self, template: str, variables: Mapping[str, str]) -> GeneratedPost:
        """Generate a post from a named template.

        Raises:
            ContentTemplateNotFoundError: If ``template`` is not a known template name.
        """
        blog_template = BLOG_TEMPLATES.get(template)
        if blog_template is None:
            raise ContentTemplateNotFoundError(f"Template {template} not found")

        values: Dict[str, str] = {k: str(v) for k, v in variables.items() if v is not None}
        title = replace_variables(blog_template.title, values)
        keywords = [replace_variables(k, values) for k in blog_template.keywords]
        sections = [replace_variables(s, values) for s in blog_template.sections]

        copy = await self._write_copy(title, sections)
        used_llm = copy is not None and bool(copy.content.strip())
        if used_llm:
            content = f"<h1>{html.escape(title)}</h1>\n{copy.content}"
            excerpt = copy.excerpt or generate_excerpt(copy.content)
        else:
            content = template_content(title, sections, values)
            excerpt = generate_excerpt(content)

        log_content_generated(template=template, used_llm=used_llm)
        logger.info(f"Generated blog post '{title}' from {template} (llm={used_llm})")
        return GeneratedPost(
            template=template,
            title=title,
            slug=generate_slug(title),
            content=content,
            excerpt=excerpt,
            keywords=keywords,
            meta_description=generate_meta_description(title, values),
            reading_time=reading_time(content),
            used_llm=used_llm,
        )
