import pytest
from pydantic_ai.messages import ModelMessage, ModelResponse
from pydantic_ai.models.function import AgentInfo, FunctionModel
from pydantic_ai.models.test import TestModel

from celestial_crystals.content.generator import BlogPostGenerator, build_prompt, template_content
from celestial_crystals.core.errors import ContentTemplateNotFoundError

CRYSTAL_VARIABLES = {"crystal": "Howlite", "benefit": "Calming", "chakra": "Crown"}


class TestTemplateMode:
    async def test_generates_from_template(self):
        generator = BlogPostGenerator(None)
        post = await generator.generate("crystalGuide", CRYSTAL_VARIABLES)

        assert not generator.uses_model
        assert not post.used_llm
        assert post.title == "The Complete Guide to Howlite Crystal: Healing Properties & Benefits"
        assert post.slug == "the-complete-guide-to-howlite-crystal-healing-properties-benefits"
        assert "<h2>Chakra Connection: Howlite and the Crown Chakra</h2>" in post.content
        assert post.keywords[0] == "Howlite crystal"
        assert post.excerpt.endswith("...")
        assert "Healing Properties & Benefits" in post.excerpt
        assert post.reading_time >= 1
        assert "Howlite crystal" in post.meta_description

    async def test_unknown_template(self):
        with pytest.raises(ContentTemplateNotFoundError) as exc_info:
            await BlogPostGenerator(None).generate("poem", {})
        assert exc_info.value.status_code == 404

    async def test_none_variables_are_ignored(self):
        post = await BlogPostGenerator(None).generate("chakraGuide", {"chakra": "Heart", "color": None})
        assert post.title == "Best Crystals for Heart Chakra Healing: Complete Guide"


class TestModelMode:
    async def test_uses_model_copy(self):
        model = TestModel(
            custom_output_args={"content": "<h2>Intro</h2><p>Howlite calms the mind.</p>", "excerpt": "Meet howlite."}
        )
        generator = BlogPostGenerator(model)
        post = await generator.generate("crystalGuide", CRYSTAL_VARIABLES)

        assert generator.uses_model
        assert post.used_llm
        assert post.content.startswith("<h1>The Complete Guide to Howlite Crystal: Healing Properties &amp; Benefits</h1>")
        assert "Howlite calms the mind." in post.content
        assert post.excerpt == "Meet howlite."

    async def test_missing_excerpt_is_derived(self):
        model = TestModel(custom_output_args={"content": "<h2>Intro</h2><p>Howlite calms the mind.</p>"})
        post = await BlogPostGenerator(model).generate("crystalGuide", CRYSTAL_VARIABLES)
        assert post.excerpt == "Intro Howlite calms the mind...."

    async def test_model_failure_falls_back_to_template(self):
        def broken(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
            raise RuntimeError("provider down")

        post = await BlogPostGenerator(FunctionModel(broken)).generate("crystalGuide", CRYSTAL_VARIABLES)
        assert not post.used_llm
        assert "Cleansing Methods" in post.content


def test_build_prompt_lists_sections():
    prompt = build_prompt("Title", ["One", "Two"])
    assert "Title: Title" in prompt
    assert "Sections: One, Two" in prompt


def test_template_content_escapes_values():
    content = template_content("A <b> title", ["Intro"], {"crystal": "<Quartz>"})
    assert "<h1>A &lt;b&gt; title</h1>" in content
    assert "&lt;Quartz&gt;" in content
