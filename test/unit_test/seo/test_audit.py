from celestial_crystals.catalog.data import CRYSTAL_CATALOG, get_crystal
from celestial_crystals.core.database.entities.blog_posts import BlogPost
from celestial_crystals.seo.audit import audit_blog_post, audit_product, seo_report


def test_product_audit_flags_missing_images():
    crystal = get_crystal("howlite-1").model_copy(update={"image": None, "images": []})
    report = audit_product(crystal)
    assert "Main image is missing" in report.issues
    assert report.score < 100


def test_product_audit_flags_long_title():
    crystal = get_crystal("howlite-1").model_copy(update={"name": "x" * 80})
    report = audit_product(crystal)
    assert "Title is too long (80 > 70 characters)" in report.issues


def test_blog_post_audit():
    post = BlogPost(id="p1", title="Draft", slug="draft", content="<p>x</p>")
    report = audit_blog_post(post)
    assert report.id == "p1"
    assert report.score == 0
    assert report.issues == [
        "Meta description is missing",
        "Keywords are missing",
        "Featured image is missing",
        "Excerpt is missing",
    ]

    post.meta_description = "A" * 60
    post.set_keywords_list(["moon"])
    post.featured_image = "/blog/moon.jpg"
    post.excerpt = "Moon"
    assert audit_blog_post(post).score == 100


def test_report_averages_scores():
    post = BlogPost(id="p1", title="Draft", slug="draft", content="<p>x</p>")
    report = seo_report([post], sitemap_url_count=33)
    assert len(report.products) == len(CRYSTAL_CATALOG)
    assert report.sitemap_url_count == 33
    scores = [item.score for item in [*report.products, *report.blog_posts]]
    assert report.overall_score == round(sum(scores) / len(scores))


def test_empty_report():
    assert seo_report([], 0, catalog=[]).overall_score == 100
