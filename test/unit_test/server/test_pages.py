from xml.etree import ElementTree

import pytest
from httpx import AsyncClient

from celestial_crystals.catalog.data import CRYSTAL_CATALOG
from celestial_crystals.core.database.entities.blog_posts import BlogPost

pytestmark = pytest.mark.asyncio

SITEMAP_NS = {"sm": "http://www.sitemaps.org/schemas/sitemap/0.9"}


async def test_home(client: AsyncClient):
    response = await client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Natural Crystal Bracelets | CELESTIAL" in response.text
    assert '"@type": "Organization"' in response.text


async def test_crystal_listing_filters(client: AsyncClient):
    response = await client.get("/crystals", params={"search": "howlite"})
    assert response.status_code == 200
    assert "Howlite Bracelet" in response.text


async def test_crystal_detail_page(client: AsyncClient, synced_catalog):
    response = await client.get("/crystals/howlite-1")
    assert response.status_code == 200
    assert "<h1>Howlite Bracelet</h1>" in response.text
    assert "In stock" in response.text
    assert "application/ld+json" in response.text


async def test_unknown_crystal_page(client: AsyncClient):
    response = await client.get("/crystals/nope")
    assert response.status_code == 404
    assert "nope" in response.text


async def test_category_pages(client: AsyncClient):
    assert (await client.get("/categories")).status_code == 200
    response = await client.get("/categories/Communication")
    assert response.status_code == 200
    assert (await client.get("/categories/Nothing")).status_code == 404


async def test_birthdate_guide(client: AsyncClient):
    response = await client.get("/birthdate-guide", params={"birth_date": "1990-05-15"})
    assert response.status_code == 200
    assert "<h2>Taurus</h2>" in response.text


async def test_birthdate_guide_error(client: AsyncClient):
    response = await client.get("/birthdate-guide", params={"birth_date": "someday"})
    assert response.status_code == 200
    assert "Invalid birth date format. Use YYYY-MM-DD" in response.text


async def test_blog_pages(client: AsyncClient, session):
    session.add(BlogPost(title="Full Moon Rituals", slug="full-moon", content="<p>Cleanse</p>", status="published"))
    session.add(BlogPost(title="Secret Draft", slug="secret", content="<p>x</p>"))
    await session.commit()

    index = await client.get("/blog")
    assert "Full Moon Rituals" in index.text
    assert "Secret Draft" not in index.text

    post = await client.get("/blog/full-moon")
    assert post.status_code == 200
    assert "<p>Cleanse</p>" in post.text
    assert (await client.get("/blog/secret")).status_code == 404


async def test_sitemap(client: AsyncClient, session, app_settings):
    session.add(BlogPost(title="Live", slug="live", content="<p>x</p>", status="published"))
    await session.commit()

    response = await client.get("/sitemap.xml")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/xml")
    root = ElementTree.fromstring(response.text)
    locs = [loc.text for loc in root.findall("sm:url/sm:loc", SITEMAP_NS)]
    base = app_settings.site_url.rstrip("/")
    assert f"{base}/crystals/howlite-1" in locs
    assert f"{base}/blog/live" in locs
    assert len([loc for loc in locs if "/crystals/" in loc]) == len(CRYSTAL_CATALOG)


async def test_robots(client: AsyncClient, app_settings):
    response = await client.get("/robots.txt")
    assert response.status_code == 200
    assert "Disallow: /api/" in response.text
    assert f"Sitemap: {app_settings.site_url.rstrip('/')}/sitemap.xml" in response.text
