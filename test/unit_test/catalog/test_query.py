import pytest

from celestial_crystals.catalog.data import CRYSTAL_CATALOG, get_crystal
from celestial_crystals.catalog.query import (
    CatalogQuery,
    all_categories,
    catalog_options,
    crystals_by_category,
    crystals_by_chakra,
    crystals_by_price_range,
    query_catalog,
    search_crystals,
)


class TestCatalogLookups:
    def test_get_crystal_by_id(self):
        crystal = get_crystal("tiger-eye-1")
        assert crystal is not None
        assert crystal.category == "Protection"
        assert crystal.short_name == crystal.name.replace(" Bracelet", "")

    def test_unknown_crystal_is_none(self):
        assert get_crystal("does-not-exist") is None

    def test_catalog_ids_are_unique(self):
        ids = [crystal.id for crystal in CRYSTAL_CATALOG]
        assert len(ids) == len(set(ids))

    def test_crystals_by_category(self):
        protection = crystals_by_category("Protection")
        assert {c.id for c in protection} >= {"triple-protection-1", "tiger-eye-1"}
        assert all(c.category == "Protection" for c in protection)

    def test_crystals_by_chakra_includes_all_chakra_stones(self):
        heart = crystals_by_chakra("Heart")
        assert any(c.chakra == "All Chakras" for c in heart)
        assert all(c.chakra in ("Heart", "All Chakras") for c in heart)

    def test_price_range_is_inclusive(self):
        result = crystals_by_price_range(25, 28)
        assert all(25 <= c.price <= 28 for c in result)
        assert "howlite-1" in {c.id for c in result}

    def test_search_is_case_insensitive(self):
        assert [c.id for c in search_crystals("TIGER")] == ["triple-protection-1", "tiger-eye-1"]

    def test_blank_search_returns_everything(self):
        assert len(search_crystals("   ")) == len(CRYSTAL_CATALOG)

    def test_categories_are_sorted_and_unique(self):
        categories = all_categories()
        assert categories == sorted(set(categories))


class TestQueryCatalog:
    def test_no_filters_returns_whole_catalog(self):
        page = query_catalog(CatalogQuery())
        assert page.total == len(CRYSTAL_CATALOG)
        assert len(page.crystals) == len(CRYSTAL_CATALOG)

    def test_category_all_means_no_filter(self):
        assert query_catalog(CatalogQuery(category="All")).total == len(CRYSTAL_CATALOG)

    def test_filters_combine(self):
        page = query_catalog(CatalogQuery(category="Protection", max_price=33))
        assert [c.id for c in page.crystals] == ["tiger-eye-1"]

    def test_zodiac_filter(self):
        page = query_catalog(CatalogQuery(zodiac="Scorpio"))
        assert page.total > 0
        assert all("Scorpio" in c.zodiac_signs for c in page.crystals)

    def test_sort_price_low(self):
        prices = [c.price for c in query_catalog(CatalogQuery(sort_by="price-low")).crystals]
        assert prices == sorted(prices)

    def test_sort_price_high(self):
        prices = [c.price for c in query_catalog(CatalogQuery(sort_by="price-high")).crystals]
        assert prices == sorted(prices, reverse=True)

    def test_sort_rarity_puts_rarest_first(self):
        ranks = [c.rarity.rank for c in query_catalog(CatalogQuery(sort_by="rarity")).crystals]
        assert ranks == sorted(ranks, reverse=True)

    def test_unknown_sort_keeps_catalog_order(self):
        page = query_catalog(CatalogQuery(sort_by="featured"))
        assert [c.id for c in page.crystals] == [c.id for c in CRYSTAL_CATALOG]

    def test_paging_reports_total_before_paging(self):
        page = query_catalog(CatalogQuery(sort_by="featured", limit=5, offset=5))
        assert page.total == len(CRYSTAL_CATALOG)
        assert [c.id for c in page.crystals] == [c.id for c in CRYSTAL_CATALOG[5:10]]

    def test_default_sort_is_by_name(self):
        names = [c.name for c in query_catalog(CatalogQuery()).crystals]
        assert names == sorted(names)

    @pytest.mark.parametrize("field", ["category", "rarity", "chakra"])
    def test_all_means_no_filter(self, field):
        assert query_catalog(CatalogQuery(**{field: "All"})).total == len(CRYSTAL_CATALOG)

    def test_rarity_filter(self):
        page = query_catalog(CatalogQuery(rarity="Rare"))
        assert page.total > 0
        assert all(c.rarity.value == "Rare" for c in page.crystals)

    def test_chakra_filter_includes_all_chakra_crystals(self):
        ids = [c.id for c in query_catalog(CatalogQuery(chakra="Heart")).crystals]
        assert "lava-7-chakra-1" in ids
        assert all(get_crystal(i).chakra in ("Heart", "All Chakras") for i in ids)
        assert len(ids) == len(crystals_by_chakra("Heart"))

    def test_options(self):
        options = catalog_options()
        assert options["rarities"] == ["Common", "Uncommon", "Rare", "Very Rare"]
        assert options["price_range"]["min"] <= options["price_range"]["max"]
        assert {o["value"] for o in options["sort_options"]} == {"featured", "price-low", "price-high", "name", "rarity"}
