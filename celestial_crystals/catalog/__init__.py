"""
Static crystal catalog.

Purpose:
- Hold the store's crystal bracelets as immutable ``CatalogCrystal`` models.
- Provide listing, filtering and search used by the API and the HTML pages.
- Map birth dates to zodiac signs and recommended crystals.
"""

from .data import CRYSTAL_CATALOG, CatalogCrystal, ChakraStone, LavaStoneProperties, get_crystal
from .query import (
    SORT_OPTIONS,
    CatalogPage,
    CatalogQuery,
    all_categories,
    all_chakras,
    catalog_options,
    crystals_by_category,
    crystals_by_chakra,
    crystals_by_price_range,
    query_catalog,
    search_crystals,
)
from .recommendations import recommend_crystals, seasonal_crystals
from .zodiac import ZODIAC_INFO, ZODIAC_SIGNS, ZodiacInfo, zodiac_sign_for

__all__ = [
    "CRYSTAL_CATALOG",
    "CatalogCrystal",
    "CatalogPage",
    "CatalogQuery",
    "ChakraStone",
    "LavaStoneProperties",
    "SORT_OPTIONS",
    "ZODIAC_INFO",
    "ZODIAC_SIGNS",
    "ZodiacInfo",
    "all_categories",
    "all_chakras",
    "catalog_options",
    "crystals_by_category",
    "crystals_by_chakra",
    "crystals_by_price_range",
    "get_crystal",
    "query_catalog",
    "recommend_crystals",
    "search_crystals",
    "seasonal_crystals",
    "zodiac_sign_for",
]
