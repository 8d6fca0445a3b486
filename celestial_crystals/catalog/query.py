"""
Catalog filtering, search and listing.

The listing API and the server-rendered pages share ``query_catalog`` so both
apply the same filter order, sort keys and paging.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from celestial_crystals.core.models.domain.enums import Rarity

from .data import CRYSTAL_CATALOG, CatalogCrystal

ALL_CHAKRAS = "All Chakras"
ALL = "All"
DEFAULT_SORT = "name"

SORT_OPTIONS: List[Dict[str, str]] = [
    {"value": "featured", "label": "Featured"},
    {"value": "price-low", "label": "Price: Low to High"},
    {"value": "price-high", "label": "Price: High to Low"},
    {"value": "name", "label": "Name: A to Z"},
    {"value": "rarity", "label": "Rarity"},
]


class CatalogQuery(BaseModel):
    """Filters accepted by the crystal listing."""

    category: Optional[str] = None
    search: Optional[str] = None
    rarity: Optional[str] = None
    min_price: Optional[float] = Field(default=None, ge=0)
    max_price: Optional[float] = Field(default=None, ge=0)
    chakra: Optional[str] = None
    zodiac: Optional[str] = None
    sort_by: Optional[str] = None
    limit: Optional[int] = Field(default=None, ge=1)
    offset: int = Field(default=0, ge=0)


class CatalogPage(BaseModel):
    crystals: List[CatalogCrystal]
    total: int
    offset: int
    limit: Optional[int] = None


def crystals_by_category(category: str, catalog: Sequence[CatalogCrystal] = CRYSTAL_CATALOG) -> List[CatalogCrystal]:
    return [crystal for crystal in catalog if crystal.category == category]


def crystals_by_chakra(chakra: str, catalog: Sequence[CatalogCrystal] = CRYSTAL_CATALOG) -> List[CatalogCrystal]:
    """Crystals for a chakra, including the ones that balance all chakras."""
    return [crystal for crystal in catalog if crystal.chakra in (chakra, ALL_CHAKRAS)]


def crystals_by_price_range(
    min_price: float, max_price: float, catalog: Sequence[CatalogCrystal] = CRYSTAL_CATALOG
) -> List[CatalogCrystal]:
    return [crystal for crystal in catalog if min_price <= crystal.price <= max_price]


def search_crystals(query: str, catalog: Sequence[CatalogCrystal] = CRYSTAL_CATALOG) -> List[CatalogCrystal]:
    """
    Case-insensitive substring search.

    Matches the name, description, category, any healing property or any
    color of a crystal.
    """
    needle = query.strip().lower()
    if not needle:
        return list(catalog)
    results = []
    for crystal in catalog:
        haystack = [crystal.name, crystal.description, crystal.category, *crystal.properties, *crystal.colors]
        if any(needle in value.lower() for value in haystack):
            results.append(crystal)
    return results


def all_categories(catalog: Sequence[CatalogCrystal] = CRYSTAL_CATALOG) -> List[str]:
    return sorted({crystal.category for crystal in catalog})


def all_chakras(catalog: Sequence[CatalogCrystal] = CRYSTAL_CATALOG) -> List[str]:
    return sorted({crystal.chakra for crystal in catalog})


def _matches_search(crystal: CatalogCrystal, needle: str) -> bool:
    if needle in crystal.name.lower() or needle in crystal.description.lower():
        return True
    return any(needle in prop.lower() for prop in crystal.properties)


def _sort(crystals: List[CatalogCrystal], sort_by: Optional[str]) -> List[CatalogCrystal]:
    sort_by = sort_by or DEFAULT_SORT
    if sort_by == "price-low":
        return sorted(crystals, key=lambda c: c.price)
    if sort_by == "price-high":
        return sorted(crystals, key=lambda c: c.price, reverse=True)
    if sort_by == "name":
        return sorted(crystals, key=lambda c: c.name)
    if sort_by == "rarity":
        return sorted(crystals, key=lambda c: c.rarity.rank, reverse=True)
    return crystals


def query_catalog(query: CatalogQuery, catalog: Sequence[CatalogCrystal] = CRYSTAL_CATALOG) -> CatalogPage:
    """
    Filter, sort and page the catalog.

    Filters apply in this order: category, search, rarity, price bounds,
    chakra, zodiac sign. `All` for category, rarity or chakra means no
    filter, and crystals for all chakras match any chakra. Without
    ``sort_by`` the listing is sorted by name; `featured` keeps catalog
    order. ``total`` counts the matches before paging.
    """
    results: List[CatalogCrystal] = list(catalog)

    if query.category and query.category != ALL:
        results = [c for c in results if c.category == query.category]

    if query.search:
        needle = query.search.strip().lower()
        if needle:
            results = [c for c in results if _matches_search(c, needle)]

    if query.rarity and query.rarity != ALL:
        results = [c for c in results if c.rarity.value == query.rarity]

    if query.min_price is not None:
        results = [c for c in results if c.price >= query.min_price]
    if query.max_price is not None:
        results = [c for c in results if c.price <= query.max_price]

    if query.chakra and query.chakra != ALL:
        results = [c for c in results if c.chakra in (query.chakra, ALL_CHAKRAS)]

    if query.zodiac:
        results = [c for c in results if query.zodiac in c.zodiac_signs]

    results = _sort(results, query.sort_by)
    total = len(results)

    end = query.offset + query.limit if query.limit is not None else None
    return CatalogPage(crystals=results[query.offset : end], total=total, offset=query.offset, limit=query.limit)


def catalog_options(catalog: Sequence[CatalogCrystal] = CRYSTAL_CATALOG) -> Dict[str, object]:
    """Values the storefront offers as listing filters."""
    prices = [crystal.price for crystal in catalog]
    return {
        "categories": all_categories(catalog),
        "chakras": all_chakras(catalog),
        "rarities": [rarity.value for rarity in Rarity],
        "price_range": {"min": min(prices) if prices else 0.0, "max": max(prices) if prices else 0.0},
        "sort_options": SORT_OPTIONS,
    }
