"""
Birth-date crystal recommendations.

Crystals are matched on zodiac sign or birth month. When nothing matches, a
seasonal selection for the birth month is used instead.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence, Tuple

from .data import CRYSTAL_CATALOG, CatalogCrystal
from .zodiac import zodiac_sign_for

DEFAULT_RECOMMENDATION_LIMIT = 6

# month range -> (properties, category) used when nothing matches directly
_SEASONAL_FALLBACK: List[Tuple[range, Tuple[str, ...], str]] = [
    (range(3, 6), ("Growth", "Love"), "Love"),
    (range(6, 9), ("Energy", "Confidence"), "Energy"),
    (range(9, 12), ("Protection", "Grounding"), "Protection"),
]
_WINTER_FALLBACK: Tuple[Tuple[str, ...], str] = (("Spiritual Protection", "Calming"), "Spiritual Protection")


def _seasonal_rule(birth_month: int) -> Tuple[Tuple[str, ...], str]:
    for months, properties, category in _SEASONAL_FALLBACK:
        if birth_month in months:
            return properties, category
    return _WINTER_FALLBACK


def seasonal_crystals(birth_month: int, catalog: Sequence[CatalogCrystal] = CRYSTAL_CATALOG) -> List[CatalogCrystal]:
    properties, category = _seasonal_rule(birth_month)
    return [
        crystal
        for crystal in catalog
        if crystal.category == category or any(prop in crystal.properties for prop in properties)
    ]


def recommend_crystals(
    birth_date: Optional[date] = None,
    *,
    birth_month: Optional[int] = None,
    zodiac_sign: Optional[str] = None,
    limit: int = DEFAULT_RECOMMENDATION_LIMIT,
    catalog: Sequence[CatalogCrystal] = CRYSTAL_CATALOG,
) -> List[CatalogCrystal]:
    """
    Recommend crystals for a birth date, or a birth month plus zodiac sign.

    Args:
        birth_date: Full birth date; the sign and month are derived from it.
        birth_month: Month (1-12), used when ``birth_date`` is not given.
        zodiac_sign: Sign to match alongside ``birth_month``.
        limit: Maximum number of crystals returned.
        catalog: Crystals to choose from.

    Returns:
        Zodiac matches first, then birth-month matches, in catalog order.
    """
    if birth_date is not None:
        birth_month = birth_date.month
        zodiac_sign = zodiac_sign_for(birth_date)
    if birth_month is None or not 1 <= birth_month <= 12:
        raise ValueError("birth_month must be between 1 and 12")

    def matches_sign(crystal: CatalogCrystal) -> bool:
        return bool(zodiac_sign) and zodiac_sign in crystal.zodiac_signs

    matches = [c for c in catalog if matches_sign(c) or birth_month in c.birth_months]
    if matches:
        # sorted() is stable, so catalog order is kept within each group
        ranked = sorted(matches, key=lambda c: (not matches_sign(c), birth_month not in c.birth_months))
        return ranked[:limit]

    seasonal = seasonal_crystals(birth_month, catalog)
    if seasonal:
        return seasonal[:limit]
    return list(catalog[:limit])
