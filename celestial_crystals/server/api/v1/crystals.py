"""
Crystal catalog endpoints.

Listing, filter options and crystal detail over the static catalog. Stock
levels come from the database once the catalog has been synced.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, Query, status

from celestial_crystals.catalog.data import get_crystal
from celestial_crystals.catalog.query import CatalogPage, CatalogQuery, catalog_options, crystals_by_category, query_catalog
from celestial_crystals.core.logging_config import get_logger
from celestial_crystals.core.models.io.catalog import CrystalDetail
from celestial_crystals.server.services.deps import RepoDep

logger = get_logger(__name__)

router = APIRouter(tags=["crystals"])

RELATED_LIMIT = 4


@router.get(
    "",
    response_model=CatalogPage,
    summary="List Crystals",
    description="Filter, sort and page the crystal catalog.",
    response_description="A page of crystals and the total number of matches.",
)
async def list_crystals(
    category: Optional[str] = None,
    search: Optional[str] = None,
    rarity: Optional[str] = None,
    min_price: Optional[float] = Query(default=None, ge=0),
    max_price: Optional[float] = Query(default=None, ge=0),
    chakra: Optional[str] = None,
    zodiac: Optional[str] = None,
    sort_by: Optional[str] = Query(default=None, description="price-low, price-high, name or rarity"),
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> CatalogPage:
    """
    List crystals.

    Filters apply in this order: category, search, rarity, price range, chakra
    and zodiac sign. Sorting and paging follow.

    - **category**: Category name; `All` or empty means every category.
    - **search**: Case-insensitive text over name, description and properties.
    - **rarity**: Common, Uncommon, Rare or Very Rare; `All` or empty means every rarity.
    - **min_price** / **max_price**: Inclusive price bounds.
    - **chakra**: Chakra name; `All` means every chakra and crystals for all chakras always match.
    - **zodiac**: Zodiac sign.
    - **sort_by**: `price-low`, `price-high`, `name` (default) or `rarity`; `featured` keeps catalog order.
    """
    query = CatalogQuery(
        category=category,
        search=search,
        rarity=rarity,
        min_price=min_price,
        max_price=max_price,
        chakra=chakra,
        zodiac=zodiac,
        sort_by=sort_by,
        limit=limit,
        offset=offset,
    )
    return query_catalog(query)


@router.get(
    "/options",
    summary="Catalog Filter Options",
    description="Categories, chakras, rarities, price range and sort options for the catalog filters.",
    response_description="Filter option lists.",
)
async def list_catalog_options() -> Dict[str, Any]:
    return catalog_options()


@router.get(
    "/{crystal_id}",
    response_model=CrystalDetail,
    summary="Get Crystal",
    description="Retrieve a crystal with its stock level and related crystals.",
    response_description="The crystal detail.",
    responses={404: {"description": "Crystal not found"}},
)
async def get_crystal_detail(crystal_id: str, repos: RepoDep) -> CrystalDetail:
    """
    Get a crystal by catalog id.

    `stock_quantity` is null until the catalog has been synced into the database.
    """
    crystal = get_crystal(crystal_id)
    if crystal is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Crystal '{crystal_id}' not found")

    row = await repos.crystals.get_by_id(crystal_id)
    related = [c for c in crystals_by_category(crystal.category) if c.id != crystal.id][:RELATED_LIMIT]
    if row is None:
        return CrystalDetail(crystal=crystal, related=related)
    return CrystalDetail(
        crystal=crystal,
        stock_quantity=row.stock_quantity,
        in_stock=row.stock_quantity > 0 and row.is_active,
        related=related,
    )
