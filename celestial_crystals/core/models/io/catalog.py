"""Catalog I/O models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from celestial_crystals.catalog.data import CatalogCrystal


class CrystalDetail(BaseModel):
    """A catalog crystal with its live stock level."""

    crystal: CatalogCrystal
    stock_quantity: Optional[int] = Field(default=None, description="Units in stock; null before the catalog is synced")
    in_stock: bool = True
    related: List[CatalogCrystal] = Field(default_factory=list, description="Other crystals in the same category")
