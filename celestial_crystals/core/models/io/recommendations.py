"""Birth-date recommendation I/O models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from celestial_crystals.catalog.data import CatalogCrystal
from celestial_crystals.catalog.zodiac import ZodiacInfo


class RecommendationRequest(BaseModel):
    birth_date: Optional[str] = Field(default=None, description="Birth date as YYYY-MM-DD")
    limit: int = Field(default=6, ge=1, le=21)


class RecommendationResponse(BaseModel):
    birth_date: str
    zodiac_sign: str
    zodiac_info: ZodiacInfo
    birth_month: int
    crystals: List[CatalogCrystal]
