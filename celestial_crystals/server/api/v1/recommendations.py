"""
Birth-date crystal recommendations and zodiac reference data.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from celestial_crystals.catalog.recommendations import recommend_crystals
from celestial_crystals.catalog.zodiac import ZODIAC_INFO, ZODIAC_SIGNS, ZodiacInfo, zodiac_sign_for
from celestial_crystals.core.logging_config import get_logger
from celestial_crystals.core.models.io.recommendations import RecommendationRequest, RecommendationResponse

logger = get_logger(__name__)

router = APIRouter(tags=["recommendations"])


def parse_birth_date(raw: Optional[str]) -> date:
    """Parse a ``YYYY-MM-DD`` birth date or raise a 400."""
    if not raw or not raw.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Birth date is required")
    try:
        return date.fromisoformat(raw.strip())
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid birth date format. Use YYYY-MM-DD"
        )


def build_recommendations(birth_date: date, limit: int) -> RecommendationResponse:
    sign = zodiac_sign_for(birth_date)
    crystals = recommend_crystals(birth_date, limit=limit)
    logger.debug(f"Recommended {len(crystals)} crystals for {sign} born in month {birth_date.month}")
    return RecommendationResponse(
        birth_date=birth_date.isoformat(),
        zodiac_sign=sign,
        zodiac_info=ZODIAC_INFO[sign],
        birth_month=birth_date.month,
        crystals=crystals,
    )


@router.post(
    "/recommendations",
    response_model=RecommendationResponse,
    summary="Recommend Crystals",
    description="Recommend crystals for a birth date by zodiac sign and birth month.",
    response_description="The zodiac sign, its details and the recommended crystals.",
    responses={400: {"description": "Missing or invalid birth date"}},
)
async def recommend(body: RecommendationRequest) -> RecommendationResponse:
    """
    Recommend crystals for a birth date.

    Zodiac matches come first, then birth-month matches. Without any match a
    seasonal selection is returned.

    - **birth_date**: `YYYY-MM-DD`.
    - **limit**: Maximum number of crystals (default 6).
    """
    return build_recommendations(parse_birth_date(body.birth_date), body.limit)


@router.get(
    "/recommendations",
    response_model=RecommendationResponse,
    summary="Recommend Crystals (query)",
    description="Same as the POST variant, with the birth date in the query string.",
    responses={400: {"description": "Missing or invalid birth date"}},
)
async def recommend_by_query(
    birth_date: Optional[str] = None,
    limit: int = Query(default=6, ge=1, le=21),
) -> RecommendationResponse:
    return build_recommendations(parse_birth_date(birth_date), limit)


@router.get(
    "/zodiac",
    response_model=List[ZodiacInfo],
    summary="List Zodiac Signs",
    description="All twelve zodiac signs with element, traits and date range.",
)
async def list_zodiac_signs() -> List[ZodiacInfo]:
    return [ZODIAC_INFO[sign] for sign in ZODIAC_SIGNS]
