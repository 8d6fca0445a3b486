"""
Crystal review endpoints.

Reviews are listed publicly; posting requires the customer identity header.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError

from celestial_crystals.catalog.data import get_crystal
from celestial_crystals.core.database.entities.reviews import Review
from celestial_crystals.core.logging_config import get_logger
from celestial_crystals.core.models.io.common import Pagination, page_offset
from celestial_crystals.core.models.io.reviews import ReviewCreate, ReviewListResponse, ReviewRead, ReviewSummary
from celestial_crystals.server.services.deps import CurrentUserDep, RepoDep

logger = get_logger(__name__)

router = APIRouter(tags=["reviews"])


def _require_catalog_crystal(crystal_id: str) -> None:
    if get_crystal(crystal_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Crystal '{crystal_id}' not found")


@router.get(
    "/{crystal_id}/reviews",
    response_model=ReviewListResponse,
    summary="List Crystal Reviews",
    description="Approved reviews for a crystal, newest first, with a rating summary.",
    response_description="A page of reviews, the rating summary and pagination.",
    responses={404: {"description": "Crystal not found"}},
)
async def list_reviews(
    crystal_id: str,
    repos: RepoDep,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=50),
    rating: Optional[int] = Query(default=None, ge=1, le=5),
) -> ReviewListResponse:
    """
    List approved reviews.

    The summary always covers every approved review of the crystal, whatever
    the `rating` filter.

    - **page** / **limit**: Pagination.
    - **rating**: Only reviews with this star rating.
    """
    _require_catalog_crystal(crystal_id)

    rows, total = await repos.reviews.approved_for_crystal(
        crystal_id, rating=rating, limit=limit, offset=page_offset(page, limit)
    )
    distribution = await repos.reviews.rating_distribution(crystal_id)
    review_count = sum(distribution.values())
    average = sum(star * count for star, count in distribution.items()) / review_count if review_count else 0.0

    return ReviewListResponse(
        reviews=[
            ReviewRead(
                id=review.id,
                crystal_id=review.crystal_id,
                rating=review.rating,
                title=review.title,
                comment=review.comment,
                is_verified=review.is_verified,
                user_name=user.review_name,
                created_at=review.created_at,
            )
            for review, user in rows
        ],
        summary=ReviewSummary(
            average_rating=round(average, 1),
            total_reviews=review_count,
            rating_distribution=distribution,
        ),
        pagination=Pagination.build(page, limit, total),
    )


@router.post(
    "/{crystal_id}/reviews",
    response_model=ReviewRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Crystal Review",
    description="Post a review for a crystal as the current customer.",
    response_description="The created review.",
    responses={
        401: {"description": "Missing or unknown customer identity"},
        404: {"description": "Crystal not found"},
        409: {"description": "The customer already reviewed this crystal"},
    },
)
async def create_review(crystal_id: str, body: ReviewCreate, user: CurrentUserDep, repos: RepoDep) -> ReviewRead:
    """
    Create a review.

    The review is marked verified when the customer has a paid order that
    contains the crystal. One review per customer and crystal.

    - **rating**: 1 to 5.
    - **title**: Optional headline.
    - **comment**: Optional review text.
    """
    _require_catalog_crystal(crystal_id)
    if await repos.crystals.get_by_id(crystal_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Crystal '{crystal_id}' not found")

    if await repos.reviews.get_by_user_and_crystal(user.id, crystal_id) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="You have already reviewed this crystal")

    review = Review(
        crystal_id=crystal_id,
        user_id=user.id,
        rating=body.rating,
        title=body.title,
        comment=body.comment,
        is_verified=await repos.orders.user_bought_crystal(user.id, crystal_id),
        is_approved=True,
    )
    try:
        review = await repos.reviews.create(review)
    except IntegrityError:
        await repos.reviews.session.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="You have already reviewed this crystal")

    logger.info(f"Review {review.id} created for {crystal_id} by user {user.id}")
    return ReviewRead(
        id=review.id,
        crystal_id=review.crystal_id,
        rating=review.rating,
        title=review.title,
        comment=review.comment,
        is_verified=review.is_verified,
        user_name=user.review_name,
        created_at=review.created_at,
    )
