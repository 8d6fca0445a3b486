"""
Discount code validation.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query

from celestial_crystals.checkout.discounts import DiscountResult, validate_discount_code
from celestial_crystals.core.models.io.checkout import DiscountValidateRequest

router = APIRouter(tags=["discounts"])


@router.post(
    "/validate",
    response_model=DiscountResult,
    summary="Validate Discount Code",
    description="Check a discount code, optionally against a cart subtotal.",
    response_description="The validation result; invalid codes carry a message and zero percentage.",
)
async def validate_code(body: DiscountValidateRequest) -> DiscountResult:
    """
    Validate a discount code.

    Codes are case-insensitive. An unknown, expired or below-minimum code
    answers 200 with `is_valid=false` and a message.

    - **code**: The code typed by the customer.
    - **subtotal**: Optional cart subtotal for minimum-order checks.
    """
    return validate_discount_code(body.code, subtotal=body.subtotal)


@router.get(
    "/validate",
    response_model=DiscountResult,
    summary="Validate Discount Code (query)",
    description="Same as the POST variant, with the code in the query string.",
)
async def validate_code_by_query(
    code: str = "",
    subtotal: Optional[float] = Query(default=None, ge=0),
) -> DiscountResult:
    return validate_discount_code(code, subtotal=subtotal)
