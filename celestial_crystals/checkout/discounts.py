"""
Discount code validation.

Codes are either one of the fixed promotional codes or a generated code that
matches one of the known prefixes (``BDAY...``, ``BACK...`` and so on).
"""

from __future__ import annotations

import re
from datetime import date
from typing import Dict, List, Optional, Pattern

from pydantic import BaseModel, ConfigDict, Field

from celestial_crystals.core.logging_config import get_logger

logger = get_logger(__name__)

FREE_SHIPPING_TYPE = "FREE_SHIPPING"
PERCENTAGE_TYPE = "PERCENTAGE"


class DiscountRule(BaseModel):
    """What a discount code grants."""

    model_config = ConfigDict(frozen=True)

    percentage: float = Field(ge=0, le=100)
    message: str
    expiry_date: Optional[date] = None
    min_order_amount: Optional[float] = None
    free_shipping: bool = False


class DiscountResult(BaseModel):
    code: str
    percentage: float = 0
    is_valid: bool
    message: str
    expiry_date: Optional[date] = None
    min_order_amount: Optional[float] = None
    free_shipping: bool = False
    type: str = PERCENTAGE_TYPE


STATIC_CODES: Dict[str, DiscountRule] = {
    "WELCOME15": DiscountRule(percentage=15, message="15% welcome discount applied!"),
    "WELCOME10": DiscountRule(percentage=10, message="10% welcome discount applied!"),
    "BDAY20": DiscountRule(percentage=20, message="20% birthday discount applied!"),
    "SAVE25": DiscountRule(percentage=25, message="25% discount applied!", min_order_amount=50),
    "FREEDELIVERY": DiscountRule(percentage=0, message="Free delivery applied!", free_shipping=True),
    "WEEKLY10": DiscountRule(percentage=10, message="10% weekly discount applied!", expiry_date=date(2026, 12, 31)),
    "SEASON15": DiscountRule(percentage=15, message="15% seasonal discount applied!", expiry_date=date(2026, 12, 31)),
}


class _PatternRule(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    regex: Pattern[str]
    rule: DiscountRule


PATTERN_CODES: List[_PatternRule] = [
    _PatternRule(regex=re.compile(r"^WELCOME\w{4,6}$"), rule=DiscountRule(percentage=15, message="15% welcome discount applied!")),
    _PatternRule(regex=re.compile(r"^BDAY\w{3,9}$"), rule=DiscountRule(percentage=20, message="20% birthday discount applied!")),
    _PatternRule(regex=re.compile(r"^SAVE\w{3,9}$"), rule=DiscountRule(percentage=15, message="15% discount applied!")),
    _PatternRule(regex=re.compile(r"^WEEKLY\w{3,9}$"), rule=DiscountRule(percentage=10, message="10% weekly discount applied!")),
    _PatternRule(regex=re.compile(r"^SEASON\w{3,9}$"), rule=DiscountRule(percentage=15, message="15% seasonal discount applied!")),
    _PatternRule(
        regex=re.compile(r"^BACK\w{3,9}$"),
        rule=DiscountRule(percentage=25, message="25% welcome back discount applied!", min_order_amount=50),
    ),
]


def normalize_code(code: Optional[str]) -> str:
    return (code or "").strip().upper()


def _invalid(code: str, message: str) -> DiscountResult:
    return DiscountResult(code=code, percentage=0, is_valid=False, message=message)


def _lookup(code: str) -> Optional[DiscountRule]:
    if code in STATIC_CODES:
        return STATIC_CODES[code]
    for pattern in PATTERN_CODES:
        if pattern.regex.match(code):
            return pattern.rule
    return None


def validate_discount_code(
    code: Optional[str],
    subtotal: Optional[float] = None,
    today: Optional[date] = None,
) -> DiscountResult:
    """
    Validate a discount code.

    Args:
        code: Code as typed by the customer; whitespace and case are ignored.
        subtotal: Cart subtotal, checked against the code's minimum order.
        today: Date used for the expiry check (defaults to today).

    Returns:
        A ``DiscountResult``; invalid codes carry ``percentage=0`` and a message.
    """
    normalized = normalize_code(code)
    if not normalized:
        return _invalid(normalized, "Discount code is required")

    rule = _lookup(normalized)
    if rule is None:
        logger.debug(f"Unknown discount code: {normalized}")
        return _invalid(normalized, "Invalid discount code")

    today = today or date.today()
    if rule.expiry_date is not None and today > rule.expiry_date:
        return _invalid(normalized, "This discount code has expired")

    if subtotal is not None and rule.min_order_amount is not None and subtotal < rule.min_order_amount:
        return _invalid(normalized, f"Minimum order of ${rule.min_order_amount:.2f} required")

    return DiscountResult(
        code=normalized,
        percentage=rule.percentage,
        is_valid=True,
        message=rule.message,
        expiry_date=rule.expiry_date,
        min_order_amount=rule.min_order_amount,
        free_shipping=rule.free_shipping,
        type=FREE_SHIPPING_TYPE if rule.free_shipping else PERCENTAGE_TYPE,
    )
