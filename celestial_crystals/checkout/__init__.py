"""Discount codes and cart pricing."""

from .discounts import DiscountResult, DiscountRule, normalize_code, validate_discount_code
from .pricing import (
    FLAT_SHIPPING_RATE,
    FREE_SHIPPING_THRESHOLD,
    TAX_RATE,
    CartLine,
    CartQuote,
    QuotedLine,
    quote_cart,
    quote_with_code,
)

__all__ = [
    "CartLine",
    "CartQuote",
    "DiscountResult",
    "DiscountRule",
    "FLAT_SHIPPING_RATE",
    "FREE_SHIPPING_THRESHOLD",
    "QuotedLine",
    "TAX_RATE",
    "normalize_code",
    "quote_cart",
    "quote_with_code",
    "validate_discount_code",
]
