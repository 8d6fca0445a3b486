"""
Server-side cart pricing.

Prices are always read from the catalog. Client-supplied prices are never
trusted.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from celestial_crystals.catalog.data import CatalogCrystal, get_crystal
from celestial_crystals.core.errors import CrystalNotFoundError

from .discounts import DiscountResult, normalize_code, validate_discount_code

FREE_SHIPPING_THRESHOLD = 50.0
FLAT_SHIPPING_RATE = 5.99
TAX_RATE = 0.08


class CartLine(BaseModel):
    crystal_id: str = Field(alias="id")
    quantity: int

    model_config = ConfigDict(populate_by_name=True)


class QuotedLine(BaseModel):
    id: str
    name: str
    price: float
    quantity: int
    line_total: float


class CartQuote(BaseModel):
    """Priced cart, every amount rounded to cents."""

    items: List[QuotedLine]
    subtotal: float
    discount_amount: float
    discount_code: Optional[str] = None
    shipping: float
    tax: float
    total: float
    free_shipping: bool


def _cents(value: float) -> float:
    return round(value + 1e-9, 2)


def resolve_lines(lines: Iterable[CartLine]) -> List[Tuple[CatalogCrystal, int]]:
    """Pair cart lines with catalog crystals, dropping non-positive quantities."""
    resolved = []
    for line in lines:
        if line.quantity <= 0:
            continue
        crystal = get_crystal(line.crystal_id)
        if crystal is None:
            raise CrystalNotFoundError(line.crystal_id)
        resolved.append((crystal, line.quantity))
    return resolved


def quote_cart(lines: Sequence[CartLine], discount: Optional[DiscountResult] = None) -> CartQuote:
    """
    Price a cart.

    Args:
        lines: Crystal ids and quantities.
        discount: Validated discount; ignored unless ``is_valid``.

    Returns:
        The quote with subtotal, discount, shipping, tax and total.

    Raises:
        CrystalNotFoundError: When a line references an unknown crystal.
    """
    quoted = [
        QuotedLine(
            id=crystal.id,
            name=crystal.name,
            price=crystal.price,
            quantity=quantity,
            line_total=_cents(crystal.price * quantity),
        )
        for crystal, quantity in resolve_lines(lines)
    ]
    subtotal = _cents(sum(line.price * line.quantity for line in quoted))

    active = discount if discount is not None and discount.is_valid else None
    discount_amount = _cents(subtotal * active.percentage / 100) if active else 0.0
    free_shipping = subtotal >= FREE_SHIPPING_THRESHOLD or bool(active and active.free_shipping)
    shipping = 0.0 if free_shipping else FLAT_SHIPPING_RATE
    tax = _cents((subtotal - discount_amount) * TAX_RATE)
    total = _cents(subtotal - discount_amount + shipping + tax)

    return CartQuote(
        items=quoted,
        subtotal=subtotal,
        discount_amount=discount_amount,
        discount_code=active.code if active else None,
        shipping=shipping,
        tax=tax,
        total=total,
        free_shipping=free_shipping,
    )


def quote_with_code(
    lines: Sequence[CartLine], code: Optional[str] = None, today: Optional[date] = None
) -> Tuple[CartQuote, Optional[DiscountResult]]:
    """
    Price a cart with a discount code typed by the customer.

    The code is checked against the undiscounted subtotal. An invalid code
    leaves the cart undiscounted and is returned so the caller can report it.
    """
    if not normalize_code(code):
        return quote_cart(lines), None
    subtotal = quote_cart(lines).subtotal
    discount = validate_discount_code(code, subtotal=subtotal, today=today)
    return quote_cart(lines, discount), discount
