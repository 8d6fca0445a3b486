"""Discount, cart quote and payment intent I/O models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from celestial_crystals.checkout.discounts import DiscountResult
from celestial_crystals.checkout.pricing import CartLine, CartQuote
from celestial_crystals.payments.metadata import CustomerInfo


class DiscountValidateRequest(BaseModel):
    code: str = ""
    subtotal: Optional[float] = Field(default=None, ge=0)


class QuoteRequest(BaseModel):
    items: List[CartLine]
    discount_code: Optional[str] = None


class PaymentIntentRequest(BaseModel):
    """Checkout request; item prices are looked up server-side."""

    items: List[CartLine] = Field(min_length=1)
    customer_info: CustomerInfo = Field(default_factory=CustomerInfo)
    discount_code: Optional[str] = None
    user_id: Optional[str] = None
    currency: Optional[str] = Field(default=None, max_length=3)


class PaymentIntentResponse(BaseModel):
    client_secret: Optional[str] = None
    payment_intent_id: str
    amount: int = Field(description="Amount in the smallest currency unit")
    currency: str
    quote: CartQuote


class QuoteResponse(BaseModel):
    quote: CartQuote
    discount: Optional[DiscountResult] = Field(default=None, description="Validation result when a code was sent")
