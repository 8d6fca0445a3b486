"""Domain enums for storefront models."""

from __future__ import annotations

from enum import Enum


class OrderStatus(str, Enum):
    """Fulfilment status of an order."""

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"  # Paid, waiting to ship.
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PaymentStatus(str, Enum):
    """Payment status of an order."""

    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class InventoryChangeType(str, Enum):
    """
    Kinds of stock movement.

    RESTOCK and RETURN add units, SALE removes units, ADJUSTMENT sets the
    absolute quantity.
    """

    RESTOCK = "RESTOCK"
    ADJUSTMENT = "ADJUSTMENT"
    SALE = "SALE"
    RETURN = "RETURN"


class UserRole(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class BlogPostStatus(str, Enum):
    draft = "draft"
    published = "published"
    archived = "archived"


class Rarity(str, Enum):
    """Catalog rarity; the sort rank grows with rarity."""

    COMMON = "Common"
    UNCOMMON = "Uncommon"
    RARE = "Rare"
    VERY_RARE = "Very Rare"

    @property
    def rank(self) -> int:
        return _RARITY_RANK[self]


_RARITY_RANK = {
    Rarity.COMMON: 1,
    Rarity.UNCOMMON: 2,
    Rarity.RARE: 3,
    Rarity.VERY_RARE: 4,
}
