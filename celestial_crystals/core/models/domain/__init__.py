"""Domain-level value types."""

from .enums import (
    BlogPostStatus,
    InventoryChangeType,
    OrderStatus,
    PaymentStatus,
    Rarity,
    UserRole,
)

__all__ = [
    "BlogPostStatus",
    "InventoryChangeType",
    "OrderStatus",
    "PaymentStatus",
    "Rarity",
    "UserRole",
]
