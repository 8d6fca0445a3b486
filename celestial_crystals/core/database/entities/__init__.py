"""
Database entities for the storefront.

Importing this package registers every table on the shared SQLModel metadata.
"""

from .blog_posts import BlogPost
from .crystals import DEFAULT_LOW_STOCK_THRESHOLD, Crystal
from .email_subscribers import EmailSubscriber
from .inventory_logs import InventoryLog
from .orders import Order, OrderItem, OrderStatusHistory, generate_order_number
from .reviews import Review
from .users import Address, User

__all__ = [
    "Address",
    "BlogPost",
    "Crystal",
    "DEFAULT_LOW_STOCK_THRESHOLD",
    "EmailSubscriber",
    "InventoryLog",
    "Order",
    "OrderItem",
    "OrderStatusHistory",
    "Review",
    "User",
    "generate_order_number",
]
