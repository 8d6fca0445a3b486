"""Stripe payment gateway and payment-intent metadata codec."""

from .gateway import StripeGateway, stripe_object_to_dict
from .metadata import (
    MAX_METADATA_CHUNKS,
    METADATA_VALUE_LIMIT,
    CheckoutOrderData,
    CustomerInfo,
    OrderDataItem,
    decode_order_metadata,
    encode_order_metadata,
)

__all__ = [
    "CheckoutOrderData",
    "CustomerInfo",
    "MAX_METADATA_CHUNKS",
    "METADATA_VALUE_LIMIT",
    "OrderDataItem",
    "StripeGateway",
    "decode_order_metadata",
    "encode_order_metadata",
    "stripe_object_to_dict",
]
