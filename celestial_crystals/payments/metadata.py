"""
Order data carried in Stripe payment-intent metadata.

Stripe metadata values are strings of at most 500 characters and an object
holds at most 50 keys. The checkout order is stored as compact JSON under
``orderData``; longer payloads are split across ``orderData_0..N-1`` with the
chunk count in ``orderDataChunks``.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from celestial_crystals.core.errors import OrderDataTooLargeError
from celestial_crystals.core.logging_config import get_logger

logger = get_logger(__name__)

METADATA_VALUE_LIMIT = 500
MAX_METADATA_CHUNKS = 45
ORDER_DATA_KEY = "orderData"
ORDER_DATA_CHUNKS_KEY = "orderDataChunks"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CustomerInfo(_CamelModel):
    email: Optional[str] = None
    first_name: str = ""
    last_name: str = ""
    address: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None

    @property
    def has_address(self) -> bool:
        return bool(self.address)


class OrderDataItem(_CamelModel):
    id: str
    name: str
    price: float
    quantity: int = Field(gt=0)


class CheckoutOrderData(_CamelModel):
    """Snapshot of a priced cart, as placed on the payment intent."""

    items: List[OrderDataItem] = Field(default_factory=list)
    customer_info: CustomerInfo = Field(default_factory=CustomerInfo)
    subtotal: float = 0
    discount_amount: float = 0
    shipping: float = 0
    tax: float = 0
    discount_code: Optional[str] = None
    total: float = 0

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)


def metadata_chunk_key(index: int) -> str:
    return f"{ORDER_DATA_KEY}_{index}"


def encode_order_metadata(order_data: CheckoutOrderData, base: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Encode order data into Stripe metadata.

    Args:
        order_data: Order snapshot to store.
        base: Other metadata entries to keep alongside the order data.

    Returns:
        A new metadata dict.

    Raises:
        OrderDataTooLargeError: When the JSON needs more than 45 chunks.
    """
    metadata: Dict[str, str] = dict(base or {})
    payload = order_data.to_json()

    if len(payload) <= METADATA_VALUE_LIMIT:
        metadata[ORDER_DATA_KEY] = payload
        return metadata

    chunks = [payload[i : i + METADATA_VALUE_LIMIT] for i in range(0, len(payload), METADATA_VALUE_LIMIT)]
    if len(chunks) > MAX_METADATA_CHUNKS:
        raise OrderDataTooLargeError(
            f"Order data needs {len(chunks)} metadata chunks, the limit is {MAX_METADATA_CHUNKS}",
            details={"length": len(payload)},
        )
    for index, chunk in enumerate(chunks):
        metadata[metadata_chunk_key(index)] = chunk
    metadata[ORDER_DATA_CHUNKS_KEY] = str(len(chunks))
    return metadata


def _joined_chunks(metadata: Mapping[str, Any]) -> Optional[str]:
    raw_count = metadata.get(ORDER_DATA_CHUNKS_KEY)
    if raw_count is None:
        return None
    try:
        count = int(raw_count)
    except (TypeError, ValueError):
        logger.warning(f"Invalid {ORDER_DATA_CHUNKS_KEY} value: {raw_count!r}")
        return None

    parts = []
    for index in range(count):
        chunk = metadata.get(metadata_chunk_key(index))
        if chunk is None:
            logger.warning(f"Order data chunk {index} of {count} is missing")
            return None
        parts.append(str(chunk))
    return "".join(parts)


def _parse(payload: str) -> Optional[CheckoutOrderData]:
    try:
        return CheckoutOrderData.model_validate(json.loads(payload))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"Could not parse order data from metadata: {e}")
        return None


def decode_order_metadata(metadata: Optional[Mapping[str, Any]]) -> Optional[CheckoutOrderData]:
    """
    Rebuild order data from Stripe metadata.

    ``orderData`` is tried first, then the chunked form. Unreadable data is
    logged and reported as ``None``.
    """
    if not metadata:
        return None

    single = metadata.get(ORDER_DATA_KEY)
    if single:
        order_data = _parse(str(single))
        if order_data is not None:
            return order_data

    joined = _joined_chunks(metadata)
    if joined:
        return _parse(joined)
    return None
