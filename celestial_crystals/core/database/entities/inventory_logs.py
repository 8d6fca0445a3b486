"""
Inventory log entity.

Every stock movement writes one row so the admin dashboard can show who
changed stock, by how much and why.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, UTCDateTime, new_id, utc_now


class InventoryLog(Base, table=True):
    """Stock movement record.

    ``quantity`` is signed: sales are negative, restocks and returns positive,
    adjustments carry the difference to the previous level.

    Table: cc_inventory_logs
    """

    __tablename__ = "cc_inventory_logs"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    crystal_id: str = Field(foreign_key="cc_crystals.id", index=True)
    change_type: str = Field(max_length=20, description="RESTOCK, ADJUSTMENT, SALE or RETURN")
    quantity: int
    previous_quantity: int
    new_quantity: int
    reason: Optional[str] = Field(default=None, max_length=500)
    reference: Optional[str] = Field(default=None, max_length=100, description="Order id for sales and returns")
    created_by: Optional[str] = Field(default=None, max_length=100)
    created_at: datetime = Field(default_factory=utc_now, index=True, sa_type=UTCDateTime)

    def __repr__(self) -> str:
        return f"InventoryLog(crystal={self.crystal_id}, type={self.change_type}, qty={self.quantity})"
