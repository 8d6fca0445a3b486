"""
Inventory I/O models.

Schemas for the admin inventory dashboard: stock overview, single and bulk
stock changes, audit logs and low-stock alerts.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import Pagination


class InventoryItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    category: str
    price: float
    image: Optional[str] = None
    stock_quantity: int
    low_stock_threshold: int
    is_active: bool
    is_low_stock: bool
    is_out_of_stock: bool
    updated_at: datetime


class InventoryStats(BaseModel):
    total_products: int
    total_stock: int
    low_stock_count: int = Field(description="Crystals with 0 < stock <= threshold")
    out_of_stock_count: int


class InventoryOverview(BaseModel):
    items: List[InventoryItemRead]
    stats: InventoryStats
    pagination: Pagination


class InventoryChangeRequest(BaseModel):
    quantity: int
    type: str = Field(default="ADJUSTMENT", description="RESTOCK, ADJUSTMENT, SALE or RETURN")
    reason: Optional[str] = Field(default=None, max_length=500)


class BulkInventoryEntry(BaseModel):
    """One entry of a bulk update; missing fields are reported per entry."""

    crystal_id: Optional[str] = None
    quantity: Optional[int] = None
    type: str = "ADJUSTMENT"
    reason: Optional[str] = None


class BulkInventoryRequest(BaseModel):
    updates: List[BulkInventoryEntry]


class BulkInventoryItemResult(BaseModel):
    crystal_id: Optional[str] = None
    success: bool
    new_quantity: Optional[int] = None
    error: Optional[str] = None


class BulkInventoryResult(BaseModel):
    results: List[BulkInventoryItemResult]
    success_count: int
    failure_count: int


class InventoryLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    crystal_id: str
    change_type: str
    quantity: int
    previous_quantity: int
    new_quantity: int
    reason: Optional[str] = None
    reference: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime


class CatalogSyncResult(BaseModel):
    created: int
    updated: int
    total: int


class InventoryAlertResult(BaseModel):
    low_stock_count: int
    out_of_stock_count: int
    notified: bool = Field(description="Whether an alert email was sent")
    recipient: Optional[str] = None
