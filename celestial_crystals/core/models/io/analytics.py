"""Admin analytics I/O models."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field


class TopProduct(BaseModel):
    crystal_id: str
    name: str
    quantity_sold: int
    revenue: float


class AnalyticsOverview(BaseModel):
    total_revenue: float = Field(description="Sum of PAID order totals")
    total_orders: int
    average_order_value: float
    total_customers: int
    orders_by_status: Dict[str, int]
    top_products: List[TopProduct]
    low_stock_count: int
    active_subscribers: int
