"""
Admin analytics dashboard.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from celestial_crystals.core.models.io.analytics import AnalyticsOverview, TopProduct
from celestial_crystals.server.services.deps import RepoDep, require_admin

router = APIRouter(tags=["admin-analytics"], dependencies=[Depends(require_admin)])

TOP_PRODUCT_LIMIT = 5


@router.get(
    "",
    response_model=AnalyticsOverview,
    summary="Store Analytics",
    description="Revenue, order, customer, stock and subscriber figures for the dashboard.",
)
async def analytics_overview(repos: RepoDep) -> AnalyticsOverview:
    """
    Dashboard figures.

    Revenue and the average order value only count PAID orders; best
    sellers are ranked by units sold in PAID orders.
    """
    paid_orders, revenue = await repos.orders.revenue_summary()
    stock = await repos.crystals.stock_stats()
    return AnalyticsOverview(
        total_revenue=revenue,
        total_orders=await repos.orders.count_all(),
        average_order_value=round(revenue / paid_orders, 2) if paid_orders else 0.0,
        total_customers=await repos.users.count_customers(),
        orders_by_status=await repos.orders.counts_by_status(),
        top_products=[
            TopProduct(crystal_id=crystal_id, name=name, quantity_sold=quantity, revenue=total)
            for crystal_id, name, quantity, total in await repos.orders.top_products(TOP_PRODUCT_LIMIT)
        ],
        low_stock_count=stock["low_stock_count"],
        active_subscribers=await repos.subscribers.count_active(),
    )
