"""
Admin inventory management.
"""

from __future__ import annotations

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query

from celestial_crystals.core.errors import StorefrontError
from celestial_crystals.core.models.io.inventory import (
    BulkInventoryRequest,
    BulkInventoryResult,
    CatalogSyncResult,
    InventoryAlertResult,
    InventoryChangeRequest,
    InventoryItemRead,
    InventoryLogRead,
    InventoryOverview,
)
from celestial_crystals.server.exception_handlers import to_http_exception
from celestial_crystals.server.services.deps import EmailClientDep, SessionDep, SettingsDep, require_admin
from celestial_crystals.server.services.inventory import InventoryService

router = APIRouter(tags=["admin-inventory"], dependencies=[Depends(require_admin)])


def get_inventory_service(session: SessionDep) -> InventoryService:
    return InventoryService(session)


InventoryDep = Annotated[InventoryService, Depends(get_inventory_service)]


@router.get(
    "",
    response_model=InventoryOverview,
    summary="Inventory Overview",
    description="Crystals ordered by stock level, with stock statistics.",
)
async def inventory_overview(
    service: InventoryDep,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    search: Optional[str] = None,
    low_stock: bool = False,
    out_of_stock: bool = False,
) -> InventoryOverview:
    """
    Inventory overview.

    - **search**: Case-insensitive text over name and category.
    - **low_stock**: Only crystals with 0 < stock <= threshold.
    - **out_of_stock**: Only crystals with no stock.
    """
    return await service.overview(page, limit, search=search, low_stock=low_stock, out_of_stock=out_of_stock)


@router.get(
    "/logs",
    response_model=List[InventoryLogRead],
    summary="Inventory Logs",
    description="Stock change audit log, newest first.",
)
async def inventory_logs(
    service: InventoryDep,
    crystal_id: Optional[str] = None,
    limit: int = Query(default=50, ge=1, le=500),
) -> List[InventoryLogRead]:
    return [InventoryLogRead.model_validate(log) for log in await service.logs(crystal_id, limit)]


@router.get(
    "/alerts",
    response_model=List[InventoryItemRead],
    summary="Low Stock Alerts",
    description="Active crystals at or below their low-stock threshold, lowest stock first.",
)
async def low_stock_alerts(service: InventoryDep) -> List[InventoryItemRead]:
    return [InventoryItemRead.model_validate(crystal) for crystal in await service.low_stock_alerts()]


@router.post(
    "/alerts/notify",
    response_model=InventoryAlertResult,
    summary="Send Low Stock Alert",
    description="Email the store inbox a summary of low and out of stock crystals.",
    responses={502: {"description": "Alert email could not be delivered"}},
)
async def notify_low_stock(
    service: InventoryDep, email_client: EmailClientDep, settings: SettingsDep
) -> InventoryAlertResult:
    """
    Send the inventory alert to `ADMIN_EMAIL`.

    No email is sent when nothing is at or below its low-stock threshold.
    """
    try:
        return await service.notify_low_stock(email_client, settings.admin_email, settings.site_url)
    except StorefrontError as e:
        raise to_http_exception(e)


@router.post(
    "/bulk",
    response_model=BulkInventoryResult,
    summary="Bulk Inventory Update",
    description="Apply several stock changes; each entry succeeds or fails on its own.",
)
async def bulk_update(body: BulkInventoryRequest, service: InventoryDep) -> BulkInventoryResult:
    return await service.bulk_apply(body.updates, created_by="admin")


@router.post(
    "/sync",
    response_model=CatalogSyncResult,
    summary="Sync Catalog",
    description="Upsert the static catalog into the database, keeping existing stock levels.",
)
async def sync_catalog(service: InventoryDep, settings: SettingsDep) -> CatalogSyncResult:
    return await service.sync_catalog(settings.initial_stock_quantity)


@router.put(
    "/{crystal_id}",
    response_model=InventoryItemRead,
    summary="Update Stock",
    description="Restock, adjust, sell or return units of one crystal.",
    responses={
        400: {"description": "Invalid change type or quantity"},
        404: {"description": "Crystal not found"},
    },
)
async def update_stock(crystal_id: str, body: InventoryChangeRequest, service: InventoryDep) -> InventoryItemRead:
    """
    Change the stock of a crystal.

    - **quantity**: Units; ADJUSTMENT sets the stock to this value.
    - **type**: RESTOCK, ADJUSTMENT, SALE or RETURN.
    - **reason**: Optional note for the audit log.
    """
    try:
        crystal = await service.apply_change(crystal_id, body.quantity, body.type, body.reason, created_by="admin")
    except StorefrontError as e:
        raise to_http_exception(e)
    return InventoryItemRead.model_validate(crystal)
