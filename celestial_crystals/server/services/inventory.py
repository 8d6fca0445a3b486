"""
Inventory service.

Every stock change goes through ``InventoryService.apply_change`` so that it
is paired with an ``InventoryLog`` row.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from celestial_crystals.catalog.data import CRYSTAL_CATALOG, CatalogCrystal
from celestial_crystals.core.database.base import utc_now
from celestial_crystals.core.database.entities.crystals import Crystal
from celestial_crystals.core.database.entities.inventory_logs import InventoryLog
from celestial_crystals.core.database.repositories.crystals import CrystalRepository, InventoryLogRepository
from celestial_crystals.core.errors import CrystalNotFoundError, InsufficientStockError, InvalidInventoryChangeError
from celestial_crystals.core.logging_config import get_logger
from celestial_crystals.core.models.domain.enums import InventoryChangeType
from celestial_crystals.core.models.io.common import Pagination, page_offset
from celestial_crystals.core.models.io.inventory import (
    BulkInventoryEntry,
    BulkInventoryItemResult,
    BulkInventoryResult,
    CatalogSyncResult,
    InventoryAlertResult,
    InventoryItemRead,
    InventoryOverview,
    InventoryStats,
)
from celestial_crystals.core.monitoring import log_email_sent
from celestial_crystals.notifications.email import EmailClient
from celestial_crystals.notifications.templates import render_inventory_alert

logger = get_logger(__name__)


def parse_change_type(value: str) -> InventoryChangeType:
    try:
        return InventoryChangeType(str(value).upper())
    except ValueError:
        raise InvalidInventoryChangeError(
            f"Invalid inventory change type '{value}'. Use RESTOCK, ADJUSTMENT, SALE or RETURN"
        )


def _apply_catalog_fields(row: Crystal, crystal: CatalogCrystal) -> None:
    row.name = crystal.name
    row.slug = crystal.id
    row.description = crystal.description
    row.price = crystal.price
    row.category = crystal.category
    row.chakra = crystal.chakra
    row.element = crystal.element
    row.hardness = crystal.hardness
    row.origin = crystal.origin
    row.rarity = crystal.rarity.value
    row.image = crystal.image
    row.set_images_list(crystal.gallery)
    row.set_colors_list(crystal.colors)
    row.set_properties_list(crystal.properties)
    row.set_zodiac_signs_list(crystal.zodiac_signs)
    row.set_birth_months_list(crystal.birth_months)


class InventoryService:
    """Stock changes, audit logging and the inventory dashboard queries."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.crystals = CrystalRepository(session)
        self.logs_repo = InventoryLogRepository(session)

    async def apply_change(
        self,
        crystal_id: str,
        quantity: int,
        change_type: str,
        reason: Optional[str] = None,
        reference: Optional[str] = None,
        created_by: Optional[str] = None,
        *,
        commit: bool = True,
    ) -> Crystal:
        """
        Change the stock of a crystal and record the change.

        A sale never takes stock below zero. The log records the change that
        was actually applied and notes oversold units in its reason.

        Args:
            crystal_id: Catalog id of the crystal
            quantity: Units; the sign is ignored except for ADJUSTMENT, which
                sets the stock to this value
            change_type: RESTOCK, ADJUSTMENT, SALE or RETURN
            reason: Free-text reason shown in the audit log
            reference: Order id for sales and returns
            created_by: Actor, e.g. ``admin`` or ``stripe-webhook``
            commit: Commit immediately or only flush

        Returns:
            The updated crystal

        Raises:
            InvalidInventoryChangeError: Unknown change type or negative adjustment
            CrystalNotFoundError: No crystal row with this id
        """
        kind = parse_change_type(change_type)
        crystal = await self.crystals.get_for_update(crystal_id)
        if crystal is None:
            raise CrystalNotFoundError(crystal_id)

        previous = crystal.stock_quantity
        amount = abs(int(quantity))
        if kind == InventoryChangeType.ADJUSTMENT:
            if quantity < 0:
                raise InvalidInventoryChangeError("Adjusted stock quantity cannot be negative")
            new_quantity = int(quantity)
            logged = new_quantity - previous
        elif kind == InventoryChangeType.SALE:
            new_quantity = max(0, previous - amount)
            logged = new_quantity - previous
            if amount > previous:
                reason = f"{reason or 'Sale'} (oversold by {amount - previous})"
        else:
            new_quantity = previous + amount
            logged = amount

        crystal.stock_quantity = new_quantity
        self.session.add(crystal)
        self.session.add(
            InventoryLog(
                crystal_id=crystal_id,
                change_type=kind.value,
                quantity=logged,
                previous_quantity=previous,
                new_quantity=new_quantity,
                reason=reason,
                reference=reference,
                created_by=created_by,
            )
        )
        if commit:
            await self.session.commit()
            await self.session.refresh(crystal)
        else:
            await self.session.flush()

        logger.info(f"Inventory {kind.value} for {crystal_id}: {previous} -> {new_quantity}")
        if crystal.is_low_stock:
            logger.warning(f"Crystal {crystal_id} is low on stock ({new_quantity} left)")
        return crystal

    async def process_sale(
        self,
        crystal_id: str,
        quantity: int,
        order_id: str,
        *,
        allow_oversell: bool = False,
        commit: bool = True,
    ) -> Crystal:
        """
        Decrement stock for an order line.

        With ``allow_oversell`` a short stock is clamped at zero instead of
        raising; payments that were already captured use this.
        """
        crystal = await self.crystals.get_by_id(crystal_id)
        if crystal is None:
            raise CrystalNotFoundError(crystal_id)
        if crystal.stock_quantity < quantity:
            if not allow_oversell:
                raise InsufficientStockError(crystal_id, quantity, crystal.stock_quantity)
            logger.warning(
                f"Oversold {crystal_id} on order {order_id}: requested {quantity}, in stock {crystal.stock_quantity}"
            )
        return await self.apply_change(
            crystal_id,
            quantity,
            InventoryChangeType.SALE.value,
            reason="Order sale",
            reference=order_id,
            created_by="system",
            commit=commit,
        )

    async def bulk_apply(self, updates: Sequence[BulkInventoryEntry], created_by: Optional[str] = None) -> BulkInventoryResult:
        """Apply each update independently and report per-entry results."""
        results: List[BulkInventoryItemResult] = []
        for update in updates:
            if not update.crystal_id or update.quantity is None:
                results.append(
                    BulkInventoryItemResult(
                        crystal_id=update.crystal_id, success=False, error="crystal_id and quantity are required"
                    )
                )
                continue
            try:
                crystal = await self.apply_change(
                    update.crystal_id, update.quantity, update.type, update.reason, created_by=created_by
                )
            except (CrystalNotFoundError, InvalidInventoryChangeError) as e:
                results.append(BulkInventoryItemResult(crystal_id=update.crystal_id, success=False, error=e.message))
                continue
            results.append(
                BulkInventoryItemResult(crystal_id=update.crystal_id, success=True, new_quantity=crystal.stock_quantity)
            )

        success_count = sum(1 for r in results if r.success)
        return BulkInventoryResult(
            results=results, success_count=success_count, failure_count=len(results) - success_count
        )

    async def overview(
        self,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        low_stock: bool = False,
        out_of_stock: bool = False,
    ) -> InventoryOverview:
        crystals, total = await self.crystals.search_inventory(
            search=search, low_stock=low_stock, out_of_stock=out_of_stock, limit=limit, offset=page_offset(page, limit)
        )
        stats = await self.crystals.stock_stats()
        return InventoryOverview(
            items=[InventoryItemRead.model_validate(crystal) for crystal in crystals],
            stats=InventoryStats(**stats),
            pagination=Pagination.build(page, limit, total),
        )

    async def low_stock_alerts(self) -> List[Crystal]:
        return await self.crystals.low_stock()

    async def notify_low_stock(self, email_client: EmailClient, recipient: str, site_url: str) -> InventoryAlertResult:
        """
        Email the store inbox about crystals at or below their threshold.

        Nothing is sent when every active crystal is above its threshold.

        Raises:
            EmailDeliveryError: The alert could not be delivered
        """
        alerts = await self.crystals.low_stock()
        out_of_stock = [crystal for crystal in alerts if crystal.stock_quantity <= 0]
        low_stock = [crystal for crystal in alerts if crystal.stock_quantity > 0]
        result = InventoryAlertResult(
            low_stock_count=len(low_stock), out_of_stock_count=len(out_of_stock), notified=False
        )
        if not alerts:
            logger.info("Inventory check completed: nothing low on stock")
            return result

        rendered = render_inventory_alert(low_stock, out_of_stock, site_url, utc_now())
        sent = await email_client.send(recipient, rendered.subject, rendered.html, rendered.text)
        log_email_sent("inventory_alert", 1, sent.simulated)
        logger.warning(f"Inventory alert sent to {recipient}: {result.low_stock_count} low, {result.out_of_stock_count} out")
        return result.model_copy(update={"notified": True, "recipient": recipient})

    async def logs(self, crystal_id: Optional[str] = None, limit: int = 50) -> List[InventoryLog]:
        return await self.logs_repo.list(limit=limit, filters={"crystal_id": crystal_id})

    async def sync_catalog(
        self, initial_stock: int, catalog: Sequence[CatalogCrystal] = CRYSTAL_CATALOG
    ) -> CatalogSyncResult:
        """
        Upsert catalog crystals into the database.

        New rows start with ``initial_stock`` units. Existing rows keep their
        stock; descriptive fields and price are refreshed from the catalog.
        """
        existing = await self.crystals.get_many([crystal.id for crystal in catalog])
        created = updated = 0
        for crystal in catalog:
            row = existing.get(crystal.id)
            if row is None:
                row = Crystal(
                    id=crystal.id,
                    name=crystal.name,
                    slug=crystal.id,
                    price=crystal.price,
                    category=crystal.category,
                    stock_quantity=initial_stock,
                )
                created += 1
            else:
                updated += 1
            _apply_catalog_fields(row, crystal)
            self.session.add(row)
        await self.session.commit()
        logger.info(f"Catalog sync finished: {created} created, {updated} updated")
        return CatalogSyncResult(created=created, updated=updated, total=len(catalog))
