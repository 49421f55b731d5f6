# app/domain/inventory/ledger.py
"""Stock ledger: the single path by which a manufacturer order adds to inventory.

Each SKU is incremented with one atomic UPDATE and committed on its own, so a
missing or failing SKU never blocks the others. The order's
``inventory_applied_at`` marker is written last; once it is set the order can
never be applied again.
"""
import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import InventoryMarkerWriteError, NotFoundError
from app.db.repositories.inventory import increment_quantity
from app.db.repositories.manufacturer_orders import (
    get_items_for_order,
    get_order_by_id,
    mark_order_applied,
)
from .schemas import AppliedItem, LedgerApplication

logger = logging.getLogger(__name__)


async def apply_order_to_stock(
    db: AsyncSession,
    order_id: UUID,
    now: datetime,
) -> LedgerApplication:
    order = await get_order_by_id(db, order_id)
    if order is None:
        raise NotFoundError("Order not found")

    if order.inventory_applied_at is not None:
        logger.info("order already applied to inventory", extra={"order_id": str(order_id)})
        return LedgerApplication(idempotent=True)

    # plain values; a rollback below expires every ORM instance in the session
    lines = [(item.sku, item.quantity_ordered) for item in await get_items_for_order(db, order_id)]
    if not lines:
        raise NotFoundError("No order items found.")

    result = LedgerApplication()

    for sku, quantity in lines:
        if not quantity or quantity <= 0:
            continue

        try:
            found = await increment_quantity(db, sku, quantity, now)
            await db.commit()
        except SQLAlchemyError:
            await db.rollback()
            logger.exception(
                "inventory increment failed, skipping sku",
                extra={"order_id": str(order_id), "sku": sku},
            )
            result.skipped.append(sku)
            continue

        if not found:
            logger.warning(
                "sku not in inventory, skipping",
                extra={"order_id": str(order_id), "sku": sku},
            )
            result.skipped.append(sku)
            continue

        result.applied.append(AppliedItem(sku=sku, quantity=quantity))

    applied_skus = [item.sku for item in result.applied]
    try:
        marked = await mark_order_applied(db, order_id, now)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.critical(
            "inventory updated but order marker write failed",
            extra={"order_id": str(order_id), "applied_skus": applied_skus},
        )
        raise InventoryMarkerWriteError(order_id, applied_skus) from exc

    if not marked:
        # a concurrent application armed the guard first; stock may now be double counted
        logger.critical(
            "order marker already set by a concurrent application",
            extra={"order_id": str(order_id), "applied_skus": applied_skus},
        )
        raise InventoryMarkerWriteError(order_id, applied_skus)

    logger.info(
        "order applied to inventory",
        extra={
            "order_id": str(order_id),
            "applied": len(result.applied),
            "skipped": len(result.skipped),
        },
    )
    return result
