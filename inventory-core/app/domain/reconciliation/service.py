# app/domain/reconciliation/service.py
import logging
from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import utcnow
from app.domain.alerts.quote_expiry import reconcile_quote_expiration_alerts
from app.domain.alerts.schemas import ReconcileSummary
from app.domain.alerts.stock import reconcile_stock_alerts
from app.domain.inventory.ledger import apply_order_to_stock
from app.domain.manufacturer_orders.schemas import ApplyToInventoryOut
from .schemas import ScheduledReconciliationOut

logger = logging.getLogger(__name__)

ALREADY_APPLIED_MESSAGE = "Order quantities already applied to inventory."


async def refresh_stock_alerts(
    db: AsyncSession,
    skus: Sequence[str],
    now: datetime,
) -> Optional[ReconcileSummary]:
    """Re-derive alerts for ``skus`` without letting a failure reach the caller."""
    if not skus:
        return None
    try:
        return await reconcile_stock_alerts(db, now, skus=sorted(set(skus)))
    except Exception:
        await db.rollback()
        logger.exception("stock alert refresh failed", extra={"skus": list(skus)})
        return None


async def apply_order_to_inventory(
    db: AsyncSession,
    order_id: UUID,
    now: Optional[datetime] = None,
) -> ApplyToInventoryOut:
    now = now or utcnow()

    application = await apply_order_to_stock(db, order_id, now)
    if application.idempotent:
        return ApplyToInventoryOut(applied=False, message=ALREADY_APPLIED_MESSAGE)

    await refresh_stock_alerts(db, [item.sku for item in application.applied], now)

    return ApplyToInventoryOut(
        applied=True,
        applied_items=application.applied,
        skipped_skus=application.skipped or None,
    )


async def reconcile_low_stock_alerts(
    db: AsyncSession,
    now: Optional[datetime] = None,
) -> ReconcileSummary:
    return await reconcile_stock_alerts(db, now or utcnow())


async def run_scheduled_reconciliation(
    db: AsyncSession,
    now: Optional[datetime] = None,
) -> ScheduledReconciliationOut:
    """Stock and quote-expiry passes; either may fail without stopping the other."""
    now = now or utcnow()
    out = ScheduledReconciliationOut()

    try:
        out.stock = await reconcile_stock_alerts(db, now)
    except Exception:
        await db.rollback()
        logger.exception("stock alert pass failed")
        out.failed_passes.append("stock")

    try:
        out.quotes = await reconcile_quote_expiration_alerts(db, now)
    except Exception:
        await db.rollback()
        logger.exception("quote expiration pass failed")
        out.failed_passes.append("quotes")

    return out
