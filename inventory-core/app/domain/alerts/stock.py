# app/domain/alerts/stock.py
import logging
from datetime import datetime
from typing import NamedTuple, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.alerts import Alert, AlertSeverity, AlertType, STOCK_ALERT_TYPES
from app.db.repositories.alerts import resolve_open_alerts
from app.db.repositories.inventory import list_stock_levels
from .schemas import AlertDraft, ProductSubject, ReconcileSummary
from .writer import write_alert

logger = logging.getLogger(__name__)


class StockLevel(NamedTuple):
    sku: str
    name: Optional[str]
    quantity: int
    min_stock: int


class StockAlertOutcome(NamedTuple):
    alert: Optional[Alert]
    resolved: int


def derive_stock_alert(level: StockLevel) -> Optional[AlertDraft]:
    """Desired stock alert for one item, or None when stock is above its threshold."""
    quantity = level.quantity or 0
    min_stock = level.min_stock or 0
    label = level.name or level.sku
    subject = ProductSubject(sku=level.sku)

    if quantity == 0:
        return AlertDraft(
            type=AlertType.OUT_OF_STOCK,
            severity=AlertSeverity.CRITICAL,
            title=f"Out of Stock: {label}",
            message=f"{label} (SKU: {level.sku}) is out of stock.",
            subject=subject,
        )
    if 0 < quantity <= min_stock:
        return AlertDraft(
            type=AlertType.LOW_STOCK,
            severity=AlertSeverity.WARNING,
            title=f"Low Stock: {label}",
            message=f"{label} (SKU: {level.sku}) has {quantity} units remaining (min: {min_stock}).",
            subject=subject,
        )
    return None


async def reconcile_item_alert(
    db: AsyncSession,
    level: StockLevel,
    now: datetime,
) -> StockAlertOutcome:
    """Bring the open stock alerts for one SKU in line with its current quantity.

    Does not commit.
    """
    draft = derive_stock_alert(level)

    # stock alert types that no longer hold for this item
    stale = [t for t in STOCK_ALERT_TYPES if draft is None or t != draft.type]
    resolved = await resolve_open_alerts(
        db,
        types=stale,
        entity_type="product",
        entity_id=level.sku,
        now=now,
    )

    alert = await write_alert(db, draft, now) if draft is not None else None
    return StockAlertOutcome(alert=alert, resolved=resolved)


async def reconcile_stock_alerts(
    db: AsyncSession,
    now: datetime,
    skus: Optional[Sequence[str]] = None,
) -> ReconcileSummary:
    """Re-derive stock alerts for every inventory item (or only ``skus``).

    Each item is committed on its own; a failing item is rolled back, counted
    and skipped so the rest of the pass still runs.
    """
    levels = [StockLevel(*row) for row in await list_stock_levels(db, skus)]
    summary = ReconcileSummary()

    for level in levels:
        summary.checked += 1
        try:
            outcome = await reconcile_item_alert(db, level, now)
            await db.commit()
        except Exception:
            await db.rollback()
            summary.errors += 1
            logger.exception("stock alert reconciliation failed", extra={"sku": level.sku})
            continue

        if outcome.alert is not None:
            summary.raised += 1
        summary.resolved += outcome.resolved

    logger.info(
        "stock alerts reconciled",
        extra={
            "checked": summary.checked,
            "raised": summary.raised,
            "resolved": summary.resolved,
            "errors": summary.errors,
        },
    )
    return summary
