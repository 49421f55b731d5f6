# app/domain/alerts/quote_expiry.py
import logging
import math
from datetime import datetime, timedelta
from typing import NamedTuple, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import as_utc
from app.core.config import settings
from app.db.models.alerts import AlertSeverity, AlertType
from app.db.models.quotes import QuoteStatus
from app.db.repositories.quotes import list_expiry_candidates
from .schemas import AlertDraft, QuoteSubject, ReconcileSummary
from .writer import write_alert

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


class QuoteDeadline(NamedTuple):
    id: UUID
    quote_number: str
    customer_name: str
    status: QuoteStatus
    valid_until: datetime


def days_until(deadline: datetime, now: datetime) -> int:
    """Whole days left before ``deadline``, partial days rounded up."""
    remaining = (as_utc(deadline) - as_utc(now)).total_seconds()
    return math.ceil(remaining / SECONDS_PER_DAY)


def derive_quote_alert(
    quote: QuoteDeadline,
    now: datetime,
    warning_days: int = 7,
) -> Optional[AlertDraft]:
    valid_until = as_utc(quote.valid_until)
    now = as_utc(now)
    subject = QuoteSubject(quote_id=quote.id)

    if valid_until < now:
        # past due: flat critical, however long ago
        if quote.status == QuoteStatus.EXPIRED:
            return None
        return AlertDraft(
            type=AlertType.QUOTE_EXPIRED,
            severity=AlertSeverity.CRITICAL,
            title=f"Quote Expired: {quote.quote_number}",
            message=f"Quote {quote.quote_number} for {quote.customer_name} has expired.",
            subject=subject,
        )

    if quote.status != QuoteStatus.SENT:
        return None
    if valid_until > now + timedelta(days=warning_days):
        return None

    days = days_until(valid_until, now)
    return AlertDraft(
        type=AlertType.QUOTE_EXPIRED,
        severity=AlertSeverity.CRITICAL if days <= 1 else AlertSeverity.WARNING,
        title=f"Quote Expiring: {quote.quote_number}",
        message=f"Quote {quote.quote_number} for {quote.customer_name} expires in {days} day(s).",
        subject=subject,
    )


async def reconcile_quote_expiration_alerts(
    db: AsyncSession,
    now: datetime,
) -> ReconcileSummary:
    """Raise or refresh quote_expired alerts; quote statuses are left untouched."""
    warning_days = settings.QUOTE_EXPIRY_WARNING_DAYS
    horizon = now + timedelta(days=warning_days)
    quotes = [QuoteDeadline(*row) for row in await list_expiry_candidates(db, horizon)]
    summary = ReconcileSummary()

    for quote in quotes:
        summary.checked += 1
        draft = derive_quote_alert(quote, now, warning_days)
        if draft is None:
            continue
        try:
            await write_alert(db, draft, now)
            await db.commit()
        except Exception:
            await db.rollback()
            summary.errors += 1
            logger.exception(
                "quote expiration alert failed",
                extra={"quote_number": quote.quote_number},
            )
            continue
        summary.raised += 1

    logger.info(
        "quote expiration alerts reconciled",
        extra={"checked": summary.checked, "raised": summary.raised, "errors": summary.errors},
    )
    return summary
