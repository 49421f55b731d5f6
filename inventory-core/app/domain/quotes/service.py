# app/domain/quotes/service.py
import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.errors import NotFoundError, QuoteNumberConflictError
from app.db.models.quotes import Quote
from app.db.repositories.quotes import get_quote_by_id
from .numbering import allocate_quote_number
from .schemas import QuoteCreate

logger = logging.getLogger(__name__)


async def create_quote(
    db: AsyncSession,
    data: QuoteCreate,
    now: datetime,
) -> Quote:
    attempts = settings.QUOTE_NUMBER_MAX_ATTEMPTS

    for attempt in range(1, attempts + 1):
        quote_number = await allocate_quote_number(db, now)
        quote = Quote(
            quote_number=quote_number,
            status=data.status,
            customer_name=data.customer_name,
            customer_email=data.customer_email,
            total=data.total,
            valid_until=data.valid_until,
            notes=data.notes,
        )
        db.add(quote)
        try:
            await db.commit()
        except IntegrityError:
            # another request took this number between our scan and insert
            await db.rollback()
            logger.warning(
                "quote number collision, retrying",
                extra={"quote_number": quote_number, "attempt": attempt},
            )
            continue

        await db.refresh(quote)
        logger.info("quote created", extra={"quote_number": quote_number})
        return quote

    raise QuoteNumberConflictError(
        f"Could not allocate a unique quote number after {attempts} attempts"
    )


async def get_quote(
    db: AsyncSession,
    quote_id: UUID,
) -> Quote:
    quote = await get_quote_by_id(db, quote_id)
    if quote is None:
        raise NotFoundError("Quote not found")
    return quote
