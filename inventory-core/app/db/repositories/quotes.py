# app/db/repositories/quotes.py
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import Row, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.quotes import Quote, QuoteStatus


async def get_quote_by_id(
    db: AsyncSession,
    quote_id: UUID
) -> Optional[Quote]:
    result = await db.execute(
        select(Quote).where(Quote.id == quote_id)
    )
    return result.scalar_one_or_none()


async def list_quote_numbers_with_prefix(
    db: AsyncSession,
    prefix: str
) -> List[str]:
    result = await db.execute(
        select(Quote.quote_number).where(Quote.quote_number.like(f"{prefix}%"))
    )
    return list(result.scalars().all())


async def list_expiry_candidates(
    db: AsyncSession,
    horizon: datetime
) -> List[Row]:
    """Quotes not yet marked EXPIRED whose valid_until falls on or before ``horizon``."""
    result = await db.execute(
        select(
            Quote.id,
            Quote.quote_number,
            Quote.customer_name,
            Quote.status,
            Quote.valid_until,
        )
        .where(
            Quote.status != QuoteStatus.EXPIRED,
            Quote.valid_until.is_not(None),
            Quote.valid_until <= horizon,
        )
        .order_by(Quote.valid_until)
    )
    return list(result.all())
