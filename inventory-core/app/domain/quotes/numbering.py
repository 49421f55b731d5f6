# app/domain/quotes/numbering.py
from datetime import datetime
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import QuoteNumberExhaustedError
from app.db.repositories.quotes import list_quote_numbers_with_prefix

SUFFIX_WIDTH = 4
MAX_SUFFIX = 10 ** SUFFIX_WIDTH - 1


def period_prefix(now: datetime) -> str:
    """Two-digit year prefix, e.g. "26" for 2026."""
    return f"{now.year % 100:02d}"


def parse_suffix(number: str, prefix: str) -> int | None:
    if not number or not number.startswith(prefix):
        return None
    suffix = number[len(prefix):]
    if not (suffix.isascii() and suffix.isdigit()):
        return None
    return int(suffix)


def next_quote_number(prefix: str, existing: Iterable[str]) -> str:
    """Max issued suffix in the period plus one, zero-padded: 260005 -> 260006.

    Numbers whose suffix is not a plain non-negative integer are ignored.
    Raises QuoteNumberExhaustedError once the four-digit range is used up.
    """
    suffixes = [n for n in (parse_suffix(number, prefix) for number in existing) if n is not None]
    next_suffix = max(suffixes, default=0) + 1
    if next_suffix > MAX_SUFFIX:
        raise QuoteNumberExhaustedError(
            f"Quote numbers for period {prefix} are exhausted ({MAX_SUFFIX} issued)"
        )
    return f"{prefix}{next_suffix:0{SUFFIX_WIDTH}d}"


async def allocate_quote_number(
    db: AsyncSession,
    now: datetime,
) -> str:
    """Best-effort next number; the unique constraint on quote_number is the real guard."""
    prefix = period_prefix(now)
    existing = await list_quote_numbers_with_prefix(db, prefix)
    return next_quote_number(prefix, existing)
