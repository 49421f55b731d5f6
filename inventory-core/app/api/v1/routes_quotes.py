# app/api/v1/routes_quotes.py
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import Permission, require_permission
from app.core.clock import utcnow
from app.db.base import get_db
from app.domain.quotes.numbering import allocate_quote_number
from app.domain.quotes.schemas import QuoteCreate, QuoteNumberOut, QuoteOut
from app.domain.quotes.service import create_quote, get_quote


router = APIRouter(
    prefix="/api/v1/quotes",
    tags=["quotes"],
    dependencies=[Depends(require_permission(Permission.QUOTING))],
)


@router.get("/next-number", response_model=QuoteNumberOut)
async def next_quote_number_endpoint(
    db: AsyncSession = Depends(get_db),
):
    # a preview only; creation re-allocates under the unique constraint
    return QuoteNumberOut(quote_number=await allocate_quote_number(db, utcnow()))


@router.post("", response_model=QuoteOut, status_code=201)
async def create_quote_endpoint(
    payload: QuoteCreate,
    db: AsyncSession = Depends(get_db),
):
    return await create_quote(db, payload, utcnow())


@router.get("/{quote_id}", response_model=QuoteOut)
async def get_quote_endpoint(
    quote_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    return await get_quote(db, quote_id)
