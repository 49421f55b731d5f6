# app/domain/quotes/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.db.models.quotes import QuoteStatus


class QuoteCreate(BaseModel):
    customer_name: str = Field(min_length=1)
    customer_email: Optional[str] = None
    total: Decimal = Decimal("0")
    status: QuoteStatus = QuoteStatus.DRAFT
    valid_until: Optional[datetime] = None
    notes: Optional[str] = None


class QuoteOut(BaseModel):
    id: UUID
    quote_number: str
    status: QuoteStatus
    customer_name: str
    customer_email: Optional[str]
    total: Decimal
    valid_until: Optional[datetime]
    notes: Optional[str]

    class Config:
        from_attributes = True


class QuoteNumberOut(BaseModel):
    quote_number: str
