# app/domain/inventory/schemas.py
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class StockAdd(BaseModel):
    sku: str = Field(min_length=1)
    quantity: int = Field(gt=0)
    name: Optional[str] = None


class StockSet(BaseModel):
    quantity: int = Field(ge=0)


class InventoryItemOut(BaseModel):
    id: UUID
    sku: str
    name: Optional[str]
    location: Optional[str]
    quantity: int
    min_stock: int
    updated_at: datetime

    class Config:
        from_attributes = True


class AppliedItem(BaseModel):
    sku: str
    quantity: int


class LedgerApplication(BaseModel):
    """What one run of the stock ledger did for a manufacturer order."""

    applied: List[AppliedItem] = []
    skipped: List[str] = []
    idempotent: bool = False
