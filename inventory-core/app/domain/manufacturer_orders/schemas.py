# app/domain/manufacturer_orders/schemas.py
from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.db.models.manufacturer_orders import ManufacturerOrderStatus
from app.domain.inventory.schemas import AppliedItem


class OrderItemCreate(BaseModel):
    sku: str = Field(min_length=1)
    product_name: Optional[str] = None
    quantity_ordered: int = Field(ge=0)


class ManufacturerOrderCreate(BaseModel):
    order_number: str = Field(min_length=1)
    manufacturer_name: Optional[str] = None
    expected_delivery: Optional[date] = None
    notes: Optional[str] = None
    items: List[OrderItemCreate] = Field(min_length=1)


class OrderItemOut(BaseModel):
    line_number: int
    sku: str
    product_name: Optional[str]
    quantity_ordered: int
    quantity_received: int

    class Config:
        from_attributes = True


class ManufacturerOrderOut(BaseModel):
    id: UUID
    order_number: str
    manufacturer_name: Optional[str]
    status: ManufacturerOrderStatus
    expected_delivery: Optional[date]
    actual_delivery: Optional[date]
    inventory_applied_at: Optional[datetime]
    notes: Optional[str]
    items: List[OrderItemOut] = []

    class Config:
        from_attributes = True


class ApplyToInventoryOut(BaseModel):
    applied: bool
    applied_items: Optional[List[AppliedItem]] = Field(default=None, alias="appliedItems")
    skipped_skus: Optional[List[str]] = Field(default=None, alias="skippedSkus")
    message: Optional[str] = None

    class Config:
        populate_by_name = True
