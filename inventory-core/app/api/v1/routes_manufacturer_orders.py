# app/api/v1/routes_manufacturer_orders.py
from fastapi import APIRouter, Depends
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import Permission, require_permission
from app.db.base import get_db
from app.domain.manufacturer_orders.schemas import (
    ApplyToInventoryOut,
    ManufacturerOrderCreate,
    ManufacturerOrderOut,
)
from app.domain.manufacturer_orders.service import create_manufacturer_order, get_manufacturer_order
from app.domain.reconciliation.service import apply_order_to_inventory


router = APIRouter(
    prefix="/api/v1/manufacturer-orders",
    tags=["manufacturer-orders"],
    dependencies=[Depends(require_permission(Permission.MANUFACTURER_ORDERS))],
)


@router.post("", response_model=ManufacturerOrderOut, status_code=201)
async def create_order_endpoint(
    payload: ManufacturerOrderCreate,
    db: AsyncSession = Depends(get_db),
):
    return await create_manufacturer_order(db, payload)


@router.get("/{order_id}", response_model=ManufacturerOrderOut)
async def get_order_endpoint(
    order_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    return await get_manufacturer_order(db, order_id)


@router.post(
    "/{order_id}/apply-to-inventory",
    response_model=ApplyToInventoryOut,
    response_model_exclude_none=True,
)
async def apply_to_inventory_endpoint(
    order_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    # safe to call again: an applied order answers applied=false
    return await apply_order_to_inventory(db, order_id)
