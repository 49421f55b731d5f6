# app/api/v1/routes_inventory.py
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import Permission, require_permission
from app.core.clock import utcnow
from app.db.base import get_db
from app.domain.inventory.schemas import InventoryItemOut, StockAdd, StockSet
from app.domain.inventory.service import add_stock, list_inventory, set_stock
from app.domain.reconciliation.service import refresh_stock_alerts


router = APIRouter(prefix="/api/v1/inventory", tags=["inventory"])


@router.get(
    "",
    response_model=List[InventoryItemOut],
    dependencies=[Depends(require_permission(Permission.INVENTORY_VIEWING))],
)
async def list_inventory_endpoint(
    sku: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    return await list_inventory(db, sku)


@router.post(
    "",
    response_model=InventoryItemOut,
    dependencies=[Depends(require_permission(Permission.INVENTORY_EDITING))],
)
async def add_stock_endpoint(
    payload: StockAdd,
    db: AsyncSession = Depends(get_db),
):
    now = utcnow()
    out = InventoryItemOut.model_validate(await add_stock(db, payload, now))
    # snapshot first: a failed refresh rolls back and expires the row
    await refresh_stock_alerts(db, [out.sku], now)
    return out


@router.put(
    "/{sku}/quantity",
    response_model=InventoryItemOut,
    dependencies=[Depends(require_permission(Permission.INVENTORY_EDITING))],
)
async def set_stock_endpoint(
    sku: str,
    payload: StockSet,
    db: AsyncSession = Depends(get_db),
):
    now = utcnow()
    out = InventoryItemOut.model_validate(await set_stock(db, sku, payload, now))
    await refresh_stock_alerts(db, [out.sku], now)
    return out
