# app/domain/inventory/service.py
from datetime import datetime
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundError
from app.db.models.inventory import InventoryItem
from app.db.repositories.inventory import (
    add_or_create_quantity,
    get_inventory_item,
    list_inventory_items,
    set_quantity,
)
from .schemas import StockAdd, StockSet


async def list_inventory(
    db: AsyncSession,
    sku: Optional[str] = None,
) -> List[InventoryItem]:
    return await list_inventory_items(db, sku)


async def add_stock(
    db: AsyncSession,
    data: StockAdd,
    now: datetime,
) -> InventoryItem:
    await add_or_create_quantity(db, data.sku, data.quantity, now, name=data.name)
    await db.commit()
    return await _reload(db, data.sku)


async def set_stock(
    db: AsyncSession,
    sku: str,
    data: StockSet,
    now: datetime,
) -> InventoryItem:
    found = await set_quantity(db, sku, data.quantity, now)
    if not found:
        raise NotFoundError(f"SKU {sku} not found in inventory")
    await db.commit()
    return await _reload(db, sku)


async def _reload(db: AsyncSession, sku: str) -> InventoryItem:
    # the write went through a bulk statement; read the row back fresh
    return await get_inventory_item(db, sku)
