# app/db/repositories/inventory.py
from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import Row, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.base import dialect_insert
from app.db.models.inventory import InventoryItem


async def get_inventory_item(
    db: AsyncSession,
    sku: str
) -> Optional[InventoryItem]:
    result = await db.execute(
        select(InventoryItem)
        .where(InventoryItem.sku == sku)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def list_inventory_items(
    db: AsyncSession,
    sku: Optional[str] = None
) -> List[InventoryItem]:
    query = (
        select(InventoryItem)
        .order_by(InventoryItem.sku)
        .execution_options(populate_existing=True)
    )
    if sku:
        query = query.where(InventoryItem.sku == sku)
    result = await db.execute(query)
    return list(result.scalars().all())


async def list_stock_levels(
    db: AsyncSession,
    skus: Optional[Sequence[str]] = None
) -> List[Row]:
    """Plain (sku, name, quantity, min_stock) rows, detached from the session."""
    query = select(
        InventoryItem.sku,
        InventoryItem.name,
        InventoryItem.quantity,
        InventoryItem.min_stock,
    ).order_by(InventoryItem.sku)
    if skus is not None:
        query = query.where(InventoryItem.sku.in_(list(skus)))
    result = await db.execute(query)
    return list(result.all())


async def increment_quantity(
    db: AsyncSession,
    sku: str,
    delta: int,
    now: datetime,
) -> bool:
    """Add ``delta`` to the SKU's quantity in a single UPDATE.

    Returns False when no inventory row exists for the SKU.
    """
    result = await db.execute(
        update(InventoryItem)
        .where(InventoryItem.sku == sku)
        .values(quantity=InventoryItem.quantity + delta, updated_at=now)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


async def set_quantity(
    db: AsyncSession,
    sku: str,
    quantity: int,
    now: datetime,
) -> bool:
    result = await db.execute(
        update(InventoryItem)
        .where(InventoryItem.sku == sku)
        .values(quantity=quantity, updated_at=now)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


async def add_or_create_quantity(
    db: AsyncSession,
    sku: str,
    delta: int,
    now: datetime,
    name: Optional[str] = None,
    min_stock: int = 0,
) -> None:
    insert = dialect_insert(db)
    stmt = insert(InventoryItem).values(
        sku=sku,
        name=name,
        quantity=delta,
        min_stock=min_stock,
        created_at=now,
        updated_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[InventoryItem.sku],
        set_={
            "quantity": InventoryItem.quantity + stmt.excluded.quantity,
            "updated_at": stmt.excluded.updated_at,
        },
    )
    await db.execute(stmt)
