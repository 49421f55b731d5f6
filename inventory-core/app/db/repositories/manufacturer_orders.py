# app/db/repositories/manufacturer_orders.py
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.manufacturer_orders import (
    ManufacturerOrder,
    ManufacturerOrderItem,
    ManufacturerOrderStatus,
)


async def get_order_by_id(
    db: AsyncSession,
    order_id: UUID
) -> Optional[ManufacturerOrder]:
    result = await db.execute(
        select(ManufacturerOrder)
        .where(ManufacturerOrder.id == order_id)
        # the guard column is written by bulk UPDATE; never trust the identity map
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_items_for_order(
    db: AsyncSession,
    order_id: UUID
) -> List[ManufacturerOrderItem]:
    result = await db.execute(
        select(ManufacturerOrderItem)
        .where(ManufacturerOrderItem.order_id == order_id)
        .order_by(ManufacturerOrderItem.line_number)
    )
    return list(result.scalars().all())


async def mark_order_applied(
    db: AsyncSession,
    order_id: UUID,
    now: datetime,
) -> bool:
    """Arm the idempotency guard; False if the order was already marked (or vanished)."""
    result = await db.execute(
        update(ManufacturerOrder)
        .where(
            ManufacturerOrder.id == order_id,
            ManufacturerOrder.inventory_applied_at.is_(None),
        )
        .values(
            inventory_applied_at=now,
            status=ManufacturerOrderStatus.DELIVERED,
            actual_delivery=now.date(),
            updated_at=now,
        )
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1
