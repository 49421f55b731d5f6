# app/domain/manufacturer_orders/service.py
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import BusinessError, NotFoundError
from app.db.models.manufacturer_orders import (
    ManufacturerOrder,
    ManufacturerOrderItem,
    ManufacturerOrderStatus,
)
from app.db.repositories.manufacturer_orders import get_items_for_order, get_order_by_id
from .schemas import ManufacturerOrderCreate, ManufacturerOrderOut, OrderItemOut


async def create_manufacturer_order(
    db: AsyncSession,
    data: ManufacturerOrderCreate,
) -> ManufacturerOrderOut:
    order = ManufacturerOrder(
        order_number=data.order_number,
        manufacturer_name=data.manufacturer_name,
        expected_delivery=data.expected_delivery,
        notes=data.notes,
        status=ManufacturerOrderStatus.PENDING,
    )
    db.add(order)

    try:
        await db.flush()
        for line_number, item in enumerate(data.items, start=1):
            db.add(ManufacturerOrderItem(
                order_id=order.id,
                line_number=line_number,
                sku=item.sku,
                product_name=item.product_name,
                quantity_ordered=item.quantity_ordered,
                quantity_received=0,
            ))
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise BusinessError(f"Order number {data.order_number} already exists")

    return await get_manufacturer_order(db, order.id)


async def get_manufacturer_order(
    db: AsyncSession,
    order_id: UUID,
) -> ManufacturerOrderOut:
    order = await get_order_by_id(db, order_id)
    if order is None:
        raise NotFoundError("Order not found")

    items = await get_items_for_order(db, order_id)

    out = ManufacturerOrderOut.model_validate(order)
    out.items = [OrderItemOut.model_validate(item) for item in items]
    return out
