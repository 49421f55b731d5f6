# app/db/models/manufacturer_orders.py
import enum
import uuid

from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.sql import func

from app.db.base import Base


class ManufacturerOrderStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class ManufacturerOrder(Base):
    __tablename__ = "manufacturer_orders"

    """A purchase order placed with a manufacturer.

    inventory_applied_at is the idempotency guard for receiving stock: it is
    written exactly once, as the last step of applying the order's items to
    inventory, and never cleared.
    """

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    order_number = Column(String, nullable=False, unique=True)
    manufacturer_name = Column(String, nullable=True)

    status = Column(
        Enum(
            ManufacturerOrderStatus,
            name="manufacturer_order_status_enum",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=ManufacturerOrderStatus.PENDING,
    )

    expected_delivery = Column(Date, nullable=True)
    actual_delivery = Column(Date, nullable=True)
    inventory_applied_at = Column(DateTime(timezone=True), nullable=True)

    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("ix_manufacturer_orders_status", "status"),
    )


class ManufacturerOrderItem(Base):
    __tablename__ = "manufacturer_order_items"

    """One SKU line of a manufacturer order."""

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    order_id = Column(Uuid(as_uuid=True), ForeignKey("manufacturer_orders.id", ondelete="CASCADE"), nullable=False)
    line_number = Column(Integer, nullable=False)

    sku = Column(String, nullable=False, index=True)
    product_name = Column(String, nullable=True)

    quantity_ordered = Column(Integer, nullable=False)
    quantity_received = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("ix_manufacturer_order_items_order_line", "order_id", "line_number", unique=True),
    )
