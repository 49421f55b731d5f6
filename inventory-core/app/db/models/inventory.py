# app/db/models/inventory.py
from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, Uuid
from sqlalchemy.sql import func
from uuid import uuid4

from app.db.base import Base


class InventoryItem(Base):
    __tablename__ = "inventory"

    """On-hand stock for a single SKU.

    Quantity only moves through the stock ledger (manufacturer orders) or the
    explicit add/set inventory operations; min_stock is the reorder threshold
    used when deriving low-stock alerts.
    """

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    sku = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=True)
    location = Column(String, nullable=True)

    quantity = Column(Integer, nullable=False, default=0)
    min_stock = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_inventory_quantity_non_negative"),
        CheckConstraint("min_stock >= 0", name="ck_inventory_min_stock_non_negative"),
    )
