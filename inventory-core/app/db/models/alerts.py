# app/db/models/alerts.py
import enum
import uuid

from sqlalchemy import Boolean, Column, DateTime, Enum, Index, String, Text, Uuid, text
from sqlalchemy.sql import func

from app.db.base import Base


class AlertType(str, enum.Enum):
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"
    QUOTE_EXPIRED = "quote_expired"
    PENDING_ORDER = "pending_order"
    MANUFACTURER_ORDER = "manufacturer_order"


class AlertSeverity(str, enum.Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


STOCK_ALERT_TYPES = (AlertType.LOW_STOCK, AlertType.OUT_OF_STOCK)

# predicate shared by the partial unique index and the upsert conflict target
OPEN_ALERT_PREDICATE = "NOT resolved"


def _enum_values(enum_cls):
    return [m.value for m in enum_cls]


class Alert(Base):
    __tablename__ = "alerts"

    """A derived notification about a product, a quote or the system.

    Only one unresolved alert may exist per (type, entity_type, entity_id);
    re-detection updates that row in place. Resolving is terminal for the
    occurrence; a later occurrence gets a fresh row.
    """

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    type = Column(Enum(AlertType, name="alert_type_enum", values_callable=_enum_values), nullable=False)
    severity = Column(Enum(AlertSeverity, name="alert_severity_enum", values_callable=_enum_values), nullable=False)
    title = Column(String, nullable=False)
    message = Column(Text, nullable=False)

    entity_type = Column(String, nullable=True)  # "product" | "quote"
    entity_id = Column(String, nullable=True)

    read = Column(Boolean, nullable=False, default=False)
    resolved = Column(Boolean, nullable=False, default=False)
    resolved_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index(
            "uq_alerts_open_subject",
            "type",
            "entity_type",
            "entity_id",
            unique=True,
            postgresql_where=text(OPEN_ALERT_PREDICATE),
            sqlite_where=text(OPEN_ALERT_PREDICATE),
        ),
        Index("ix_alerts_resolved_created", "resolved", "created_at"),
    )
