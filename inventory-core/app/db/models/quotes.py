# app/db/models/quotes.py
import enum
import uuid

from sqlalchemy import Column, DateTime, Enum, Index, Numeric, String, Text, Uuid
from sqlalchemy.sql import func

from app.db.base import Base


class QuoteStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    SENT = "SENT"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"


class Quote(Base):
    __tablename__ = "quotes"

    """A customer quote identified by its sequential YYNNNN business number.

    quote_number is unique at the database level; number allocation is a
    best-effort scan, and this constraint is what actually rejects duplicates.
    """

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    quote_number = Column(String, nullable=False, unique=True)
    status = Column(Enum(QuoteStatus, name="quote_status_enum"), nullable=False, default=QuoteStatus.DRAFT)

    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=True)
    total = Column(Numeric(12, 2), nullable=False, default=0)
    valid_until = Column(DateTime(timezone=True), nullable=True)

    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("ix_quotes_status_valid_until", "status", "valid_until"),
    )
