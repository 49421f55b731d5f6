# app/domain/alerts/schemas.py
from datetime import datetime
from typing import Annotated, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field

from app.db.models.alerts import Alert, AlertSeverity, AlertType


class ProductSubject(BaseModel):
    kind: Literal["product"] = "product"
    sku: str


class QuoteSubject(BaseModel):
    kind: Literal["quote"] = "quote"
    quote_id: UUID


class NoSubject(BaseModel):
    kind: Literal["none"] = "none"


AlertSubject = Annotated[
    Union[ProductSubject, QuoteSubject, NoSubject],
    Field(discriminator="kind"),
]


def subject_to_columns(subject: AlertSubject) -> tuple[Optional[str], Optional[str]]:
    """Flatten a subject into the (entity_type, entity_id) column pair."""
    if isinstance(subject, ProductSubject):
        return "product", subject.sku
    if isinstance(subject, QuoteSubject):
        return "quote", str(subject.quote_id)
    return None, None


def subject_from_columns(entity_type: Optional[str], entity_id: Optional[str]) -> AlertSubject:
    if entity_type == "product" and entity_id:
        return ProductSubject(sku=entity_id)
    if entity_type == "quote" and entity_id:
        return QuoteSubject(quote_id=UUID(entity_id))
    return NoSubject()


class AlertDraft(BaseModel):
    """Desired alert content for one subject, before it is written."""

    type: AlertType
    severity: AlertSeverity
    title: str
    message: str
    subject: AlertSubject


class AlertOut(BaseModel):
    id: UUID
    type: AlertType
    severity: AlertSeverity
    title: str
    message: str
    subject: AlertSubject
    read: bool
    resolved: bool
    resolved_at: Optional[datetime]
    created_at: datetime

    @classmethod
    def from_model(cls, alert: Alert) -> "AlertOut":
        return cls(
            id=alert.id,
            type=alert.type,
            severity=alert.severity,
            title=alert.title,
            message=alert.message,
            subject=subject_from_columns(alert.entity_type, alert.entity_id),
            read=alert.read,
            resolved=alert.resolved,
            resolved_at=alert.resolved_at,
            created_at=alert.created_at,
        )


class AlertUpdate(BaseModel):
    read: Optional[bool] = None
    resolved: Optional[bool] = None


class ReconcileSummary(BaseModel):
    """Counts from one derivation pass over inventory items or quotes."""

    checked: int = 0
    raised: int = 0
    resolved: int = 0
    errors: int = 0
