# app/domain/alerts/service.py
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import BusinessError, NotFoundError
from app.db.models.alerts import Alert, AlertSeverity, AlertType
from app.db.repositories.alerts import get_alert_by_id, list_alerts
from .schemas import AlertUpdate


async def get_alerts(
    db: AsyncSession,
    resolved: Optional[bool] = False,
    type: Optional[AlertType] = None,
    severity: Optional[AlertSeverity] = None,
    limit: int = 50,
) -> List[Alert]:
    return await list_alerts(db, resolved=resolved, type=type, severity=severity, limit=limit)


async def update_alert(
    db: AsyncSession,
    alert_id: UUID,
    data: AlertUpdate,
    now: datetime,
) -> Alert:
    alert = await get_alert_by_id(db, alert_id)
    if alert is None:
        raise NotFoundError("Alert not found")

    if data.read is not None:
        alert.read = data.read
    if data.resolved is not None:
        alert.resolved = data.resolved
        alert.resolved_at = now if data.resolved else None

    try:
        await db.commit()
    except IntegrityError:
        # reopening collides with a newer open alert for the same subject
        await db.rollback()
        raise BusinessError("An open alert already exists for this subject")

    await db.refresh(alert)
    return alert


async def delete_alert(
    db: AsyncSession,
    alert_id: UUID,
) -> None:
    alert = await get_alert_by_id(db, alert_id)
    if alert is None:
        raise NotFoundError("Alert not found")

    await db.delete(alert)
    await db.commit()
