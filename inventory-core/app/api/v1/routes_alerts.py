# app/api/v1/routes_alerts.py
from typing import List, Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import utcnow
from app.db.base import get_db
from app.db.models.alerts import AlertSeverity, AlertType
from app.domain.alerts.schemas import AlertOut, AlertUpdate
from app.domain.alerts.service import delete_alert, get_alerts, update_alert
from app.domain.reconciliation.schemas import ScheduledReconciliationOut
from app.domain.reconciliation.service import run_scheduled_reconciliation


router = APIRouter(prefix="/api/v1/alerts", tags=["alerts"])


@router.get("", response_model=List[AlertOut])
async def list_alerts_endpoint(
    resolved: Literal["false", "true", "all"] = "false",
    type: Optional[AlertType] = None,
    severity: Optional[AlertSeverity] = None,
    limit: int = Query(default=50, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    # "all" drops the resolved filter
    resolved_filter = None if resolved == "all" else resolved == "true"
    alerts = await get_alerts(db, resolved=resolved_filter, type=type, severity=severity, limit=limit)
    return [AlertOut.from_model(alert) for alert in alerts]


@router.post("/check", response_model=ScheduledReconciliationOut)
async def run_alert_checks_endpoint(
    db: AsyncSession = Depends(get_db),
):
    return await run_scheduled_reconciliation(db)


@router.patch("/{alert_id}", response_model=AlertOut)
async def update_alert_endpoint(
    alert_id: UUID,
    payload: AlertUpdate,
    db: AsyncSession = Depends(get_db),
):
    alert = await update_alert(db, alert_id, payload, utcnow())
    return AlertOut.from_model(alert)


@router.delete("/{alert_id}", status_code=204)
async def delete_alert_endpoint(
    alert_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    await delete_alert(db, alert_id)
