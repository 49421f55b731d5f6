# app/domain/reconciliation/schemas.py
from typing import List, Optional

from pydantic import BaseModel

from app.domain.alerts.schemas import ReconcileSummary


class ScheduledReconciliationOut(BaseModel):
    stock: Optional[ReconcileSummary] = None
    quotes: Optional[ReconcileSummary] = None
    failed_passes: List[str] = []
