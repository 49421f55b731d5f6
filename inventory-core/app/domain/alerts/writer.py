# app/domain/alerts/writer.py
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.alerts import Alert
from app.db.repositories.alerts import insert_alert, upsert_open_alert
from .schemas import AlertDraft, NoSubject, subject_to_columns


async def write_alert(
    db: AsyncSession,
    draft: AlertDraft,
    now: datetime,
) -> Alert:
    """Create the alert, or refresh the open alert already raised for its subject."""
    if isinstance(draft.subject, NoSubject):
        return await insert_alert(
            db,
            type=draft.type,
            severity=draft.severity,
            title=draft.title,
            message=draft.message,
            now=now,
        )

    entity_type, entity_id = subject_to_columns(draft.subject)
    return await upsert_open_alert(
        db,
        type=draft.type,
        severity=draft.severity,
        title=draft.title,
        message=draft.message,
        entity_type=entity_type,
        entity_id=entity_id,
        now=now,
    )
