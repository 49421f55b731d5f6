# app/db/repositories/alerts.py
from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID, uuid4

from sqlalchemy import select, text, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.base import dialect_insert
from app.db.models.alerts import Alert, AlertSeverity, AlertType, OPEN_ALERT_PREDICATE


async def upsert_open_alert(
    db: AsyncSession,
    *,
    type: AlertType,
    severity: AlertSeverity,
    title: str,
    message: str,
    entity_type: str,
    entity_id: str,
    now: datetime,
) -> Alert:
    """Insert the alert, or refresh the open one for the same subject.

    One statement against the partial unique index on unresolved alerts, so two
    concurrent callers cannot both insert.
    """
    insert = dialect_insert(db)
    stmt = insert(Alert).values(
        id=uuid4(),
        type=type,
        severity=severity,
        title=title,
        message=message,
        entity_type=entity_type,
        entity_id=entity_id,
        read=False,
        resolved=False,
        created_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[Alert.type, Alert.entity_type, Alert.entity_id],
        index_where=text(OPEN_ALERT_PREDICATE),
        set_={
            "title": stmt.excluded.title,
            "message": stmt.excluded.message,
            "severity": stmt.excluded.severity,
            "read": False,
            "created_at": stmt.excluded.created_at,
        },
    ).returning(Alert)

    result = await db.scalars(stmt, execution_options={"populate_existing": True})
    return result.one()


async def insert_alert(
    db: AsyncSession,
    *,
    type: AlertType,
    severity: AlertSeverity,
    title: str,
    message: str,
    now: datetime,
) -> Alert:
    # system-wide alerts have no subject and are never deduplicated
    alert = Alert(
        type=type,
        severity=severity,
        title=title,
        message=message,
        read=False,
        resolved=False,
        created_at=now,
    )
    db.add(alert)
    await db.flush()
    return alert


async def resolve_open_alerts(
    db: AsyncSession,
    *,
    types: Sequence[AlertType],
    entity_type: str,
    entity_id: str,
    now: datetime,
) -> int:
    result = await db.execute(
        update(Alert)
        .where(
            Alert.type.in_(list(types)),
            Alert.entity_type == entity_type,
            Alert.entity_id == entity_id,
            Alert.resolved.is_(False),
        )
        .values(resolved=True, resolved_at=now)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


async def get_alert_by_id(
    db: AsyncSession,
    alert_id: UUID
) -> Optional[Alert]:
    result = await db.execute(
        select(Alert)
        .where(Alert.id == alert_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def list_alerts(
    db: AsyncSession,
    *,
    resolved: Optional[bool] = False,
    type: Optional[AlertType] = None,
    severity: Optional[AlertSeverity] = None,
    limit: int = 50,
) -> List[Alert]:
    query = select(Alert)
    if resolved is not None:
        query = query.where(Alert.resolved.is_(resolved))
    if type is not None:
        query = query.where(Alert.type == type)
    if severity is not None:
        query = query.where(Alert.severity == severity)
    query = (
        query.order_by(Alert.created_at.desc())
        .limit(limit)
        .execution_options(populate_existing=True)
    )

    result = await db.execute(query)
    return list(result.scalars().all())
