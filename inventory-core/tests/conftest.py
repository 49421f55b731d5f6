"""
Shared fixtures for the inventory-core test suite.

Every test gets its own in-memory SQLite database (aiosqlite) with the full
schema created, plus small factories for seeding inventory, orders and quotes.
"""

import os

os.environ.setdefault("DB_URL", "sqlite+aiosqlite://")

from datetime import datetime, timezone
from typing import Optional

import httpx
import pytest
import pytest_asyncio
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base, get_db
from app.db.models.alerts import Alert, AlertType
from app.db.models.inventory import InventoryItem
from app.db.models.manufacturer_orders import ManufacturerOrder, ManufacturerOrderItem
from app.db.models.quotes import Quote, QuoteStatus
from app.main import app as api


NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    api.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=api)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
    api.dependency_overrides.clear()


# =============================================================================
# Factories
# =============================================================================


@pytest.fixture
def make_item(db):
    async def _make(sku: str, quantity: int, min_stock: int = 0, name: Optional[str] = None):
        item = InventoryItem(sku=sku, name=name, quantity=quantity, min_stock=min_stock)
        db.add(item)
        await db.commit()
        return item

    return _make


@pytest.fixture
def make_order(db):
    async def _make(lines, order_number: str = "MO-1001", applied_at: Optional[datetime] = None):
        order = ManufacturerOrder(order_number=order_number, inventory_applied_at=applied_at)
        db.add(order)
        await db.flush()
        for line_number, (sku, quantity) in enumerate(lines, start=1):
            db.add(ManufacturerOrderItem(
                order_id=order.id,
                line_number=line_number,
                sku=sku,
                quantity_ordered=quantity,
                quantity_received=0,
            ))
        await db.commit()
        return order.id

    return _make


@pytest.fixture
def make_quote(db):
    async def _make(
        quote_number: str,
        valid_until: Optional[datetime] = None,
        status: QuoteStatus = QuoteStatus.SENT,
        customer_name: str = "Acme Safety",
    ):
        quote = Quote(
            quote_number=quote_number,
            status=status,
            customer_name=customer_name,
            total=0,
            valid_until=valid_until,
        )
        db.add(quote)
        await db.commit()
        return quote.id

    return _make


# =============================================================================
# Readers (always bypass the identity map; bulk UPDATEs do not touch it)
# =============================================================================


@pytest.fixture
def quantity_of(db):
    async def _read(sku: str) -> Optional[int]:
        result = await db.execute(select(InventoryItem.quantity).where(InventoryItem.sku == sku))
        return result.scalar_one_or_none()

    return _read


@pytest.fixture
def alerts_for(db):
    async def _read(entity_id: str, type: Optional[AlertType] = None, resolved: Optional[bool] = None):
        db.expire_all()
        query = select(Alert).where(Alert.entity_id == entity_id).order_by(Alert.created_at)
        if type is not None:
            query = query.where(Alert.type == type)
        if resolved is not None:
            query = query.where(Alert.resolved.is_(resolved))
        result = await db.execute(query)
        return list(result.scalars().all())

    return _read


@pytest.fixture
def order_of(db):
    async def _read(order_id):
        db.expire_all()
        result = await db.execute(select(ManufacturerOrder).where(ManufacturerOrder.id == order_id))
        return result.scalar_one()

    return _read
