from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from app.core.clock import as_utc
from app.core.errors import InventoryMarkerWriteError, NotFoundError
from app.db.models.manufacturer_orders import ManufacturerOrderStatus
from app.domain.inventory import ledger
from app.domain.inventory.ledger import apply_order_to_stock

pytestmark = pytest.mark.asyncio

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


async def test_applies_known_skus_and_reports_missing_ones(make_item, make_order, quantity_of, db):
    await make_item("A", quantity=10)
    order_id = await make_order([("A", 5), ("B", 3)])

    result = await apply_order_to_stock(db, order_id, NOW)

    assert [(i.sku, i.quantity) for i in result.applied] == [("A", 5)]
    assert result.skipped == ["B"]
    assert result.idempotent is False
    assert await quantity_of("A") == 15
    assert await quantity_of("B") is None


async def test_second_application_is_a_no_op(make_item, make_order, quantity_of, db):
    await make_item("A", quantity=10)
    order_id = await make_order([("A", 5)])

    await apply_order_to_stock(db, order_id, NOW)
    again = await apply_order_to_stock(db, order_id, NOW + timedelta(minutes=5))

    assert again.idempotent is True
    assert again.applied == []
    assert await quantity_of("A") == 15


async def test_marks_order_delivered(make_item, make_order, order_of, db):
    await make_item("A", quantity=0)
    order_id = await make_order([("A", 2)])

    await apply_order_to_stock(db, order_id, NOW)

    order = await order_of(order_id)
    assert as_utc(order.inventory_applied_at) == NOW
    assert order.status == ManufacturerOrderStatus.DELIVERED
    assert order.actual_delivery == date(2026, 3, 15)


async def test_zero_quantity_lines_are_ignored(make_item, make_order, quantity_of, db):
    await make_item("A", quantity=4)
    await make_item("Z", quantity=1)
    order_id = await make_order([("A", 1), ("Z", 0)])

    result = await apply_order_to_stock(db, order_id, NOW)

    assert [i.sku for i in result.applied] == ["A"]
    assert result.skipped == []
    assert await quantity_of("Z") == 1


async def test_large_quantities_are_not_clamped(make_item, make_order, quantity_of, db):
    await make_item("A", quantity=1)
    order_id = await make_order([("A", 1_000_000)])

    await apply_order_to_stock(db, order_id, NOW)

    assert await quantity_of("A") == 1_000_001


async def test_orders_touching_the_same_sku_accumulate(make_item, make_order, quantity_of, db):
    await make_item("A", quantity=10)
    first = await make_order([("A", 5)], order_number="MO-1")
    second = await make_order([("A", 7)], order_number="MO-2")

    await apply_order_to_stock(db, first, NOW)
    await apply_order_to_stock(db, second, NOW)

    assert await quantity_of("A") == 22


async def test_unknown_order_is_not_found(db):
    with pytest.raises(NotFoundError):
        await apply_order_to_stock(db, uuid4(), NOW)


async def test_order_without_items_is_not_found(make_order, order_of, db):
    order_id = await make_order([])

    with pytest.raises(NotFoundError):
        await apply_order_to_stock(db, order_id, NOW)

    assert (await order_of(order_id)).inventory_applied_at is None


async def test_failed_increment_skips_only_that_sku(make_item, make_order, quantity_of, db, monkeypatch):
    await make_item("A", quantity=1)
    await make_item("B", quantity=1)
    order_id = await make_order([("A", 2), ("B", 3)])
    real_increment = ledger.increment_quantity

    async def flaky_increment(session, sku, delta, now):
        if sku == "A":
            raise OperationalError("UPDATE inventory", {}, Exception("lock timeout"))
        return await real_increment(session, sku, delta, now)

    monkeypatch.setattr(ledger, "increment_quantity", flaky_increment)

    result = await apply_order_to_stock(db, order_id, NOW)

    assert result.skipped == ["A"]
    assert [i.sku for i in result.applied] == ["B"]
    assert await quantity_of("A") == 1
    assert await quantity_of("B") == 4


async def test_marker_write_failure_is_distinct_and_keeps_stock(
    make_item, make_order, quantity_of, order_of, db, monkeypatch
):
    await make_item("A", quantity=10)
    order_id = await make_order([("A", 5)])

    async def broken_marker(session, order_id, now):
        raise OperationalError("UPDATE manufacturer_orders", {}, Exception("connection lost"))

    monkeypatch.setattr(ledger, "mark_order_applied", broken_marker)

    with pytest.raises(InventoryMarkerWriteError) as excinfo:
        await apply_order_to_stock(db, order_id, NOW)

    assert excinfo.value.applied_skus == ["A"]
    assert excinfo.value.order_id == order_id
    assert await quantity_of("A") == 15
    assert (await order_of(order_id)).inventory_applied_at is None


async def test_marker_already_armed_by_concurrent_run_is_reported(make_item, make_order, db, monkeypatch):
    await make_item("A", quantity=10)
    order_id = await make_order([("A", 5)])

    async def lost_race(session, order_id, now):
        return False

    monkeypatch.setattr(ledger, "mark_order_applied", lost_race)

    with pytest.raises(InventoryMarkerWriteError):
        await apply_order_to_stock(db, order_id, NOW)
