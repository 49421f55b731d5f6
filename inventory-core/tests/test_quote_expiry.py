from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from app.db.models.alerts import AlertSeverity, AlertType
from app.db.models.quotes import QuoteStatus
from app.domain.alerts.quote_expiry import (
    QuoteDeadline,
    days_until,
    derive_quote_alert,
    reconcile_quote_expiration_alerts,
)

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


def deadline(valid_until, status=QuoteStatus.SENT):
    return QuoteDeadline(uuid4(), "260042", "Acme Safety", status, valid_until)


class TestDeriveQuoteAlert:
    def test_one_day_left_is_critical(self):
        draft = derive_quote_alert(deadline(NOW + timedelta(days=1)), NOW)

        assert draft.type == AlertType.QUOTE_EXPIRED
        assert draft.severity == AlertSeverity.CRITICAL
        assert draft.message == "Quote 260042 for Acme Safety expires in 1 day(s)."

    def test_two_days_left_is_warning(self):
        draft = derive_quote_alert(deadline(NOW + timedelta(days=2)), NOW)

        assert draft.severity == AlertSeverity.WARNING

    def test_deadline_at_now_is_critical_with_zero_days_left(self):
        draft = derive_quote_alert(deadline(NOW), NOW)

        assert draft.severity == AlertSeverity.CRITICAL
        assert draft.title == "Quote Expiring: 260042"
        assert draft.message == "Quote 260042 for Acme Safety expires in 0 day(s)."

    def test_outside_the_window_needs_no_alert(self):
        assert derive_quote_alert(deadline(NOW + timedelta(days=10)), NOW) is None

    def test_window_edge_is_inclusive(self):
        assert derive_quote_alert(deadline(NOW + timedelta(days=7)), NOW) is not None
        assert derive_quote_alert(deadline(NOW + timedelta(days=7, seconds=1)), NOW) is None

    def test_partial_days_round_up(self):
        draft = derive_quote_alert(deadline(NOW + timedelta(days=6, hours=2)), NOW)

        assert "expires in 7 day(s)" in draft.message
        assert days_until(NOW + timedelta(hours=1), NOW) == 1

    def test_only_sent_quotes_get_expiring_alerts(self):
        assert derive_quote_alert(deadline(NOW + timedelta(days=1), QuoteStatus.DRAFT), NOW) is None
        assert derive_quote_alert(deadline(NOW + timedelta(days=1), QuoteStatus.ACCEPTED), NOW) is None

    def test_past_due_is_critical_whatever_the_status(self):
        for status in (QuoteStatus.SENT, QuoteStatus.DRAFT, QuoteStatus.ACCEPTED):
            draft = derive_quote_alert(deadline(NOW - timedelta(days=30), status), NOW)
            assert draft.severity == AlertSeverity.CRITICAL
            assert draft.title == "Quote Expired: 260042"

    def test_quotes_already_marked_expired_are_left_alone(self):
        assert derive_quote_alert(deadline(NOW - timedelta(days=1), QuoteStatus.EXPIRED), NOW) is None

    def test_naive_deadlines_are_read_as_utc(self):
        naive = (NOW + timedelta(days=2)).replace(tzinfo=None)

        assert derive_quote_alert(deadline(naive), NOW).severity == AlertSeverity.WARNING


@pytest.mark.asyncio
async def test_reconcile_raises_alerts_for_due_quotes(make_quote, alerts_for, db):
    soon = await make_quote("260001", NOW + timedelta(days=3))
    overdue = await make_quote("260002", NOW - timedelta(days=2), status=QuoteStatus.DRAFT)
    await make_quote("260003", NOW + timedelta(days=20))
    await make_quote("260004", NOW - timedelta(days=2), status=QuoteStatus.EXPIRED)
    await make_quote("260005", None)

    summary = await reconcile_quote_expiration_alerts(db, NOW)

    assert summary.raised == 2
    (soon_alert,) = await alerts_for(str(soon))
    assert soon_alert.severity == AlertSeverity.WARNING
    (overdue_alert,) = await alerts_for(str(overdue))
    assert overdue_alert.severity == AlertSeverity.CRITICAL


@pytest.mark.asyncio
async def test_severity_escalates_in_place(make_quote, alerts_for, db):
    quote_id = await make_quote("260001", NOW + timedelta(days=3))

    await reconcile_quote_expiration_alerts(db, NOW)
    await reconcile_quote_expiration_alerts(db, NOW + timedelta(days=2, hours=12))
    await reconcile_quote_expiration_alerts(db, NOW + timedelta(days=4))

    alerts = await alerts_for(str(quote_id))
    assert len(alerts) == 1
    assert alerts[0].severity == AlertSeverity.CRITICAL
    assert alerts[0].title == "Quote Expired: 260001"
    assert alerts[0].entity_type == "quote"
