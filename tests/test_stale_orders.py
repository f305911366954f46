"""Tests for the stale pending order report and order lookup scripts."""

from datetime import datetime, timedelta
from unittest.mock import patch

from app.models.order import OrderStatus, PrintOrder
from scripts import lookup_order, stale_orders

NOW = datetime(2026, 3, 1, 12, 0, 0)


def add_order(db_session, code, status, created_at, payment_ref=None):
    order = PrintOrder(
        code=code,
        bucket="paid-print-jobs",
        file_path=f"{code}/1_doc.pdf",
        file_name="doc.pdf",
        color_mode="bw",
        copies=1,
        pages=1,
        amount_cents=200,
        status=status.value,
        payment_ref=payment_ref,
        created_at=created_at,
    )
    db_session.add(order)
    db_session.commit()
    return order


class TestListStalePending:
    def test_only_old_pending_orders(self, db_session, order_store):
        add_order(db_session, "OLD234", OrderStatus.PENDING_PAYMENT, NOW - timedelta(hours=30), "ch_old")
        add_order(db_session, "NEW234", OrderStatus.PENDING_PAYMENT, NOW - timedelta(hours=2), "ch_new")
        add_order(db_session, "PAY234", OrderStatus.PAID, NOW - timedelta(hours=48), "ch_paid")

        stale = order_store.list_stale_pending(timedelta(hours=24), now=NOW)
        assert [order.code for order in stale] == ["OLD234"]

    def test_oldest_first(self, db_session, order_store):
        add_order(db_session, "BBB234", OrderStatus.PENDING_PAYMENT, NOW - timedelta(hours=5))
        add_order(db_session, "AAA234", OrderStatus.PENDING_PAYMENT, NOW - timedelta(hours=9))

        stale = order_store.list_stale_pending(timedelta(hours=1), now=NOW)
        assert [order.code for order in stale] == ["AAA234", "BBB234"]


class TestScripts:
    def test_format_order(self, db_session):
        order = add_order(db_session, "OLD234", OrderStatus.PENDING_PAYMENT, NOW, "ch_old")
        line = stale_orders.format_order(order)
        assert "OLD234" in line
        assert "ch_old" in line
        assert "paid-print-jobs/OLD234/1_doc.pdf" in line

    def test_report_with_no_stale_orders(self, db_session, capsys):
        with patch("scripts.stale_orders.SessionLocal", return_value=db_session):
            assert stale_orders.report_stale_orders(24) == 0
        assert "No orders pending payment" in capsys.readouterr().out

    def test_lookup_found(self, db_session, capsys):
        add_order(db_session, "ABC234", OrderStatus.PAID, NOW, "ch_1")
        with patch("scripts.lookup_order.SessionLocal", return_value=db_session):
            assert lookup_order.lookup_order("abc234") is True
        out = capsys.readouterr().out
        assert "Order ABC234" in out
        assert "paid" in out

    def test_lookup_missing(self, db_session, capsys):
        with patch("scripts.lookup_order.SessionLocal", return_value=db_session):
            assert lookup_order.lookup_order("ZZZZZZ") is False
        assert "No order found" in capsys.readouterr().out
