#!/usr/bin/env python3
"""
Stale order report.
Lists orders that are still waiting for payment after a number of hours,
usually abandoned checkouts. Read-only: nothing is changed or deleted.

Usage:
  python -m scripts.stale_orders [--hours=24]
"""

import argparse
from datetime import timedelta
from typing import List
from sqlalchemy.orm import Session

from app.core.database import SessionLocal
from app.models.order import PrintOrder
from app.services.order_store import OrderStore


def find_stale_orders(db: Session, hours: float) -> List[PrintOrder]:
    return OrderStore(db).list_stale_pending(timedelta(hours=hours))


def format_order(order: PrintOrder) -> str:
    created = order.created_at.isoformat() if order.created_at else "unknown"
    return (
        f"{order.code}  created {created}  {order.amount_cents} cents  "
        f"checkout {order.payment_ref or '-'}  file {order.bucket}/{order.file_path}"
    )


def report_stale_orders(hours: float) -> int:
    """
    Print every stale pending_payment order.

    Args:
        hours: Minimum age of an order to be reported

    Returns:
        int: Number of orders reported
    """
    db: Session = SessionLocal()

    try:
        orders = find_stale_orders(db, hours)
        if not orders:
            print(f"No orders pending payment for more than {hours:g} hours")
            return 0

        print(f"{len(orders)} order(s) pending payment for more than {hours:g} hours:")
        for order in orders:
            print(f"  {format_order(order)}")
        return len(orders)

    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="List orders stuck in pending_payment")
    parser.add_argument("--hours", type=float, default=24, help="Minimum age in hours (default: 24)")

    args = parser.parse_args()

    report_stale_orders(args.hours)


if __name__ == "__main__":
    main()
