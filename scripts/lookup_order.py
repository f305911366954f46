#!/usr/bin/env python3
"""
Look up a print order by pickup code from the command line.

Usage:
  python -m scripts.lookup_order --code=ABC234
"""

import argparse
import sys
from sqlalchemy.orm import Session

from app.core.database import SessionLocal
from app.services.order_store import OrderStore


def lookup_order(code: str) -> bool:
    db: Session = SessionLocal()

    try:
        order = OrderStore(db).get_by_code(code.upper())

        if not order:
            print(f"Error: No order found with code {code}")
            return False

        print(f"Order {order.code}")
        print(f"  Status:   {order.status}")
        print(f"  File:     {order.file_name} ({order.bucket}/{order.file_path})")
        print(f"  Job:      {order.pages} pages x {order.copies} copies, {order.color_mode}")
        print(f"  Amount:   {order.amount_cents} cents")
        print(f"  Checkout: {order.payment_ref or '-'}")
        print(f"  Paid at:  {order.paid_at.isoformat() if order.paid_at else '-'}")
        return True

    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Show one print order")
    parser.add_argument("--code", required=True, help="Pickup code")

    args = parser.parse_args()

    if not lookup_order(args.code):
        sys.exit(1)


if __name__ == "__main__":
    main()
