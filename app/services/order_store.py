from datetime import datetime, timedelta, timezone
from typing import List, Optional
import logging
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from app.core.errors import OrderStoreError
from app.models.order import PrintOrder, OrderStatus

# Configure logging
logger = logging.getLogger("order_store")


class OrderStore:
    """Reads and writes print_orders rows. Every failure rolls the session back."""

    def __init__(self, db: Session):
        self.db = db

    def code_exists(self, code: str) -> bool:
        return self.get_by_code(code) is not None

    def get_by_code(self, code: str) -> Optional[PrintOrder]:
        try:
            return self.db.query(PrintOrder).filter(PrintOrder.code == code).first()
        except SQLAlchemyError as e:
            self._fail("get_by_code", e)

    def get_by_payment_ref(self, payment_ref: str) -> Optional[PrintOrder]:
        try:
            return self.db.query(PrintOrder).filter(PrintOrder.payment_ref == payment_ref).first()
        except SQLAlchemyError as e:
            self._fail("get_by_payment_ref", e)

    def create(self, order_data: dict) -> PrintOrder:
        """Insert a new order row and return it refreshed."""
        try:
            order = PrintOrder(**order_data)
            self.db.add(order)
            self.db.commit()
            self.db.refresh(order)
            logger.info(f"Inserted order {order.code} with status {order.status}")
            return order
        except SQLAlchemyError as e:
            self._fail("create", e)

    def set_payment_ref(self, order: PrintOrder, payment_ref: str) -> PrintOrder:
        try:
            order.payment_ref = payment_ref
            self.db.commit()
            self.db.refresh(order)
            return order
        except SQLAlchemyError as e:
            self._fail("set_payment_ref", e)

    def mark_paid(self, order: PrintOrder, paid_at: Optional[datetime] = None) -> PrintOrder:
        """
        Move an order to paid.

        An order that is already paid is left untouched, so repeated webhook
        deliveries keep the first paid_at.
        """
        if order.status == OrderStatus.PAID.value:
            logger.info(f"Order {order.code} already paid, nothing to update")
            return order
        if not order.can_transition_to(OrderStatus.PAID):
            raise OrderStoreError(f"Order {order.code} cannot move from {order.status} to paid")

        try:
            order.status = OrderStatus.PAID.value
            order.paid_at = paid_at or datetime.now(timezone.utc)
            self.db.commit()
            self.db.refresh(order)
            logger.info(f"Order {order.code} marked paid")
            return order
        except SQLAlchemyError as e:
            self._fail("mark_paid", e)

    def list_stale_pending(self, older_than: timedelta, now: Optional[datetime] = None) -> List[PrintOrder]:
        """Orders still waiting for payment that were created before now - older_than."""
        cutoff = (now or datetime.now(timezone.utc)) - older_than
        try:
            return self.db.query(PrintOrder).filter(
                PrintOrder.status == OrderStatus.PENDING_PAYMENT.value,
                PrintOrder.created_at < cutoff
            ).order_by(PrintOrder.created_at).all()
        except SQLAlchemyError as e:
            self._fail("list_stale_pending", e)

    def _fail(self, operation: str, error: SQLAlchemyError):
        self.db.rollback()
        logger.error(f"Database error in {operation}: {str(error)}")
        raise OrderStoreError(f"Database error: {str(error)}")
