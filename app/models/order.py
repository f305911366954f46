from enum import Enum
from sqlalchemy import Column, String, Integer, DateTime, Index, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import declared_attr
from app.core.database import Base
import uuid


def generate_cuid():
    """Generate a cuid-like ID."""
    return str(uuid.uuid4())


class ColorMode(str, Enum):
    BW = "bw"
    COLOR = "color"


class OrderStatus(str, Enum):
    CREATED = "created"  # legacy rows only, new orders start at PENDING_PAYMENT
    PENDING_PAYMENT = "pending_payment"
    PAID = "paid"


# Forward-only lifecycle
STATUS_ORDER = [OrderStatus.CREATED, OrderStatus.PENDING_PAYMENT, OrderStatus.PAID]

# Largest value the 32-bit integer columns can hold
MAX_INTEGER_VALUE = 2**31 - 1


class PrintOrder(Base):
    __tablename__ = "print_orders"

    id = Column(String, primary_key=True, default=generate_cuid)
    code = Column(String(6), nullable=False)
    bucket = Column(String, nullable=False)
    file_path = Column(String, nullable=False)
    file_name = Column(String, nullable=False)
    color_mode = Column(String, nullable=False)  # 'bw' | 'color'
    copies = Column(Integer, nullable=False)
    pages = Column(Integer, nullable=False)
    amount_cents = Column(Integer, nullable=False)
    status = Column(String, nullable=False, default=OrderStatus.PENDING_PAYMENT.value)
    payment_ref = Column(String, nullable=True)
    paid_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @declared_attr
    def __table_args__(cls):
        return (
            Index(f"ix_{cls.__tablename__}_code", "code"),
            Index(f"ix_{cls.__tablename__}_payment_ref", "payment_ref"),
            Index(f"ix_{cls.__tablename__}_status_created_at", "status", "created_at"),
            CheckConstraint("copies >= 1", name=f"ck_{cls.__tablename__}_copies_positive"),
            CheckConstraint("pages >= 1", name=f"ck_{cls.__tablename__}_pages_positive"),
        )

    def can_transition_to(self, new_status: OrderStatus) -> bool:
        """True when moving to new_status keeps the lifecycle moving forward."""
        current = OrderStatus(self.status)
        return STATUS_ORDER.index(new_status) > STATUS_ORDER.index(current)

    def __repr__(self):
        return f"<PrintOrder(code={self.code}, status={self.status}, amount_cents={self.amount_cents})>"
