"""
Bill database model
A payable invoice derived from exactly one order
"""
from enum import StrEnum
from sqlalchemy import (
    Column, Integer, String, Float, Boolean, DateTime, ForeignKey, Enum as SQLAlchemyEnum
)
from sqlalchemy.orm import relationship
from foody.database.base import Base, TimestampMixin


class PaymentMethod(StrEnum):
    CASH = "cash"
    ESEWA = "esewa"
    KHALTI = "khalti"
    BANK = "bank"


class BillStatus(StrEnum):
    REQUESTED = "requested"       # Asked for by the customer
    GENERATED = "generated"       # Issued by staff
    PAID = "paid"


class BillRequester(StrEnum):
    CUSTOMER = "customer"
    STAFF = "staff"
    ADMIN = "admin"


class Bill(TimestampMixin, Base):
    """
    Bill for an order. Amounts are copied from the order when the bill is
    created. order_id is unique: one bill per order.
    """
    __tablename__ = "bills"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, unique=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    bill_number = Column(String(30), unique=True, nullable=True)

    subtotal = Column(Float, nullable=False)
    tax = Column(Float, nullable=False)
    total = Column(Float, nullable=False)

    payment_method = Column(SQLAlchemyEnum(PaymentMethod), nullable=False, default=PaymentMethod.CASH)
    status = Column(SQLAlchemyEnum(BillStatus), nullable=False, default=BillStatus.GENERATED, index=True)
    requested_by = Column(SQLAlchemyEnum(BillRequester), nullable=False, default=BillRequester.STAFF)
    call_waiter = Column(Boolean, nullable=False, default=False)

    is_paid = Column(Boolean, nullable=False, default=False, index=True)
    paid_at = Column(DateTime(timezone=True), nullable=True)

    order = relationship("Order", lazy="selectin")
    user = relationship("User", lazy="selectin")

    @staticmethod
    def format_number(bill_id: int) -> str:
        return f"BILL-{bill_id:06d}"

    def __repr__(self):
        return f"<Bill {self.bill_number} order={self.order_id} paid={self.is_paid}>"
