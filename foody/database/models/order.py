"""
Order database model
Manages customer orders from checkout to completion
"""
from enum import StrEnum
from sqlalchemy import (
    Column, Integer, String, Float, Boolean, Text, ForeignKey, Enum as SQLAlchemyEnum
)
from sqlalchemy.orm import relationship, validates
from foody.database.base import Base, TimestampMixin


class OrderStatus(StrEnum):
    """Lifecycle of an order through the restaurant"""
    PENDING = "pending"           # Just placed from the cart
    CONFIRMED = "confirmed"       # Accepted by staff
    PREPARING = "preparing"       # Kitchen is working on it
    SERVED = "served"             # Delivered to the table
    COMPLETED = "completed"       # Finished
    CANCELLED = "cancelled"


# Orders in these states entitle the customer to request a bill and to review
# the products they contain
FULFILLED_STATUSES = (OrderStatus.SERVED, OrderStatus.COMPLETED)


class Order(TimestampMixin, Base):
    """
    A customer's order.

    subtotal, tax and total are computed once at checkout (see OrderService)
    and never recomputed; the line items are a price snapshot of the cart.
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    table_number = Column(String(20), nullable=False, default="")
    notes = Column(Text, nullable=False, default="")

    status = Column(
        SQLAlchemyEnum(OrderStatus),
        nullable=False,
        default=OrderStatus.PENDING,
        index=True
    )

    subtotal = Column(Float, nullable=False)
    tax = Column(Float, nullable=False, default=0.0)
    total = Column(Float, nullable=False)
    is_paid = Column(Boolean, nullable=False, default=False)

    user = relationship("User", lazy="selectin")
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
        lazy="selectin",
    )

    def is_fulfilled(self) -> bool:
        return self.status in FULFILLED_STATUSES

    def __repr__(self):
        return f"<Order {self.id} - Table {self.table_number or '-'} - {self.status}>"


class OrderItem(Base):
    """
    One line of an order.

    name, price and image are copied from the product at checkout so later
    menu edits never change what was charged.
    """
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="SET NULL"), nullable=True, index=True)

    name = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    image = Column(String(500), nullable=False, default="")

    order = relationship("Order", back_populates="items")

    @property
    def line_total(self) -> float:
        return self.price * self.quantity

    @validates('quantity')
    def validate_quantity(self, key, value):
        if value < 1:
            raise ValueError("Quantity must be at least 1")
        return value
