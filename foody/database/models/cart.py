"""
Cart models: one cart per user holding (product, quantity) lines
"""
from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship, validates
from foody.database.base import Base, TimestampMixin


class Cart(TimestampMixin, Base):
    """
    A user's in-progress selection. Created lazily on first access,
    emptied when an order is placed, never deleted.
    """
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)

    items = relationship(
        "CartItem",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItem.id",
        lazy="selectin",
    )

    @property
    def subtotal(self) -> float:
        """Sum of price × quantity at current product prices"""
        return sum(item.product.price * item.quantity for item in self.items if item.product)

    def find_item(self, product_id: int) -> "CartItem | None":
        return next((item for item in self.items if item.product_id == product_id), None)


class CartItem(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)

    cart = relationship("Cart", back_populates="items")
    product = relationship("Product", lazy="selectin")

    __table_args__ = (
        UniqueConstraint('cart_id', 'product_id', name='unique_cart_product'),
    )

    @validates('quantity')
    def validate_quantity(self, key, value):
        if value < 1:
            raise ValueError("Quantity must be at least 1")
        return value
