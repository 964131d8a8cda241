"""
Product (menu item) database model with discount and promotion fields
"""
from enum import StrEnum
from sqlalchemy import (
    Column, Integer, String, Float, Boolean, DateTime, Text, ForeignKey,
    Enum as SQLAlchemyEnum
)
from sqlalchemy.orm import relationship, validates
from foody.database.base import Base, TimestampMixin


class DiscountType(StrEnum):
    NONE = "none"
    PERCENTAGE = "percentage"
    FIXED = "fixed"
    BOGO = "bogo"           # Buy X get Y
    COMBO = "combo"


class ProductFlag(StrEnum):
    """Promotional flags that staff can toggle on a product"""
    FEATURED = "featured"
    HOT_DEAL = "hot-deal"
    DAILY_SPECIAL = "daily-special"
    CHEF_SPECIAL = "chef-special"

    @property
    def column(self) -> str:
        return {
            ProductFlag.FEATURED: "is_featured",
            ProductFlag.HOT_DEAL: "is_hot_deal",
            ProductFlag.DAILY_SPECIAL: "is_daily_special",
            ProductFlag.CHEF_SPECIAL: "is_chef_special",
        }[self]


def _cents(value: float) -> float:
    return round(value * 100) / 100


class Product(TimestampMixin, Base):
    """
    A dish on the menu.

    rating and num_reviews are denormalized aggregates of the product's
    reviews, recomputed by ReviewService after every review mutation.
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    price = Column(Float, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    image = Column(String(500), nullable=False, default="")

    rating = Column(Float, nullable=False, default=0.0)
    num_reviews = Column(Integer, nullable=False, default=0)

    is_available = Column(Boolean, nullable=False, default=True)
    is_veg = Column(Boolean, nullable=False, default=False)

    # === Discounts ===
    discount_type = Column(SQLAlchemyEnum(DiscountType), nullable=False, default=DiscountType.NONE)
    discount_value = Column(Float, nullable=False, default=0.0)
    bogo_buy_quantity = Column(Integer, nullable=False, default=0)
    bogo_get_quantity = Column(Integer, nullable=False, default=0)
    combo_price = Column(Float, nullable=False, default=0.0)

    # === Promotions ===
    is_featured = Column(Boolean, nullable=False, default=False, index=True)
    is_hot_deal = Column(Boolean, nullable=False, default=False, index=True)
    is_daily_special = Column(Boolean, nullable=False, default=False, index=True)
    is_chef_special = Column(Boolean, nullable=False, default=False, index=True)
    offer_label = Column(String(100), nullable=False, default="")
    offer_valid_until = Column(DateTime(timezone=True), nullable=True)

    category = relationship("Category", lazy="selectin")

    @property
    def final_price(self) -> float:
        """Price after the active discount"""
        discount_value = self.discount_value or 0.0
        if self.discount_type == DiscountType.PERCENTAGE:
            return _cents(self.price - self.price * discount_value / 100)
        if self.discount_type == DiscountType.FIXED:
            return max(0.0, _cents(self.price - discount_value))
        if self.discount_type == DiscountType.COMBO and (self.combo_price or 0) > 0:
            return self.combo_price
        return self.price

    @property
    def savings_amount(self) -> float:
        return _cents(self.price - self.final_price)

    @property
    def savings_percentage(self) -> float:
        if not self.price:
            return 0.0
        return _cents((self.price - self.final_price) / self.price * 100)

    @validates('price', 'discount_value', 'combo_price')
    def validate_money(self, key, value):
        """Prices and discounts are never negative"""
        if value is not None and value < 0:
            raise ValueError(f"{key} cannot be negative")
        return value

    def __repr__(self):
        return f"<Product {self.id} {self.name} @ {self.price}>"
