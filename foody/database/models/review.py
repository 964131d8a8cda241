"""
Product review model
"""
from sqlalchemy import Column, Integer, Text, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from foody.database.base import Base, TimestampMixin


class Review(TimestampMixin, Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="SET NULL"), nullable=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False, default="")

    user = relationship("User", lazy="selectin")
    product = relationship("Product", lazy="selectin")

    __table_args__ = (
        UniqueConstraint('user_id', 'product_id', name='unique_user_product_review'),
        CheckConstraint('rating >= 1 AND rating <= 5', name='review_rating_range'),
    )
