"""
Menu category model
"""
from sqlalchemy import Column, Integer, String, Boolean
from foody.database.base import Base, TimestampMixin


class Category(TimestampMixin, Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)
    image = Column(String(500), nullable=False, default="")
    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<Category {self.id} {self.name}>"
