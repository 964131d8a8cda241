"""
Announcement model: notices shown to customers on the dashboard
"""
from enum import StrEnum
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Text, ForeignKey, Enum as SQLAlchemyEnum
)
from sqlalchemy.orm import relationship
from foody.database.base import Base, TimestampMixin


class AnnouncementType(StrEnum):
    OFFER = "offer"
    EVENT = "event"
    NOTICE = "notice"
    CLOSURE = "closure"
    UPDATE = "update"


class Announcement(TimestampMixin, Base):
    __tablename__ = "announcements"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(100), nullable=False)
    body = Column(Text, nullable=False)
    type = Column(SQLAlchemyEnum(AnnouncementType), nullable=False, default=AnnouncementType.NOTICE)
    is_pinned = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=True, index=True)
    created_by_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    created_by = relationship("User", lazy="selectin")
