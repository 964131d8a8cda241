"""
User database model
"""
from enum import StrEnum
from sqlalchemy import Column, Integer, String, Enum as SQLAlchemyEnum
from foody.database.base import Base, TimestampMixin


class UserRole(StrEnum):
    """User roles in the restaurant system"""
    CUSTOMER = "customer"
    STAFF = "staff"
    ADMIN = "admin"


class User(TimestampMixin, Base):
    """
    User Model for customers and restaurant staff.
    Attributes:
        email: Unique login identifier
        hashed_password: bcrypt hash, never serialized
        role: Access level (customer, staff or admin)
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(100), nullable=False)
    avatar = Column(String(500), nullable=False, default="")
    role = Column(
        SQLAlchemyEnum(UserRole),
        nullable=False,
        default=UserRole.CUSTOMER,
        index=True
    )

    def is_staff(self) -> bool:
        """Staff and admins both run the floor"""
        return self.role in (UserRole.STAFF, UserRole.ADMIN)

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self):
        return f"<User {self.id} {self.email} ({self.role})>"
