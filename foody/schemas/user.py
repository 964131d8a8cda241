"""
User and authentication schemas
"""
from pydantic import BaseModel, EmailStr, Field, field_validator
from foody.database.models.user import UserRole
from foody.schemas.common import Pagination
from typing import Optional, List
from datetime import datetime


def _check_name(value: str) -> str:
    value = value.strip()
    if len(value) < 2:
        raise ValueError("Name must be at least 2 characters")
    if len(value) > 100:
        raise ValueError("Name cannot exceed 100 characters")
    return value


def _check_password(value: str) -> str:
    if len(value) < 6:
        raise ValueError("Password must be at least 6 characters")
    return value


# === Requests ===

class UserRegister(BaseModel):
    """Schema for self-registration. Registered users are always customers."""
    name: str
    email: EmailStr
    password: str

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_name(v)

    @field_validator('password')
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password(v)


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own profile"""
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    avatar: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return _check_name(v) if v is not None else v


class PasswordUpdate(BaseModel):
    current_password: str
    new_password: str

    @field_validator('new_password')
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password(v)


class UserCreate(UserRegister):
    """Admin-side creation, role may be chosen"""
    role: UserRole = UserRole.CUSTOMER


class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return _check_name(v) if v is not None else v


class RoleUpdate(BaseModel):
    role: str

    @field_validator('role')
    @classmethod
    def validate_role(cls, v: str) -> str:
        if v not in {role.value for role in UserRole}:
            raise ValueError("Invalid role")
        return v


# === Responses ===

class UserResponse(BaseModel):
    """Public user representation, never includes the password hash"""
    id: int
    name: str
    email: str
    avatar: str
    role: UserRole
    created_at: datetime

    model_config = {"from_attributes": True}


class UserBrief(BaseModel):
    id: int
    name: str
    email: str

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    success: bool = True
    token: str
    user: UserResponse


class UserEnvelope(BaseModel):
    success: bool = True
    user: UserResponse


class UserListResponse(BaseModel):
    success: bool = True
    users: List[UserResponse]
    pagination: Pagination
