"""
Review and announcement schemas
"""
from pydantic import BaseModel, Field, field_validator
from foody.database.models.announcement import AnnouncementType
from foody.schemas.common import Pagination
from foody.schemas.user import UserBrief
from typing import Optional, List
from datetime import datetime


# === Reviews ===

class ReviewCreate(BaseModel):
    rating: int
    comment: str = ""

    @field_validator('rating')
    @classmethod
    def validate_rating(cls, v: int) -> int:
        if not 1 <= v <= 5:
            raise ValueError("Rating must be between 1 and 5")
        return v

    @field_validator('comment')
    @classmethod
    def validate_comment(cls, v: str) -> str:
        v = v.strip()
        if len(v) > 500:
            raise ValueError("Comment cannot exceed 500 characters")
        return v


class ReviewUpdate(BaseModel):
    rating: Optional[int] = None
    comment: Optional[str] = None

    @field_validator('rating')
    @classmethod
    def validate_rating(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and not 1 <= v <= 5:
            raise ValueError("Rating must be between 1 and 5")
        return v

    @field_validator('comment')
    @classmethod
    def validate_comment(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if len(v) > 500:
            raise ValueError("Comment cannot exceed 500 characters")
        return v


class ReviewProduct(BaseModel):
    id: int
    name: str
    image: str

    model_config = {"from_attributes": True}


class ReviewResponse(BaseModel):
    id: int
    user_id: int
    user: Optional[UserBrief] = None
    product_id: int
    product: Optional[ReviewProduct] = None
    order_id: Optional[int] = None
    rating: int
    comment: str
    created_at: datetime

    model_config = {"from_attributes": True}


class ReviewEnvelope(BaseModel):
    success: bool = True
    review: ReviewResponse


class ReviewListResponse(BaseModel):
    success: bool = True
    reviews: List[ReviewResponse]
    pagination: Pagination


class ReviewCollection(BaseModel):
    success: bool = True
    reviews: List[ReviewResponse]


# === Announcements ===

class AnnouncementCreate(BaseModel):
    title: str = ""
    body: str = ""
    type: AnnouncementType = AnnouncementType.NOTICE
    is_pinned: bool = False
    is_active: bool = True
    expires_at: Optional[datetime] = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        if len(v) > 100:
            raise ValueError("Title cannot exceed 100 characters")
        return v

    @field_validator('body')
    @classmethod
    def validate_body(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Body is required")
        if len(v) > 1000:
            raise ValueError("Body cannot exceed 1000 characters")
        return v


class AnnouncementUpdate(BaseModel):
    title: Optional[str] = None
    body: Optional[str] = None
    type: Optional[AnnouncementType] = None
    is_pinned: Optional[bool] = None
    is_active: Optional[bool] = None
    expires_at: Optional[datetime] = None

    @field_validator('title', 'body')
    @classmethod
    def validate_text(cls, v: Optional[str], info) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError(f"{info.field_name.capitalize()} is required")
        limit = 100 if info.field_name == 'title' else 1000
        if len(v) > limit:
            raise ValueError(f"{info.field_name.capitalize()} cannot exceed {limit} characters")
        return v


class AnnouncementResponse(BaseModel):
    id: int
    title: str
    body: str
    type: AnnouncementType
    is_pinned: bool
    is_active: bool
    expires_at: Optional[datetime] = None
    created_by_id: Optional[int] = None
    created_by: Optional[UserBrief] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class AnnouncementEnvelope(BaseModel):
    success: bool = True
    announcement: AnnouncementResponse


class AnnouncementListResponse(BaseModel):
    success: bool = True
    announcements: List[AnnouncementResponse]
    pagination: Pagination


class AnnouncementCollection(BaseModel):
    success: bool = True
    announcements: List[AnnouncementResponse]
