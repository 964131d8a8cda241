"""
Category and product schemas
"""
from pydantic import BaseModel, Field, field_validator
from foody.database.models.product import DiscountType
from foody.schemas.common import Pagination
from typing import Optional, List
from datetime import datetime


# === Categories ===

class CategoryCreate(BaseModel):
    name: str
    image: str = ""
    is_active: bool = True

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Category name is required")
        return v


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    image: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Category name is required")
        return v


class CategoryResponse(BaseModel):
    id: int
    name: str
    image: str
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class CategoryEnvelope(BaseModel):
    success: bool = True
    category: CategoryResponse


class CategoryListResponse(BaseModel):
    success: bool = True
    categories: List[CategoryResponse]


# === Products ===

class DiscountFields(BaseModel):
    discount_type: DiscountType = DiscountType.NONE
    discount_value: float = Field(0.0, ge=0)
    bogo_buy_quantity: int = Field(0, ge=0)
    bogo_get_quantity: int = Field(0, ge=0)
    combo_price: float = Field(0.0, ge=0)
    offer_label: str = ""
    offer_valid_until: Optional[datetime] = None

    @field_validator('discount_value')
    @classmethod
    def validate_percentage(cls, v: float, info) -> float:
        if info.data.get('discount_type') == DiscountType.PERCENTAGE and v > 100:
            raise ValueError("Percentage discount cannot exceed 100")
        return v


class ProductCreate(DiscountFields):
    name: str
    description: str = ""
    price: float
    category_id: int
    image: str = ""
    is_available: bool = True
    is_veg: bool = False
    is_featured: bool = False
    is_hot_deal: bool = False
    is_daily_special: bool = False
    is_chef_special: bool = False

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Product name is required")
        return v

    @field_validator('price')
    @classmethod
    def validate_price(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Price must be a positive number")
        return v


class ProductUpdate(BaseModel):
    """Partial update; only fields sent are written"""
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    category_id: Optional[int] = None
    image: Optional[str] = None
    is_available: Optional[bool] = None
    is_veg: Optional[bool] = None
    is_featured: Optional[bool] = None
    is_hot_deal: Optional[bool] = None
    is_daily_special: Optional[bool] = None
    is_chef_special: Optional[bool] = None
    offer_label: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Product name is required")
        return v

    @field_validator('price')
    @classmethod
    def validate_price(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v < 0:
            raise ValueError("Price must be a positive number")
        return v


class DiscountUpdate(DiscountFields):
    discount_type: DiscountType


class CategoryBrief(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class ProductResponse(BaseModel):
    id: int
    name: str
    description: str
    price: float
    final_price: float
    savings_amount: float
    savings_percentage: float
    category_id: int
    category: Optional[CategoryBrief] = None
    image: str
    rating: float
    num_reviews: int
    is_available: bool
    is_veg: bool
    discount_type: DiscountType
    discount_value: float
    bogo_buy_quantity: int
    bogo_get_quantity: int
    combo_price: float
    is_featured: bool
    is_hot_deal: bool
    is_daily_special: bool
    is_chef_special: bool
    offer_label: str
    offer_valid_until: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class ProductEnvelope(BaseModel):
    success: bool = True
    product: ProductResponse


class ProductFlagEnvelope(ProductEnvelope):
    message: str


class ProductListResponse(BaseModel):
    success: bool = True
    products: List[ProductResponse]
    pagination: Pagination


class ProductCollection(BaseModel):
    """Unpaginated product list (promotional shelves)"""
    success: bool = True
    products: List[ProductResponse]
