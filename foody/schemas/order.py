"""
Cart and order schemas
"""
from pydantic import BaseModel, Field, field_validator
from foody.database.models.order import OrderStatus
from foody.schemas.common import Pagination
from foody.schemas.catalog import ProductResponse
from foody.schemas.user import UserBrief
from typing import Optional, List
from datetime import datetime


# === Cart ===

class CartAdd(BaseModel):
    product_id: int
    quantity: int = Field(1, ge=1)


class CartQuantityUpdate(BaseModel):
    """A quantity of zero or less removes the line"""
    quantity: int


class CartItemResponse(BaseModel):
    product_id: int
    quantity: int
    product: ProductResponse

    model_config = {"from_attributes": True}


class CartResponse(BaseModel):
    id: int
    user_id: int
    items: List[CartItemResponse]
    subtotal: float

    model_config = {"from_attributes": True}


class CartEnvelope(BaseModel):
    success: bool = True
    cart: CartResponse


# === Orders ===

class OrderCreate(BaseModel):
    """Checkout payload. Items come from the caller's cart, not the request."""
    table_number: str = Field("", max_length=20)
    notes: str = Field("", max_length=1000)

    @field_validator('table_number', 'notes', mode='before')
    @classmethod
    def strip_text(cls, v):
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v


class OrderStatusUpdate(BaseModel):
    status: OrderStatus = Field(..., description="New order status")


class OrderItemResponse(BaseModel):
    """Line item snapshot taken when the order was placed"""
    product_id: Optional[int]
    name: str
    price: float
    quantity: int
    image: str

    model_config = {"from_attributes": True}


class OrderResponse(BaseModel):
    id: int
    user_id: int
    user: Optional[UserBrief] = None
    items: List[OrderItemResponse]
    table_number: str
    notes: str
    status: OrderStatus
    subtotal: float
    tax: float
    total: float
    is_paid: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class OrderEnvelope(BaseModel):
    success: bool = True
    order: OrderResponse


class OrderListResponse(BaseModel):
    success: bool = True
    orders: List[OrderResponse]
    pagination: Pagination


class OrderCollection(BaseModel):
    success: bool = True
    orders: List[OrderResponse]
