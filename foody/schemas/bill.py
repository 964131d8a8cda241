"""
Bill schemas
"""
from pydantic import BaseModel
from foody.database.models.bill import PaymentMethod, BillStatus, BillRequester
from foody.schemas.common import Pagination
from foody.schemas.order import OrderResponse
from foody.schemas.user import UserBrief
from typing import Optional, List
from datetime import datetime


class BillGenerate(BaseModel):
    payment_method: PaymentMethod = PaymentMethod.CASH


class BillRequest(BaseModel):
    payment_method: PaymentMethod = PaymentMethod.CASH
    call_waiter: bool = False


class BillPayment(BaseModel):
    payment_method: PaymentMethod = PaymentMethod.CASH


class BillResponse(BaseModel):
    id: int
    bill_number: Optional[str]
    order_id: int
    order: Optional[OrderResponse] = None
    user_id: int
    user: Optional[UserBrief] = None
    subtotal: float
    tax: float
    total: float
    payment_method: PaymentMethod
    status: BillStatus
    requested_by: BillRequester
    call_waiter: bool
    is_paid: bool
    paid_at: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class BillEnvelope(BaseModel):
    success: bool = True
    bill: BillResponse


class BillListResponse(BaseModel):
    success: bool = True
    bills: List[BillResponse]
    pagination: Pagination


class BillCollection(BaseModel):
    success: bool = True
    bills: List[BillResponse]
