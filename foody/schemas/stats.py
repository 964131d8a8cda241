"""
Dashboard statistics schemas
"""
from pydantic import BaseModel
from typing import Optional, List, Dict


class DailyOrders(BaseModel):
    date: str
    count: int
    revenue: float


class TopProduct(BaseModel):
    name: str
    total_quantity: int
    total_revenue: float


class CategoryShare(BaseModel):
    name: str
    total_quantity: int
    total_revenue: float


class PaymentMethodShare(BaseModel):
    method: str
    count: int
    total: float


class HourlyOrders(BaseModel):
    hour: int
    count: int


class DashboardStats(BaseModel):
    total_orders: int
    pending_orders: int
    total_products: int
    total_users: int
    total_bills: int
    total_revenue: float
    today_orders: int
    today_revenue: float
    avg_order_value: float
    revenue_growth: Optional[float]
    order_growth: Optional[float]
    orders_by_status: Dict[str, int]
    daily_orders: List[DailyOrders]
    top_products: List[TopProduct]
    category_breakdown: List[CategoryShare]
    payment_method_breakdown: List[PaymentMethodShare]
    hourly_orders: List[HourlyOrders]


class DashboardStatsResponse(BaseModel):
    success: bool = True
    stats: DashboardStats
