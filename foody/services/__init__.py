"""
Service layer: business rules on top of the repositories
"""
from foody.services.order_service import OrderService
from foody.services.bill_service import BillService
from foody.services.review_service import ReviewService
from foody.services.cart_service import CartService
from foody.services.stats_service import StatsService
from foody.services.bill_pdf import render_bill_pdf

__all__ = [
    'OrderService',
    'BillService',
    'ReviewService',
    'CartService',
    'StatsService',
    'render_bill_pdf',
]
