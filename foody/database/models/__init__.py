"""
Database models package initialization
Centralized imports for all database models
"""
from foody.database.models.user import User, UserRole
from foody.database.models.category import Category
from foody.database.models.product import Product, DiscountType, ProductFlag
from foody.database.models.cart import Cart, CartItem
from foody.database.models.order import Order, OrderItem, OrderStatus, FULFILLED_STATUSES
from foody.database.models.bill import Bill, BillStatus, BillRequester, PaymentMethod
from foody.database.models.review import Review
from foody.database.models.announcement import Announcement, AnnouncementType

__all__ = [
    # Users
    'User',
    'UserRole',

    # Menu
    'Category',
    'Product',
    'DiscountType',
    'ProductFlag',

    # Ordering
    'Cart',
    'CartItem',
    'Order',
    'OrderItem',
    'OrderStatus',
    'FULFILLED_STATUSES',

    # Billing
    'Bill',
    'BillStatus',
    'BillRequester',
    'PaymentMethod',

    # Engagement
    'Review',
    'Announcement',
    'AnnouncementType',
]
