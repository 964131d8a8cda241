"""
API v1 router - combines all v1 endpoints
"""
from fastapi import APIRouter
from foody.api.v1.endpoints import (
    auth, users, categories, products, cart, orders, bills, reviews, stats, announcements
)

# Create main v1 router
api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth")
api_router.include_router(users.router, prefix="/users")
api_router.include_router(categories.router, prefix="/categories")
api_router.include_router(products.router, prefix="/products")
api_router.include_router(cart.router, prefix="/cart")
api_router.include_router(orders.router, prefix="/orders")
api_router.include_router(bills.router, prefix="/bills")
api_router.include_router(reviews.router, prefix="/reviews")
api_router.include_router(stats.router, prefix="/stats")
api_router.include_router(announcements.router, prefix="/announcements")
