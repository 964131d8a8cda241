"""
Order endpoints: checkout, history, staff queue and status updates
"""
from typing import Optional
from fastapi import APIRouter, Query, status
from foody.core.dependencies import DbDependency, CurrentUser, StaffUser, PaginationDependency
from foody.database.models import OrderStatus
from foody.repositories import OrderRepository
from foody.schemas.order import OrderCreate, OrderStatusUpdate, OrderEnvelope, OrderListResponse
from foody.services.order_service import OrderService

router = APIRouter(tags=["Orders"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=OrderEnvelope)
async def create_order(data: OrderCreate, current_user: CurrentUser, db: DbDependency):
    """
    Place an order from the caller's cart.

    Process:
    1. Refuse an empty cart
    2. Snapshot name, price and image of every cart product
    3. subtotal, 5% tax rounded half-up, total
    4. Empty the cart in the same commit
    """
    order = await OrderService.create_from_cart(db, current_user, data)
    return OrderEnvelope(order=order)


@router.get("/my-orders", response_model=OrderListResponse)
async def my_orders(
    current_user: CurrentUser,
    db: DbDependency,
    pagination: PaginationDependency,
    order_status: Optional[OrderStatus] = Query(None, alias="status"),
    search: Optional[str] = None,
):
    page, limit = pagination
    result = await OrderRepository(db).list_for_user(current_user.id, order_status, search, page, limit)
    return OrderListResponse(orders=result.docs, pagination=result.pagination())


@router.get("/all", response_model=OrderListResponse)
async def all_orders(
    staff: StaffUser,
    db: DbDependency,
    pagination: PaginationDependency,
    order_status: Optional[OrderStatus] = Query(None, alias="status"),
    search: Optional[str] = None,
):
    """Every order, newest first (staff and admins)"""
    page, limit = pagination
    result = await OrderRepository(db).list_all(order_status, search, page, limit)
    return OrderListResponse(orders=result.docs, pagination=result.pagination())


@router.get("/{order_id}", response_model=OrderEnvelope)
async def get_order(order_id: int, current_user: CurrentUser, db: DbDependency):
    """
    Permissions:
    - Customers can only view their own orders
    - Staff can view any order
    """
    return OrderEnvelope(order=await OrderService.get_visible_order(db, order_id, current_user))


@router.put("/{order_id}/status", response_model=OrderEnvelope)
async def update_order_status(order_id: int, data: OrderStatusUpdate, staff: StaffUser, db: DbDependency):
    order = await OrderService.update_status(db, order_id, data.status, staff)
    return OrderEnvelope(order=order)
