"""
Shopping cart endpoints (authenticated)
"""
from fastapi import APIRouter
from foody.core.dependencies import DbDependency, CurrentUser
from foody.schemas.order import CartAdd, CartQuantityUpdate, CartEnvelope
from foody.services.cart_service import CartService

router = APIRouter(tags=["Cart"])


@router.get("", response_model=CartEnvelope)
async def get_cart(current_user: CurrentUser, db: DbDependency):
    return CartEnvelope(cart=await CartService.get_cart(db, current_user))


@router.post("/add", response_model=CartEnvelope)
async def add_to_cart(data: CartAdd, current_user: CurrentUser, db: DbDependency):
    cart = await CartService.add_item(db, current_user, data.product_id, data.quantity)
    return CartEnvelope(cart=cart)


@router.put("/{product_id}", response_model=CartEnvelope)
async def update_cart_item(product_id: int, data: CartQuantityUpdate, current_user: CurrentUser, db: DbDependency):
    cart = await CartService.update_item(db, current_user, product_id, data.quantity)
    return CartEnvelope(cart=cart)


@router.delete("/{product_id}", response_model=CartEnvelope)
async def remove_from_cart(product_id: int, current_user: CurrentUser, db: DbDependency):
    return CartEnvelope(cart=await CartService.remove_item(db, current_user, product_id))


@router.delete("", response_model=CartEnvelope)
async def clear_cart(current_user: CurrentUser, db: DbDependency):
    return CartEnvelope(cart=await CartService.clear(db, current_user))
