"""
Cart and order repositories
"""
from typing import Optional
from sqlalchemy import or_, select, exists
from foody.database.models import Cart, Order, OrderItem, OrderStatus
from foody.repositories.base import BaseRepository, Page


class CartRepository(BaseRepository[Cart]):
    model = Cart

    async def get_or_create(self, user_id: int) -> Cart:
        """Carts are created lazily the first time a user touches theirs"""
        cart = await self.find_one(Cart.user_id == user_id)
        if cart is None:
            cart = await self.create(user_id=user_id)
        return cart

    async def reload(self, cart_id: int) -> Cart:
        """Re-read a cart so every line and its product reflect the committed rows"""
        result = await self.db.execute(
            self.select().where(Cart.id == cart_id).execution_options(populate_existing=True)
        )
        return result.scalar_one()


class OrderRepository(BaseRepository[Order]):
    model = Order

    def _filters(self, status: Optional[OrderStatus], search: Optional[str]) -> list:
        criteria = []
        if status is not None:
            criteria.append(Order.status == status)
        if search:
            pattern = f"%{search}%"
            criteria.append(or_(
                Order.table_number.ilike(pattern),
                Order.items.any(OrderItem.name.ilike(pattern)),
            ))
        return criteria

    async def list_for_user(
        self,
        user_id: int,
        status: Optional[OrderStatus] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Page[Order]:
        return await self.paginate(
            Order.user_id == user_id,
            *self._filters(status, search),
            page=page, limit=limit,
            order_by=(Order.created_at.desc(), Order.id.desc()),
        )

    async def list_all(
        self,
        status: Optional[OrderStatus] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Page[Order]:
        return await self.paginate(
            *self._filters(status, search),
            page=page, limit=limit,
            order_by=(Order.created_at.desc(), Order.id.desc()),
        )

    async def recent_for_user(self, user_id: int, limit: int = 50) -> list[Order]:
        return await self.find(
            Order.user_id == user_id,
            order_by=(Order.created_at.desc(), Order.id.desc()),
            limit=limit,
        )

    async def find_fulfilled_with_product(self, user_id: int, product_id: int) -> Optional[Order]:
        """An order of the user, served or completed, that contains the product"""
        contains_product = exists(
            select(OrderItem.id).where(
                OrderItem.order_id == Order.id,
                OrderItem.product_id == product_id,
            )
        )
        return await self.find_one(
            Order.user_id == user_id,
            Order.status.in_([OrderStatus.SERVED, OrderStatus.COMPLETED]),
            contains_product,
        )
