"""
Order lifecycle: checkout from the cart and status transitions
"""
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from foody.database.models import Order, OrderItem, OrderStatus, User
from foody.repositories import CartRepository, OrderRepository
from foody.schemas.order import OrderCreate
from foody.services.pricing import compute_totals
from foody.core.security import ensure_owner_or_staff
from foody.core.i18n_logger import get_i18n_logger


logger = get_i18n_logger(__name__)


class OrderService:
    """
    Service layer for orders.

    Orders are never deleted and their totals never change after checkout.
    Only the status (staff) and the paid flag (bill payment) are mutated.
    """

    @staticmethod
    async def get_order(db: AsyncSession, order_id: int) -> Order:
        order = await OrderRepository(db).get(order_id)
        if order is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
        return order

    @staticmethod
    async def get_visible_order(db: AsyncSession, order_id: int, user: User) -> Order:
        """Order by id, readable by its owner or by staff"""
        order = await OrderService.get_order(db, order_id)
        ensure_owner_or_staff(user, order.user_id)
        return order

    @staticmethod
    async def create_from_cart(db: AsyncSession, user: User, data: OrderCreate) -> Order:
        """
        Place an order from the user's cart.

        The line items are a snapshot of each product's name, price and image.
        Creating the order and emptying the cart are committed together.

        Raises:
            HTTPException 400: If the cart is empty
        """
        user_id = user.id
        cart = await CartRepository(db).get_or_create(user_id)
        lines = [item for item in cart.items if item.product is not None]
        if not lines:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cart is empty")

        items = [
            OrderItem(
                product_id=item.product.id,
                name=item.product.name,
                price=item.product.price,
                quantity=item.quantity,
                image=item.product.image or "",
            )
            for item in lines
        ]
        subtotal, tax, total = compute_totals((item.price, item.quantity) for item in items)

        order = Order(
            user_id=user_id,
            table_number=data.table_number,
            notes=data.notes,
            status=OrderStatus.PENDING,
            subtotal=subtotal,
            tax=tax,
            total=total,
            is_paid=False,
            items=items,
        )

        try:
            db.add(order)
            cart.items.clear()
            await db.commit()
        except Exception:
            await db.rollback()
            logger.exception("order.create.failed", user_id=user_id)
            raise

        await db.refresh(order)
        logger.info(
            "order.created",
            order_id=order.id,
            user_id=user_id,
            item_count=len(items),
            total=order.total,
        )
        return order

    @staticmethod
    async def update_status(db: AsyncSession, order_id: int, new_status: OrderStatus, actor: User) -> Order:
        """
        Set an order's status. Any value of OrderStatus is accepted from any
        current status; totals and the paid flag are left alone.
        """
        order = await OrderService.get_order(db, order_id)
        old_status = order.status

        order.status = new_status
        await db.commit()
        await db.refresh(order)

        logger.info(
            "order.status.changed",
            order_id=order.id,
            old_status=old_status.value,
            new_status=new_status.value,
            actor_id=actor.id,
        )
        return order
