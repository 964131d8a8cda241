"""
Billing: one bill per order, requested by the customer or generated by
staff, then marked paid
"""
from typing import Tuple
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from foody.database.base import utcnow
from foody.database.models import (
    Bill, BillStatus, BillRequester, Order, PaymentMethod, User, UserRole
)
from foody.repositories import BillRepository
from foody.schemas.bill import BillRequest
from foody.services.order_service import OrderService
from foody.core.security import ensure_owner_or_staff
from foody.core.i18n_logger import get_i18n_logger


logger = get_i18n_logger(__name__)


class BillService:
    """
    Service layer for bills.

    Bill creation is idempotent per order: a second request for the same
    order returns the first bill. The unique constraint on bills.order_id
    backs the check-then-insert so two concurrent requests cannot both win.
    """

    @staticmethod
    async def get_bill(db: AsyncSession, bill_id: int) -> Bill:
        bill = await BillRepository(db).get(bill_id)
        if bill is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bill not found")
        return bill

    @staticmethod
    async def get_visible_bill(db: AsyncSession, bill_id: int, user: User) -> Bill:
        bill = await BillService.get_bill(db, bill_id)
        ensure_owner_or_staff(user, bill.user_id)
        return bill

    @staticmethod
    async def _create_once(db: AsyncSession, order: Order, **fields) -> Tuple[Bill, bool]:
        """
        Insert the bill for an order unless one exists.

        Returns:
            (bill, created) where created is False when an existing bill
            was returned
        """
        repository = BillRepository(db)
        existing = await repository.get_by_order(order.id)
        if existing is not None:
            return existing, False

        order_id = order.id
        bill = Bill(
            order_id=order_id,
            user_id=order.user_id,
            subtotal=order.subtotal,
            tax=order.tax,
            total=order.total,
            **fields,
        )
        try:
            db.add(bill)
            await db.flush()
            bill.bill_number = Bill.format_number(bill.id)
            await db.commit()
        except IntegrityError:
            # Another request created the bill between our check and insert
            await db.rollback()
            existing = await repository.get_by_order(order_id)
            if existing is None:
                raise
            logger.info("bill.create.race_lost", order_id=order_id, bill_id=existing.id)
            return existing, False

        await db.refresh(bill)
        logger.info(
            "bill.created",
            bill_id=bill.id,
            bill_number=bill.bill_number,
            order_id=order_id,
            status=bill.status.value,
        )
        return bill, True

    @staticmethod
    async def generate(
        db: AsyncSession, order_id: int, payment_method: PaymentMethod, actor: User
    ) -> Tuple[Bill, bool]:
        """Staff-side bill generation for any order"""
        order = await OrderService.get_order(db, order_id)
        requested_by = BillRequester.ADMIN if actor.role == UserRole.ADMIN else BillRequester.STAFF
        return await BillService._create_once(
            db,
            order,
            payment_method=payment_method,
            status=BillStatus.GENERATED,
            requested_by=requested_by,
        )

    @staticmethod
    async def request(db: AsyncSession, order_id: int, data: BillRequest, user: User) -> Tuple[Bill, bool]:
        """
        Customer asks for the bill of one of their own orders.

        Raises:
            HTTPException 403: If the order belongs to someone else
            HTTPException 400: If the order is not served or completed yet
        """
        order = await OrderService.get_order(db, order_id)
        if order.user_id != user.id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
        if not order.is_fulfilled():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Order must be served or completed"
            )
        return await BillService._create_once(
            db,
            order,
            payment_method=data.payment_method,
            status=BillStatus.REQUESTED,
            requested_by=BillRequester.CUSTOMER,
            call_waiter=data.call_waiter,
        )

    @staticmethod
    async def mark_paid(db: AsyncSession, bill_id: int, payment_method: PaymentMethod, user: User) -> Bill:
        """
        Record payment on a bill and flag its order as paid, in one commit.
        """
        bill = await BillService.get_visible_bill(db, bill_id, user)

        bill.is_paid = True
        bill.paid_at = utcnow()
        bill.payment_method = payment_method
        bill.status = BillStatus.PAID

        order = await OrderService.get_order(db, bill.order_id)
        order.is_paid = True

        try:
            await db.commit()
        except Exception:
            await db.rollback()
            logger.exception("bill.payment.failed", bill_id=bill_id)
            raise

        await db.refresh(bill)
        logger.info(
            "bill.paid",
            bill_id=bill.id,
            order_id=bill.order_id,
            payment_method=payment_method.value,
            total=bill.total,
        )
        return bill
