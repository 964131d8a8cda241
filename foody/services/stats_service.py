"""
Dashboard statistics for staff and admins

Every figure is a read-only aggregate query. They run one after another on
the request's session since an AsyncSession cannot run statements
concurrently.
"""
from datetime import timedelta
from typing import Optional
from sqlalchemy import select, func, extract, literal_column
from sqlalchemy.ext.asyncio import AsyncSession
from foody.database.base import utcnow
from foody.database.models import (
    Bill, Category, Order, OrderItem, OrderStatus, Product, User
)
from foody.services.pricing import round_half_up


def growth(current: float, previous: float) -> Optional[float]:
    """Percent change from previous to current, None when there is no baseline"""
    if not previous:
        return None
    return round_half_up((current - previous) / previous * 100, 1)


class StatsService:

    @staticmethod
    async def _count(db: AsyncSession, model, *criteria) -> int:
        return (await db.execute(select(func.count()).select_from(model).where(*criteria))).scalar_one()

    @staticmethod
    async def _revenue(db: AsyncSession, *criteria) -> tuple[float, int]:
        """(sum of totals, number of orders) over non-cancelled orders"""
        row = (await db.execute(
            select(func.coalesce(func.sum(Order.total), 0.0), func.count(Order.id))
            .where(Order.status != OrderStatus.CANCELLED, *criteria)
        )).one()
        return float(row[0]), row[1]

    @staticmethod
    async def dashboard(db: AsyncSession) -> dict:
        now = utcnow()
        today_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        week_ago = now - timedelta(days=7)
        month_ago = now - timedelta(days=30)
        two_months_ago = now - timedelta(days=60)

        total_orders = await StatsService._count(db, Order)
        pending_orders = await StatsService._count(db, Order, Order.status == OrderStatus.PENDING)
        total_products = await StatsService._count(db, Product)
        total_users = await StatsService._count(db, User)
        total_bills = await StatsService._count(db, Bill)
        today_orders = await StatsService._count(db, Order, Order.created_at >= today_start)

        total_revenue, _ = await StatsService._revenue(db)
        today_revenue, _ = await StatsService._revenue(db, Order.created_at >= today_start)
        this_month, this_month_count = await StatsService._revenue(db, Order.created_at >= month_ago)
        last_month, last_month_count = await StatsService._revenue(
            db, Order.created_at >= two_months_ago, Order.created_at < month_ago
        )

        avg_order_value = (await db.execute(
            select(func.avg(Order.total)).where(Order.status != OrderStatus.CANCELLED)
        )).scalar_one()

        # Orders by status
        status_rows = await db.execute(
            select(Order.status, func.count(Order.id)).group_by(Order.status)
        )
        orders_by_status = {order_status.value: count for order_status, count in status_rows.all()}

        # Daily orders over the last week
        day = func.date(Order.created_at).label("day")
        daily_rows = await db.execute(
            select(day, func.count(Order.id), func.coalesce(func.sum(Order.total), 0.0))
            .where(Order.created_at >= week_ago)
            .group_by(day)
            .order_by(day)
        )
        daily_orders = [
            {"date": str(row_day), "count": count, "revenue": float(revenue)}
            for row_day, count, revenue in daily_rows.all()
        ]

        # Best sellers by quantity
        quantity = func.sum(OrderItem.quantity).label("total_quantity")
        line_revenue = func.sum(OrderItem.price * OrderItem.quantity).label("total_revenue")
        top_rows = await db.execute(
            select(OrderItem.name, quantity, line_revenue)
            .group_by(OrderItem.name)
            .order_by(quantity.desc())
            .limit(5)
        )
        top_products = [
            {"name": name, "total_quantity": int(qty), "total_revenue": float(revenue)}
            for name, qty, revenue in top_rows.all()
        ]

        # Revenue per category, lines whose product is gone count as "Other"
        category_name = func.coalesce(Category.name, literal_column("'Other'")).label("category")
        category_rows = await db.execute(
            select(category_name, func.sum(OrderItem.quantity), line_revenue)
            .select_from(OrderItem)
            .outerjoin(Product, OrderItem.product_id == Product.id)
            .outerjoin(Category, Product.category_id == Category.id)
            .group_by(category_name)
            .order_by(line_revenue.desc())
            .limit(6)
        )
        category_breakdown = [
            {"name": name, "total_quantity": int(qty), "total_revenue": float(revenue)}
            for name, qty, revenue in category_rows.all()
        ]

        # Paid bills per payment method
        bill_count = func.count(Bill.id).label("count")
        payment_rows = await db.execute(
            select(Bill.payment_method, bill_count, func.coalesce(func.sum(Bill.total), 0.0))
            .where(Bill.is_paid.is_(True))
            .group_by(Bill.payment_method)
            .order_by(bill_count.desc())
        )
        payment_method_breakdown = [
            {"method": method.value, "count": count, "total": float(total)}
            for method, count, total in payment_rows.all()
        ]

        # Orders per hour today
        hour = extract("hour", Order.created_at).label("hour")
        hourly_rows = await db.execute(
            select(hour, func.count(Order.id))
            .where(Order.created_at >= today_start)
            .group_by(hour)
            .order_by(hour)
        )
        hourly_orders = [{"hour": int(row_hour), "count": count} for row_hour, count in hourly_rows.all()]

        return {
            "total_orders": total_orders,
            "pending_orders": pending_orders,
            "total_products": total_products,
            "total_users": total_users,
            "total_bills": total_bills,
            "total_revenue": total_revenue,
            "today_orders": today_orders,
            "today_revenue": today_revenue,
            "avg_order_value": float(avg_order_value or 0),
            "revenue_growth": growth(this_month, last_month),
            "order_growth": growth(this_month_count, last_month_count),
            "orders_by_status": orders_by_status,
            "daily_orders": daily_orders,
            "top_products": top_products,
            "category_breakdown": category_breakdown,
            "payment_method_breakdown": payment_method_breakdown,
            "hourly_orders": hourly_orders,
        }
