"""
User repository: lookups by email, name search and history checks
"""
from typing import Optional
from sqlalchemy import select, func
from foody.database.models import User, Order, Bill
from foody.repositories.base import BaseRepository, Page


class UserRepository(BaseRepository[User]):
    model = User

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self.find_one(func.lower(User.email) == email.lower())

    async def email_taken(self, email: str, exclude_id: Optional[int] = None) -> bool:
        criteria = [func.lower(User.email) == email.lower()]
        if exclude_id is not None:
            criteria.append(User.id != exclude_id)
        return await self.count(*criteria) > 0

    async def search(self, search: Optional[str], page: int, limit: int) -> Page[User]:
        criteria = []
        if search:
            criteria.append(User.name.ilike(f"%{search}%"))
        return await self.paginate(
            *criteria, page=page, limit=limit, order_by=(User.created_at.desc(), User.id.desc())
        )

    async def has_history(self, user_id: int) -> bool:
        """True when the user owns orders or bills that must be kept"""
        orders = await self.db.scalar(select(func.count(Order.id)).where(Order.user_id == user_id))
        bills = await self.db.scalar(select(func.count(Bill.id)).where(Bill.user_id == user_id))
        return bool(orders or bills)
