"""
Review and announcement repositories
"""
from typing import Optional
from sqlalchemy import select, func, or_
from foody.database.base import utcnow
from foody.database.models import Review, Announcement
from foody.repositories.base import BaseRepository, Page


class ReviewRepository(BaseRepository[Review]):
    model = Review

    _newest_first = (Review.created_at.desc(), Review.id.desc())

    async def get_for_user_product(self, user_id: int, product_id: int) -> Optional[Review]:
        return await self.find_one(Review.user_id == user_id, Review.product_id == product_id)

    async def list_for_product(self, product_id: int, page: int, limit: int) -> Page[Review]:
        return await self.paginate(
            Review.product_id == product_id, page=page, limit=limit, order_by=self._newest_first
        )

    async def list_for_user(self, user_id: int) -> list[Review]:
        return await self.find(Review.user_id == user_id, order_by=self._newest_first)

    async def list_all(self, page: int, limit: int) -> Page[Review]:
        return await self.paginate(page=page, limit=limit, order_by=self._newest_first)

    async def aggregate_for_product(self, product_id: int) -> tuple[Optional[float], int]:
        """(mean rating or None, number of reviews)"""
        row = (await self.db.execute(
            select(func.avg(Review.rating), func.count(Review.id)).where(Review.product_id == product_id)
        )).one()
        return row[0], row[1]


class AnnouncementRepository(BaseRepository[Announcement]):
    model = Announcement

    async def list_active(self) -> list[Announcement]:
        """Active, unexpired announcements, pinned first then newest"""
        return await self.find(
            Announcement.is_active.is_(True),
            or_(Announcement.expires_at.is_(None), Announcement.expires_at > utcnow()),
            order_by=(
                Announcement.is_pinned.desc(),
                Announcement.created_at.desc(),
                Announcement.id.desc(),
            ),
        )

    async def list_all(self, page: int, limit: int) -> Page[Announcement]:
        return await self.paginate(
            page=page, limit=limit, order_by=(Announcement.created_at.desc(), Announcement.id.desc())
        )
