from typing import Optional
from foody.database.models import Bill, BillStatus
from foody.repositories.base import BaseRepository, Page


class BillRepository(BaseRepository[Bill]):
    model = Bill

    async def get_by_order(self, order_id: int) -> Optional[Bill]:
        return await self.find_one(Bill.order_id == order_id)

    async def list_for_user(self, user_id: int) -> list[Bill]:
        return await self.find(Bill.user_id == user_id, order_by=(Bill.created_at.desc(), Bill.id.desc()))

    async def list_filtered(
        self,
        is_paid: Optional[bool] = None,
        status: Optional[BillStatus] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Page[Bill]:
        criteria = []
        if is_paid is not None:
            criteria.append(Bill.is_paid.is_(is_paid))
        if status is not None:
            criteria.append(Bill.status == status)
        return await self.paginate(
            *criteria, page=page, limit=limit, order_by=(Bill.created_at.desc(), Bill.id.desc())
        )
