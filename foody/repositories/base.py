"""
Generic async repository over a SQLAlchemy model
"""
import math
from dataclasses import dataclass
from typing import Any, Generic, Optional, Sequence, Type, TypeVar
from sqlalchemy import select, func, Select
from sqlalchemy.ext.asyncio import AsyncSession
from foody.database.base import Base


ModelT = TypeVar("ModelT", bound=Base)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass
class Page(Generic[ModelT]):
    """One page of query results plus the numbers a client needs to paginate"""
    docs: list[ModelT]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def pagination(self) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "pages": self.pages,
        }


def normalize_paging(page: Optional[int], limit: Optional[int]) -> tuple[int, int]:
    """Clamp page to >= 1 and limit to 1..MAX_PAGE_SIZE"""
    page = page if page and page > 0 else 1
    limit = limit if limit and limit > 0 else DEFAULT_PAGE_SIZE
    return page, min(limit, MAX_PAGE_SIZE)


class BaseRepository(Generic[ModelT]):
    """
    CRUD helpers shared by every entity repository.

    Repositories never commit; the caller owns the transaction so that
    multi-entity writes (checkout, bill payment) land in a single commit.
    """

    model: Type[ModelT]

    def __init__(self, db: AsyncSession):
        self.db = db

    def select(self) -> Select:
        return select(self.model)

    async def get(self, entity_id: int) -> Optional[ModelT]:
        return await self.db.get(self.model, entity_id)

    async def find_one(self, *criteria) -> Optional[ModelT]:
        result = await self.db.execute(self.select().where(*criteria).limit(1))
        return result.scalars().first()

    async def find(self, *criteria, order_by: Sequence[Any] = (), limit: Optional[int] = None) -> list[ModelT]:
        query = self.select().where(*criteria).order_by(*order_by)
        if limit:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count(self, *criteria) -> int:
        query = select(func.count()).select_from(self.model).where(*criteria)
        return (await self.db.execute(query)).scalar_one()

    async def paginate(
        self,
        *criteria,
        page: Optional[int] = 1,
        limit: Optional[int] = DEFAULT_PAGE_SIZE,
        order_by: Sequence[Any] = (),
    ) -> Page[ModelT]:
        page, limit = normalize_paging(page, limit)
        total = await self.count(*criteria)

        query = (
            self.select()
            .where(*criteria)
            .order_by(*order_by)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.db.execute(query)
        return Page(docs=list(result.scalars().all()), total=total, page=page, limit=limit)

    async def create(self, **values) -> ModelT:
        entity = self.model(**values)
        self.db.add(entity)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def update(self, entity: ModelT, **values) -> ModelT:
        for field, value in values.items():
            setattr(entity, field, value)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def delete(self, entity: ModelT) -> None:
        await self.db.delete(entity)
        await self.db.flush()
