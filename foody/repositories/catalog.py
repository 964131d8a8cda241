"""
Category and product repositories
"""
from typing import Optional
from sqlalchemy import or_, func
from foody.database.models import Category, Product, DiscountType, ProductFlag
from foody.repositories.base import BaseRepository, Page


class CategoryRepository(BaseRepository[Category]):
    model = Category

    async def list_active(self) -> list[Category]:
        return await self.find(Category.is_active.is_(True), order_by=(Category.name.asc(),))

    async def name_taken(self, name: str, exclude_id: Optional[int] = None) -> bool:
        criteria = [func.lower(Category.name) == name.lower()]
        if exclude_id is not None:
            criteria.append(Category.id != exclude_id)
        return await self.count(*criteria) > 0


SORTABLE_FIELDS = {
    "created_at": Product.created_at,
    "price": Product.price,
    "name": Product.name,
    "rating": Product.rating,
}


class ProductRepository(BaseRepository[Product]):
    model = Product

    async def search(
        self,
        *,
        search: Optional[str] = None,
        category_id: Optional[int] = None,
        is_veg: Optional[bool] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        flags: Optional[dict[ProductFlag, bool]] = None,
        on_offer: Optional[bool] = None,
        sort_by: str = "created_at",
        order: str = "desc",
        page: int = 1,
        limit: int = 10,
    ) -> Page[Product]:
        criteria = []
        if search:
            pattern = f"%{search}%"
            criteria.append(or_(Product.name.ilike(pattern), Product.description.ilike(pattern)))
        if category_id is not None:
            criteria.append(Product.category_id == category_id)
        if is_veg is not None:
            criteria.append(Product.is_veg.is_(is_veg))
        if min_price is not None:
            criteria.append(Product.price >= min_price)
        if max_price is not None:
            criteria.append(Product.price <= max_price)
        for flag, value in (flags or {}).items():
            if value is not None:
                criteria.append(getattr(Product, flag.column).is_(value))
        if on_offer:
            criteria.append(Product.discount_type != DiscountType.NONE)

        column = SORTABLE_FIELDS.get(sort_by, Product.created_at)
        if order == "asc":
            ordering = (column.asc(), Product.id.asc())
        else:
            ordering = (column.desc(), Product.id.desc())

        return await self.paginate(*criteria, page=page, limit=limit, order_by=ordering)

    async def with_flag(self, flag: ProductFlag, limit: int = 6) -> list[Product]:
        """Available products carrying a promotional flag, newest first"""
        return await self.find(
            getattr(Product, flag.column).is_(True),
            Product.is_available.is_(True),
            order_by=(Product.created_at.desc(), Product.id.desc()),
            limit=limit,
        )
