"""
Product management endpoints
"""
from typing import Optional
from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from foody.core.dependencies import DbDependency, StaffUser, AdminUser, PaginationDependency
from foody.database.models import Product, ProductFlag, DiscountType
from foody.repositories import ProductRepository, CategoryRepository
from foody.schemas.common import MessageResponse
from foody.schemas.catalog import (
    ProductCreate, ProductUpdate, DiscountUpdate,
    ProductEnvelope, ProductFlagEnvelope, ProductListResponse, ProductCollection,
)
from foody.core.i18n_logger import get_i18n_logger


logger = get_i18n_logger(__name__)

router = APIRouter(tags=["Products"])

FLAG_LABELS = {
    ProductFlag.FEATURED: "featured",
    ProductFlag.HOT_DEAL: "hot deal",
    ProductFlag.DAILY_SPECIAL: "daily special",
    ProductFlag.CHEF_SPECIAL: "chef special",
}

DISCOUNT_RESET = {
    "discount_type": DiscountType.NONE,
    "discount_value": 0.0,
    "bogo_buy_quantity": 0,
    "bogo_get_quantity": 0,
    "combo_price": 0.0,
    "offer_label": "",
    "offer_valid_until": None,
}


async def _get_product(products: ProductRepository, product_id: int) -> Product:
    product = await products.get(product_id)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return product


async def _ensure_category(db: AsyncSession, category_id: int) -> None:
    if await CategoryRepository(db).get(category_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category not found")


# === Public Endpoints ===

@router.get("", response_model=ProductListResponse)
async def list_products(
    db: DbDependency,
    pagination: PaginationDependency,
    search: Optional[str] = None,
    category: Optional[int] = Query(None, description="Category ID"),
    is_veg: Optional[bool] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    sort_by: str = Query("created_at", pattern="^(created_at|price|name|rating)$"),
    order: str = Query("desc", pattern="^(asc|desc)$"),
    is_featured: Optional[bool] = None,
    is_hot_deal: Optional[bool] = None,
    is_daily_special: Optional[bool] = None,
    is_chef_special: Optional[bool] = None,
    on_offer: Optional[bool] = None,
):
    """Paginated menu with filters"""
    page, limit = pagination
    result = await ProductRepository(db).search(
        search=search,
        category_id=category,
        is_veg=is_veg,
        min_price=min_price,
        max_price=max_price,
        flags={
            ProductFlag.FEATURED: is_featured,
            ProductFlag.HOT_DEAL: is_hot_deal,
            ProductFlag.DAILY_SPECIAL: is_daily_special,
            ProductFlag.CHEF_SPECIAL: is_chef_special,
        },
        on_offer=on_offer,
        sort_by=sort_by,
        order=order,
        page=page,
        limit=limit,
    )
    return ProductListResponse(products=result.docs, pagination=result.pagination())


async def _shelf(db: AsyncSession, flag: ProductFlag, limit: int) -> ProductCollection:
    return ProductCollection(products=await ProductRepository(db).with_flag(flag, limit))


@router.get("/featured-items", response_model=ProductCollection)
async def featured_products(db: DbDependency, limit: int = Query(6, ge=1, le=50)):
    return await _shelf(db, ProductFlag.FEATURED, limit)


@router.get("/hot-deals", response_model=ProductCollection)
async def hot_deals(db: DbDependency, limit: int = Query(6, ge=1, le=50)):
    return await _shelf(db, ProductFlag.HOT_DEAL, limit)


@router.get("/daily-specials", response_model=ProductCollection)
async def daily_specials(db: DbDependency, limit: int = Query(6, ge=1, le=50)):
    return await _shelf(db, ProductFlag.DAILY_SPECIAL, limit)


@router.get("/chef-specials", response_model=ProductCollection)
async def chef_specials(db: DbDependency, limit: int = Query(6, ge=1, le=50)):
    return await _shelf(db, ProductFlag.CHEF_SPECIAL, limit)


@router.get("/{product_id}", response_model=ProductEnvelope)
async def get_product(product_id: int, db: DbDependency):
    return ProductEnvelope(product=await _get_product(ProductRepository(db), product_id))


# === Staff Endpoints ===

@router.post("", status_code=status.HTTP_201_CREATED, response_model=ProductEnvelope)
async def create_product(data: ProductCreate, staff: StaffUser, db: DbDependency):
    await _ensure_category(db, data.category_id)

    product = await ProductRepository(db).create(**data.model_dump())
    await db.commit()

    logger.info("product.created", product_id=product.id, name=product.name, price=product.price)
    return ProductEnvelope(product=product)


@router.put("/{product_id}", response_model=ProductEnvelope)
async def update_product(product_id: int, data: ProductUpdate, staff: StaffUser, db: DbDependency):
    products = ProductRepository(db)
    product = await _get_product(products, product_id)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)

    if "category_id" in changes:
        await _ensure_category(db, changes["category_id"])

    product = await products.update(product, **changes)
    await db.commit()
    return ProductEnvelope(product=product)


@router.put("/{product_id}/toggle-{flag}", response_model=ProductFlagEnvelope)
async def toggle_flag(product_id: int, flag: ProductFlag, staff: StaffUser, db: DbDependency):
    """Flip one promotional flag (featured, hot-deal, daily-special, chef-special)"""
    products = ProductRepository(db)
    product = await _get_product(products, product_id)

    enabled = not getattr(product, flag.column)
    product = await products.update(product, **{flag.column: enabled})
    await db.commit()

    label = FLAG_LABELS[flag]
    message = f"Product marked as {label}" if enabled else f"Product removed from {label}"
    logger.info("product.flag.toggled", product_id=product.id, flag=flag.value, enabled=enabled)
    return ProductFlagEnvelope(product=product, message=message)


@router.put("/{product_id}/set-discount", response_model=ProductFlagEnvelope)
async def set_discount(product_id: int, data: DiscountUpdate, staff: StaffUser, db: DbDependency):
    products = ProductRepository(db)
    product = await _get_product(products, product_id)

    product = await products.update(product, **data.model_dump())
    await db.commit()

    logger.info(
        "product.discount.set",
        product_id=product.id,
        discount_type=product.discount_type.value,
        final_price=product.final_price,
    )
    return ProductFlagEnvelope(product=product, message="Discount updated")


@router.delete("/{product_id}/remove-discount", response_model=ProductFlagEnvelope)
async def remove_discount(product_id: int, staff: StaffUser, db: DbDependency):
    products = ProductRepository(db)
    product = await _get_product(products, product_id)

    product = await products.update(product, **DISCOUNT_RESET)
    await db.commit()

    logger.info("product.discount.removed", product_id=product.id)
    return ProductFlagEnvelope(product=product, message="Discount removed")


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: int, admin: AdminUser, db: DbDependency):
    products = ProductRepository(db)
    product = await _get_product(products, product_id)

    await products.delete(product)
    await db.commit()

    logger.info("product.deleted", product_id=product_id, admin_id=admin.id)
    return MessageResponse(message="Product deleted")
