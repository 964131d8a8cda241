"""
Menu category endpoints
"""
from fastapi import APIRouter, HTTPException, status
from foody.core.dependencies import DbDependency, StaffUser, AdminUser
from foody.database.models import Category, Product
from foody.repositories import CategoryRepository, ProductRepository
from foody.schemas.common import MessageResponse
from foody.schemas.catalog import (
    CategoryCreate, CategoryUpdate, CategoryEnvelope, CategoryListResponse, CategoryResponse
)
from foody.core.i18n_logger import get_i18n_logger


logger = get_i18n_logger(__name__)

router = APIRouter(tags=["Categories"])


async def _get_category(categories: CategoryRepository, category_id: int) -> Category:
    category = await categories.get(category_id)
    if category is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category


@router.get("", response_model=CategoryListResponse)
async def list_categories(db: DbDependency):
    """Active categories sorted by name (public)"""
    return CategoryListResponse(categories=await CategoryRepository(db).list_active())


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CategoryEnvelope)
async def create_category(data: CategoryCreate, staff: StaffUser, db: DbDependency):
    categories = CategoryRepository(db)
    if await categories.name_taken(data.name):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category already exists")

    category = await categories.create(**data.model_dump())
    await db.commit()

    logger.info("category.created", category_id=category.id, name=category.name)
    return CategoryEnvelope(category=CategoryResponse.model_validate(category))


@router.put("/{category_id}", response_model=CategoryEnvelope)
async def update_category(category_id: int, data: CategoryUpdate, staff: StaffUser, db: DbDependency):
    categories = CategoryRepository(db)
    category = await _get_category(categories, category_id)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)

    if "name" in changes and await categories.name_taken(changes["name"], exclude_id=category.id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category already exists")

    category = await categories.update(category, **changes)
    await db.commit()
    return CategoryEnvelope(category=CategoryResponse.model_validate(category))


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(category_id: int, admin: AdminUser, db: DbDependency):
    categories = CategoryRepository(db)
    category = await _get_category(categories, category_id)

    if await ProductRepository(db).count(Product.category_id == category.id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete a category that still has products"
        )

    await categories.delete(category)
    await db.commit()

    logger.info("category.deleted", category_id=category_id, admin_id=admin.id)
    return MessageResponse(message="Category deleted")
