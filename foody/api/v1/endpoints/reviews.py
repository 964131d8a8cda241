"""
Product review endpoints
"""
from fastapi import APIRouter, status
from foody.core.dependencies import DbDependency, CurrentUser, AdminUser, PaginationDependency
from foody.repositories import ReviewRepository
from foody.schemas.common import MessageResponse
from foody.schemas.engagement import (
    ReviewCreate, ReviewUpdate, ReviewEnvelope, ReviewListResponse, ReviewCollection
)
from foody.services.review_service import ReviewService

router = APIRouter(tags=["Reviews"])


@router.get("/product/{product_id}", response_model=ReviewListResponse)
async def product_reviews(product_id: int, db: DbDependency, pagination: PaginationDependency):
    page, limit = pagination
    result = await ReviewRepository(db).list_for_product(product_id, page, limit)
    return ReviewListResponse(reviews=result.docs, pagination=result.pagination())


@router.post("/product/{product_id}", status_code=status.HTTP_201_CREATED, response_model=ReviewEnvelope)
async def create_review(product_id: int, data: ReviewCreate, current_user: CurrentUser, db: DbDependency):
    """Only products from one of the caller's served or completed orders can be reviewed"""
    return ReviewEnvelope(review=await ReviewService.create(db, product_id, data, current_user))


@router.get("/my-reviews", response_model=ReviewCollection)
async def my_reviews(current_user: CurrentUser, db: DbDependency):
    return ReviewCollection(reviews=await ReviewRepository(db).list_for_user(current_user.id))


@router.get("", response_model=ReviewListResponse)
async def all_reviews(admin: AdminUser, db: DbDependency, pagination: PaginationDependency):
    page, limit = pagination
    result = await ReviewRepository(db).list_all(page, limit)
    return ReviewListResponse(reviews=result.docs, pagination=result.pagination())


@router.put("/{review_id}", response_model=ReviewEnvelope)
async def update_review(review_id: int, data: ReviewUpdate, current_user: CurrentUser, db: DbDependency):
    return ReviewEnvelope(review=await ReviewService.update(db, review_id, data, current_user))


@router.delete("/{review_id}", response_model=MessageResponse)
async def delete_review(review_id: int, current_user: CurrentUser, db: DbDependency):
    await ReviewService.delete(db, review_id, current_user)
    return MessageResponse(message="Review deleted")
