"""
Reviews: eligibility, one review per user and product, rating aggregates
"""
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from foody.database.models import Product, Review, User
from foody.repositories import OrderRepository, ProductRepository, ReviewRepository
from foody.schemas.engagement import ReviewCreate, ReviewUpdate
from foody.services.pricing import round_half_up
from foody.core.i18n_logger import get_i18n_logger


logger = get_i18n_logger(__name__)

DUPLICATE_REVIEW = "You already reviewed this product"


class ReviewService:

    @staticmethod
    async def recalculate_product_rating(db: AsyncSession, product_id: int) -> None:
        """
        Recompute a product's rating and num_reviews from its stored reviews.
        Flushes but does not commit.
        """
        average, count = await ReviewRepository(db).aggregate_for_product(product_id)
        product = await db.get(Product, product_id)
        if product is None:
            return
        product.rating = round_half_up(float(average), 1) if count else 0.0
        product.num_reviews = count
        await db.flush()

    @staticmethod
    async def get_review(db: AsyncSession, review_id: int) -> Review:
        review = await ReviewRepository(db).get(review_id)
        if review is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Review not found")
        return review

    @staticmethod
    def _ensure_author_or_admin(review: Review, user: User) -> None:
        if review.user_id != user.id and not user.is_admin():
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")

    @staticmethod
    async def create(db: AsyncSession, product_id: int, data: ReviewCreate, user: User) -> Review:
        """
        Review a product the user has received.

        Raises:
            HTTPException 404: Unknown product
            HTTPException 400: Already reviewed, or no served/completed
                order containing the product
        """
        if await ProductRepository(db).get(product_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")

        reviews = ReviewRepository(db)
        if await reviews.get_for_user_product(user.id, product_id) is not None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_REVIEW)

        order = await OrderRepository(db).find_fulfilled_with_product(user.id, product_id)
        if order is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="You can only review products you have ordered"
            )

        user_id = user.id
        review = Review(
            user_id=user_id,
            product_id=product_id,
            order_id=order.id,
            rating=data.rating,
            comment=data.comment,
        )
        try:
            db.add(review)
            await db.flush()
            await ReviewService.recalculate_product_rating(db, product_id)
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_REVIEW)

        await db.refresh(review)
        logger.info("review.created", review_id=review.id, product_id=product_id, user_id=user_id, rating=review.rating)
        return review

    @staticmethod
    async def update(db: AsyncSession, review_id: int, data: ReviewUpdate, user: User) -> Review:
        review = await ReviewService.get_review(db, review_id)
        ReviewService._ensure_author_or_admin(review, user)

        if data.rating is not None:
            review.rating = data.rating
        if data.comment is not None:
            review.comment = data.comment
        await db.flush()
        await ReviewService.recalculate_product_rating(db, review.product_id)
        await db.commit()
        await db.refresh(review)

        logger.info("review.updated", review_id=review.id, product_id=review.product_id)
        return review

    @staticmethod
    async def delete(db: AsyncSession, review_id: int, user: User) -> None:
        review = await ReviewService.get_review(db, review_id)
        ReviewService._ensure_author_or_admin(review, user)

        product_id = review.product_id
        await ReviewRepository(db).delete(review)
        await ReviewService.recalculate_product_rating(db, product_id)
        await db.commit()

        logger.info("review.deleted", review_id=review_id, product_id=product_id)
