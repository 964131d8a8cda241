"""
User administration endpoints (admin only)
"""
from typing import Optional
from fastapi import APIRouter, HTTPException, status
from foody.core.dependencies import DbDependency, AdminUser, PaginationDependency
from foody.core.security import get_password_hash
from foody.database.models.user import User, UserRole
from foody.repositories import UserRepository, OrderRepository
from foody.schemas.common import MessageResponse
from foody.schemas.order import OrderCollection
from foody.schemas.user import (
    UserCreate, UserUpdate, RoleUpdate, UserEnvelope, UserListResponse, UserResponse
)
from foody.core.i18n_logger import get_i18n_logger


logger = get_i18n_logger(__name__)

router = APIRouter(tags=["Users"])


async def _get_user(users: UserRepository, user_id: int) -> User:
    user = await users.get(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.get("", response_model=UserListResponse)
async def list_users(
    admin: AdminUser,
    db: DbDependency,
    pagination: PaginationDependency,
    search: Optional[str] = None,
):
    page, limit = pagination
    result = await UserRepository(db).search(search, page, limit)
    return UserListResponse(users=result.docs, pagination=result.pagination())


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserEnvelope)
async def create_user(data: UserCreate, admin: AdminUser, db: DbDependency):
    users = UserRepository(db)
    if await users.email_taken(data.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")

    user = await users.create(
        name=data.name,
        email=data.email.lower(),
        hashed_password=get_password_hash(data.password),
        role=data.role,
    )
    await db.commit()

    logger.info("user.created", user_id=user.id, role=user.role.value, admin_id=admin.id)
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.get("/{user_id}/orders", response_model=OrderCollection)
async def get_user_orders(user_id: int, admin: AdminUser, db: DbDependency):
    """The user's 50 most recent orders"""
    await _get_user(UserRepository(db), user_id)
    orders = await OrderRepository(db).recent_for_user(user_id, limit=50)
    return OrderCollection(orders=orders)


@router.get("/{user_id}", response_model=UserEnvelope)
async def get_user(user_id: int, admin: AdminUser, db: DbDependency):
    user = await _get_user(UserRepository(db), user_id)
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.put("/{user_id}/role", response_model=UserEnvelope)
async def update_user_role(user_id: int, data: RoleUpdate, admin: AdminUser, db: DbDependency):
    users = UserRepository(db)
    user = await _get_user(users, user_id)
    old_role = user.role

    user = await users.update(user, role=UserRole(data.role))
    await db.commit()

    logger.info(
        "user.role.changed",
        user_id=user.id,
        old_role=old_role.value,
        new_role=user.role.value,
        admin_id=admin.id,
    )
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.put("/{user_id}", response_model=UserEnvelope)
async def update_user(user_id: int, data: UserUpdate, admin: AdminUser, db: DbDependency):
    users = UserRepository(db)
    user = await _get_user(users, user_id)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)

    if "email" in changes:
        changes["email"] = changes["email"].lower()
        if await users.email_taken(changes["email"], exclude_id=user.id):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")

    user = await users.update(user, **changes)
    await db.commit()
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: int, admin: AdminUser, db: DbDependency):
    """Users with order or bill history cannot be deleted"""
    users = UserRepository(db)
    user = await _get_user(users, user_id)

    if await users.has_history(user.id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete a user who has orders or bills"
        )

    await users.delete(user)
    await db.commit()

    logger.info("user.deleted", user_id=user_id, admin_id=admin.id)
    return MessageResponse(message="User deleted")
