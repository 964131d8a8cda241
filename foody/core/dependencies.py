"""
Shared dependencies across the application

Type-annotated dependencies that keep endpoint signatures short.

Usage example:
    @router.get("/orders/my-orders")
    async def my_orders(db: DbDependency, current_user: CurrentUser):
        ...
"""
from typing import Annotated, Optional
from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from foody.database.session import get_db
from foody.database.models.user import User
from foody.core.security import (
    get_current_user,
    get_current_admin_user,
    get_current_staff_user,
)
from foody.repositories.base import normalize_paging, DEFAULT_PAGE_SIZE


# === Database Dependency ===

DbDependency = Annotated[AsyncSession, Depends(get_db)]


# === User Authentication Dependencies ===

CurrentUser = Annotated[User, Depends(get_current_user)]
"""
Current authenticated user (any role).

Returns the SQLAlchemy User model, not a Pydantic schema.
"""

StaffUser = Annotated[User, Depends(get_current_staff_user)]
"""
Current user verified as staff or admin. Customers get 403.
"""

AdminUser = Annotated[User, Depends(get_current_admin_user)]
"""
Current user verified as ADMIN.
"""


# === Pagination ===

def get_pagination_params(
    page: Optional[int] = Query(1),
    limit: Optional[int] = Query(DEFAULT_PAGE_SIZE),
) -> tuple[int, int]:
    """
    Page and page size from the query string. Out-of-range values are
    clamped rather than rejected.

    Returns:
        Tuple of (page, limit)
    """
    return normalize_paging(page, limit)


PaginationDependency = Annotated[tuple[int, int], Depends(get_pagination_params)]
