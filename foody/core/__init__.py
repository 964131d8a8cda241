from foody.core.security import (
    verify_password, get_password_hash,
    create_access_token, create_user_token, get_current_user,
    get_current_admin_user, get_current_staff_user, limiter
)
from foody.core.dependencies import DbDependency, CurrentUser, StaffUser, AdminUser, PaginationDependency
from foody.core.i18n_logger import get_i18n_logger


__all__ = [
    'verify_password', 'get_password_hash',
    'create_access_token', 'create_user_token', 'get_current_user',
    'get_current_admin_user', 'get_current_staff_user', 'limiter',
    'DbDependency', 'CurrentUser', 'StaffUser', 'AdminUser',
    'PaginationDependency', 'get_i18n_logger'
]
