"""
Authentication endpoints
"""
from fastapi import APIRouter, HTTPException, status, Response, Request
from foody.core.dependencies import DbDependency, CurrentUser
from foody.core.security import (
    verify_password, get_password_hash, create_user_token,
    set_auth_cookie, clear_auth_cookie, limiter
)
from foody.database.models.user import UserRole
from foody.repositories import UserRepository
from foody.schemas.common import MessageResponse
from foody.schemas.user import (
    UserRegister, UserLogin, ProfileUpdate, PasswordUpdate,
    AuthResponse, UserEnvelope, UserResponse
)
from foody.core.i18n_logger import get_i18n_logger


logger = get_i18n_logger(__name__)

router = APIRouter(tags=["Authentication"])


def _auth_response(response: Response, user) -> AuthResponse:
    token = create_user_token(user)
    set_auth_cookie(response, token)
    return AuthResponse(token=token, user=UserResponse.model_validate(user))


# ============================================================================
# REGISTRATION ENDPOINT
# ============================================================================
@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    summary="Register a new customer account",
)
@limiter.limit("5/minute")
async def register(
    request: Request,
    response: Response,
    data: UserRegister,
    db: DbDependency,
):
    """
    Register a new user. Self-registered accounts are always customers;
    staff and admins are created by an admin.
    """
    users = UserRepository(db)
    if await users.email_taken(data.email):
        logger.warning("auth.registration.failed", reason="email taken", email=data.email)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")

    try:
        user = await users.create(
            name=data.name,
            email=data.email.lower(),
            hashed_password=get_password_hash(data.password),
            role=UserRole.CUSTOMER,
        )
        await db.commit()
    except Exception:
        await db.rollback()
        logger.exception("auth.registration.database_error", email=data.email)
        raise

    logger.info("auth.registration.success", user_id=user.id, email=user.email, role=user.role.value)
    return _auth_response(response, user)


# ============================================================================
# LOGIN ENDPOINT
# ============================================================================
@router.post("/login", response_model=AuthResponse, summary="Login to get access token")
@limiter.limit("10/minute")
async def login(
    request: Request,
    response: Response,
    data: UserLogin,
    db: DbDependency,
):
    logger.info(
        "auth.login.attempt",
        email=data.email,
        ip_address=request.client.host if request.client else "unknown"
    )

    user = await UserRepository(db).get_by_email(data.email)
    if not user or not verify_password(data.password, user.hashed_password):
        logger.warning("auth.login.failed", email=data.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    logger.info("auth.login.success", user_id=user.id, role=user.role.value)
    return _auth_response(response, user)


@router.get("/logout", response_model=MessageResponse)
async def logout(response: Response):
    clear_auth_cookie(response)
    return MessageResponse(message="Logged out")


# ============================================================================
# PROFILE
# ============================================================================
@router.get("/me", response_model=UserEnvelope)
async def get_me(current_user: CurrentUser):
    return UserEnvelope(user=UserResponse.model_validate(current_user))


@router.put("/me", response_model=UserEnvelope)
async def update_me(data: ProfileUpdate, current_user: CurrentUser, db: DbDependency):
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    users = UserRepository(db)

    if "email" in changes:
        changes["email"] = changes["email"].lower()
        if await users.email_taken(changes["email"], exclude_id=current_user.id):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already in use")

    user = await users.update(current_user, **changes)
    await db.commit()

    logger.info("auth.profile.updated", user_id=user.id, fields=", ".join(sorted(changes)))
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.put("/update-password", response_model=AuthResponse)
async def update_password(
    data: PasswordUpdate,
    response: Response,
    current_user: CurrentUser,
    db: DbDependency,
):
    """Change password after checking the current one; issues a fresh token"""
    if not verify_password(data.current_password, current_user.hashed_password):
        logger.warning("auth.password.wrong_current", user_id=current_user.id)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Current password is incorrect")

    user = await UserRepository(db).update(current_user, hashed_password=get_password_hash(data.new_password))
    await db.commit()

    logger.info("auth.password.updated", user_id=user.id)
    return _auth_response(response, user)
