"""
Authentication Routes
"""
from fastapi import APIRouter, HTTPException, Depends
import logging

from ..dependencies import get_user_store
from ..models import User, EmailRegisterRequest, EmailLoginRequest, AuthResponse
from ..services.auth import (
    create_access_token,
    verify_password,
    hash_password,
    validate_email,
    require_auth,
)
from ..stores import StoreError, UserStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["Authentication"])

MIN_PASSWORD_LENGTH = 6


def _public_user(user: User) -> dict:
    return {"id": user.id, "email": user.email}


def _unavailable(e: StoreError) -> HTTPException:
    logger.error(f"Auth store failure: {e}")
    return HTTPException(status_code=503, detail="Database unavailable. Please try again later.")


@router.post("/register", response_model=AuthResponse)
async def register_with_email(request: EmailRegisterRequest, users: UserStore = Depends(get_user_store)):
    """Register with email and password"""
    email = request.email.strip().lower()
    if not validate_email(email):
        raise HTTPException(status_code=400, detail="Invalid email format")

    if len(request.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )

    try:
        if await users.get_by_email(email):
            raise HTTPException(status_code=400, detail="User with this email already exists")

        user = User(email=email, password_hash=hash_password(request.password))
        await users.create(user)
    except ValueError:
        raise HTTPException(status_code=400, detail="User with this email already exists")
    except StoreError as e:
        raise _unavailable(e)

    logger.info(f"Registered user {user.id}")
    return AuthResponse(
        access_token=create_access_token(user.id, user.email),
        user=_public_user(user)
    )


@router.post("/login", response_model=AuthResponse)
async def login_with_email(request: EmailLoginRequest, users: UserStore = Depends(get_user_store)):
    """Log in with email and password"""
    try:
        user = await users.get_by_email(request.email.strip().lower())
        if not user or not verify_password(request.password, user.password_hash):
            raise HTTPException(status_code=401, detail="Invalid email or password")

        await users.touch_login(user.id)
    except StoreError as e:
        raise _unavailable(e)

    return AuthResponse(
        access_token=create_access_token(user.id, user.email),
        user=_public_user(user)
    )


@router.get("/me")
async def get_me(user: User = Depends(require_auth)):
    """Current user"""
    return _public_user(user)


@router.post("/logout")
async def logout():
    """Log out (the client drops its token)"""
    return {"message": "Logged out successfully"}
