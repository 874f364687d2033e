"""
Authentication Service
"""
from datetime import datetime, timedelta
import re
import logging

from jose import jwt, JWTError
from passlib.context import CryptContext
from fastapi import HTTPException, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from ..config import settings
from ..dependencies import get_user_store
from ..models import User
from ..stores.base import StoreError, UserStore

logger = logging.getLogger(__name__)

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Security
security = HTTPBearer(auto_error=False)

ACCESS_TOKEN_TYPE = "access"


def create_access_token(user_id: str, email: str) -> str:
    """Create JWT access token"""
    expire = datetime.utcnow() + timedelta(days=settings.jwt_expiration_days)
    to_encode = {
        "sub": user_id,
        "email": email,
        "typ": ACCESS_TOKEN_TYPE,
        "exp": expire
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash"""
    return pwd_context.verify(plain_password, hashed_password)


def hash_password(password: str) -> str:
    """Hash a password"""
    return pwd_context.hash(password)


def validate_email(email: str) -> bool:
    """Validate email format"""
    email_regex = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return bool(re.match(email_regex, email))


async def require_auth(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    users: UserStore = Depends(get_user_store),
) -> User:
    """Require authenticated user"""
    if not credentials:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid token")

    user_id = payload.get("sub")
    if not user_id or payload.get("typ") != ACCESS_TOKEN_TYPE:
        raise HTTPException(status_code=401, detail="Invalid token")

    try:
        user = await users.get_by_id(user_id)
    except StoreError as e:
        logger.error(f"User lookup failed: {e}")
        raise HTTPException(
            status_code=503,
            detail="Database unavailable. Please try again later."
        )

    if not user:
        raise HTTPException(status_code=401, detail="User not found")

    return user
