# shoppy/core/security.py
"""
Password hashing and access-token issuing.
"""
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import jwt
from passlib.context import CryptContext

from shoppy.core.config import get_settings

settings = get_settings()

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: int, role: str, expires_delta: timedelta | None = None) -> str:
    """
    Sign an access token for a user.

    Claims: sub (user id as string), role, exp.
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    )
    claims: dict[str, Any] = {"sub": str(user_id), "role": role, "exp": expire}
    return jwt.encode(claims, settings.ACCESS_TOKEN_SECRET, algorithm=settings.JWT_ALG)
