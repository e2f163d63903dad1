"""
Auth module: password hashing, JWT creation/validation and the FastAPI
dependencies that resolve the calling user.

Every route except registration, login and the health check depends on
get_current_user; admin-only routes depend on require_admin instead.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional
from fastapi import Depends, HTTPException, Request
from jose import jwt, JWTError
from passlib.context import CryptContext
from impacts.config import get_settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


@dataclass
class UserPrincipal:
    """Resolved identity attached to each request."""
    id: int
    email: str
    role: str                     # "normal" | "admin"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def create_token(user) -> str:
    """Create a signed, time-limited JWT for the given User model instance."""
    settings = get_settings()
    now = int(time.time())
    payload = {
        "sub": str(user.id),
        "id": user.id,
        "email": user.email,
        "role": user.role,
        "iat": now,
        "exp": now + settings.jwt_expire_seconds,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=ALGORITHM)


def decode_token(token: str) -> Optional[UserPrincipal]:
    """Decode and validate a JWT. Returns None if invalid/expired."""
    try:
        settings = get_settings()
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[ALGORITHM])
        return UserPrincipal(
            id=int(payload["id"]),
            email=payload.get("email", ""),
            role=payload.get("role", "normal"),
        )
    except (JWTError, KeyError, TypeError, ValueError):
        return None


async def get_current_user(request: Request) -> UserPrincipal:
    """
    FastAPI dependency. Extracts the bearer JWT from the Authorization header.
    Raises 401 when the header is absent or the token does not verify.
    """
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="No token, authorization denied")
    principal = decode_token(auth_header[7:])
    if principal is None:
        logger.info("Rejected invalid or expired token for %s %s", request.method, request.url.path)
        raise HTTPException(status_code=401, detail="Token is not valid")
    return principal


async def require_admin(current_user: UserPrincipal = Depends(get_current_user)) -> UserPrincipal:
    if not current_user.is_admin:
        logger.info("User %s denied admin access", current_user.id)
        raise HTTPException(status_code=403, detail="Access denied. Admin only.")
    return current_user
