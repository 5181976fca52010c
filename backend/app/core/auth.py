"""
Authentication module for LifeVault.

Users log in with phone + OTP (or user id + PIN) and receive a JWT bearer
token. Everything else depends on the caller's identity only through the
SessionProvider interface, obtained via the get_session_provider
dependency; a different provider can be swapped in with
app.dependency_overrides without touching any router.
"""

import logging
import secrets
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.errors import ForbiddenError, UnauthorizedError
from app.modules.users.models import User, UserRole

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

# Security scheme
security = HTTPBearer(auto_error=False)


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token for a user."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user.id),
        "role": user.role.value,
        "phone": user.phone,
        "exp": now + expires_delta,
        "iat": now,
        "jti": secrets.token_hex(16),  # Unique token ID
    }

    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    """Decode and validate a JWT token."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        if "expired" in str(e).lower():
            raise UnauthorizedError("Token has expired")
        raise UnauthorizedError("Invalid token")


def issue_token(user: User) -> dict:
    """Token fields of an auth response."""
    expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return {
        "token": create_access_token(user, expires_delta),
        "token_type": "bearer",
        "expires_in": int(expires_delta.total_seconds()),
    }


class SessionProvider(ABC):
    """Who is calling. Routers never look at tokens directly."""

    @abstractmethod
    def get_current_user(self) -> Optional[User]:
        """The authenticated user, or None for anonymous callers."""

    def is_authenticated(self) -> bool:
        return self.get_current_user() is not None

    def get_user_id(self) -> Optional[int]:
        user = self.get_current_user()
        return user.id if user else None


class BearerTokenSession(SessionProvider):
    """Resolves the caller from a verified JWT bearer token."""

    def __init__(self, db: Session, token: Optional[str]):
        self.db = db
        self.token = token
        self._user: Optional[User] = None
        self._resolved = False

    def get_current_user(self) -> Optional[User]:
        if not self._resolved:
            self._user = self._load_user()
            self._resolved = True
        return self._user

    def _load_user(self) -> Optional[User]:
        if not self.token:
            return None

        payload = decode_token(self.token)
        try:
            user_id = int(payload.get("sub"))
        except (TypeError, ValueError):
            raise UnauthorizedError("Invalid token")

        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None or not user.is_active:
            raise UnauthorizedError("User not found or inactive")
        return user


def get_session_provider(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> SessionProvider:
    """Dependency that provides the caller's session."""
    token = credentials.credentials if credentials else None
    return BearerTokenSession(db, token)


async def get_current_user(session: SessionProvider = Depends(get_session_provider)) -> User:
    """
    Dependency to get the current authenticated user.
    Raises UnauthorizedError for anonymous callers.
    """
    user = session.get_current_user()
    if user is None:
        raise UnauthorizedError("Authentication required")
    return user


async def optional_user(session: SessionProvider = Depends(get_session_provider)) -> Optional[User]:
    """
    Optional authentication - returns None if not authenticated.
    Useful for endpoints that work differently for authenticated users.
    """
    try:
        return session.get_current_user()
    except UnauthorizedError:
        return None


def require_roles(*roles: UserRole) -> Callable:
    """Dependency factory: the current user must hold one of `roles`."""

    async def checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            logger.warning(f"User {user.id} with role {user.role.value} denied; needs one of {[r.value for r in roles]}")
            raise ForbiddenError("Insufficient permissions")
        return user

    return checker
