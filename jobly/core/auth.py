"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- FastAPI dependencies: identity attach + authorization gates
"""

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from jobly.core.config import Settings
from jobly.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)

# Bearer token extractor; a missing header is not an error at this stage
bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache()
def build_password_context(rounds: int = 12) -> CryptContext:
    """Password hashing context with the given bcrypt work factor."""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(password: str, pwd_context: CryptContext) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str, pwd_context: CryptContext) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user: dict, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token carrying {username, isAdmin}."""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    payload = {
        "username": user["username"],
        "isAdmin": bool(user.get("isAdmin", False)),
        "exp": expire,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.debug("Rejected token: %s", e)
        return None


def get_settings_from_app(request: Request) -> Settings:
    return request.app.state.settings


def get_pwd_context(request: Request) -> CryptContext:
    return request.app.state.pwd_context


def authenticate_jwt(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[dict]:
    """
    App-wide dependency - attach the token payload to request.state.user.

    No token, or a token that fails verification, leaves the identity
    as None. That is never an error by itself; the gates below decide.
    """
    user = None
    if credentials:
        user = decode_token(credentials.credentials, request.app.state.settings)
    request.state.user = user
    return user


def ensure_logged_in(user: Optional[dict] = Depends(authenticate_jwt)) -> dict:
    """Dependency - Require any logged-in user."""
    if user and user.get("username"):
        return user
    raise UnauthorizedError()


def ensure_admin(user: Optional[dict] = Depends(authenticate_jwt)) -> dict:
    """Dependency - Require a logged-in admin."""
    if user and user.get("username") and user.get("isAdmin") is True:
        return user
    raise UnauthorizedError()


def ensure_correct_user_or_admin(username: str, user: Optional[dict] = Depends(authenticate_jwt)) -> dict:
    """
    Dependency - Require the user named in the path, or an admin.

    Usage:
        @router.get("/{username}")
        def route(username: str, user: dict = Depends(ensure_correct_user_or_admin)):
            ...
    """
    if user and (user.get("username") == username or user.get("isAdmin") is True):
        return user
    raise UnauthorizedError()
