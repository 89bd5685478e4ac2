"""
Authentication Routes

POST /auth/token - Login and get JWT token
POST /auth/register - Register new (non-admin) user and get JWT token
"""

from fastapi import APIRouter, Depends
from passlib.context import CryptContext

from jobly.core.auth import create_access_token, get_pwd_context, get_settings_from_app
from jobly.core.config import Settings
from jobly.db import Database, get_database
from jobly.models import User
from jobly.schemas.schemas import RegisterRequest, TokenRequest, TokenResponse, UserNew

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/token", response_model=TokenResponse)
def login(
    request: TokenRequest,
    database: Database = Depends(get_database),
    pwd_context: CryptContext = Depends(get_pwd_context),
    settings: Settings = Depends(get_settings_from_app),
):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    with database.session() as db:
        user = User.authenticate(db, request.username, request.password, pwd_context)
    return TokenResponse(token=create_access_token(user, settings))


@router.post("/register", response_model=TokenResponse, status_code=201)
def register(
    request: RegisterRequest,
    database: Database = Depends(get_database),
    pwd_context: CryptContext = Depends(get_pwd_context),
    settings: Settings = Depends(get_settings_from_app),
):
    """Register a new user account. Self-registered users are never admins."""
    with database.session() as db:
        user = User.register(db, UserNew(**request.model_dump(), is_admin=False), pwd_context)
    return TokenResponse(token=create_access_token(user, settings))
