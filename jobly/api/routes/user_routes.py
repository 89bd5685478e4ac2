"""
User Routes

POST /users - Add a user, possibly an admin, and get a token for them (admin)
GET /users - List users (admin)
GET /users/{username} - Get user with applied job ids (self or admin)
PATCH /users/{username} - Partially update user (self or admin)
DELETE /users/{username} - Delete user (self or admin)
POST /users/{username}/jobs/{job_id} - Apply to a job (self or admin)
"""

from fastapi import APIRouter, Depends
from passlib.context import CryptContext

from jobly.api.deps import JobId
from jobly.core.auth import (
    create_access_token, ensure_admin, ensure_correct_user_or_admin,
    get_pwd_context, get_settings_from_app,
)
from jobly.core.config import Settings
from jobly.db import Database, get_database
from jobly.models import User
from jobly.schemas.schemas import (
    UserNew, UserUpdate, UserOut, UserDetailOut, UserListOut, UserTokenOut,
    AppliedOut, DeletedOut
)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", response_model=UserTokenOut, status_code=201, dependencies=[Depends(ensure_admin)])
def create_user(
    data: UserNew,
    database: Database = Depends(get_database),
    pwd_context: CryptContext = Depends(get_pwd_context),
    settings: Settings = Depends(get_settings_from_app),
):
    """
    Add a new user. Not the registration endpoint: this lets admins add
    users, including other admins.

    Returns the new user and a token for them.
    """
    with database.session() as db:
        user = User.register(db, data, pwd_context)
    return {"user": user, "token": create_access_token(user, settings)}


@router.get("", response_model=UserListOut, dependencies=[Depends(ensure_admin)])
def list_users(database: Database = Depends(get_database)):
    with database.session() as db:
        users = User.find_all(db)
    return {"users": users}


@router.get("/{username}", response_model=UserDetailOut, dependencies=[Depends(ensure_correct_user_or_admin)])
def get_user(username: str, database: Database = Depends(get_database)):
    with database.session() as db:
        user = User.get(db, username)
    return {"user": user}


@router.patch("/{username}", response_model=UserOut, dependencies=[Depends(ensure_correct_user_or_admin)])
def update_user(
    username: str,
    data: UserUpdate,
    database: Database = Depends(get_database),
    pwd_context: CryptContext = Depends(get_pwd_context),
):
    """Partially update a user. Fields: firstName, lastName, password, email."""
    with database.session() as db:
        user = User.update(db, username, data.model_dump(exclude_unset=True, by_alias=True), pwd_context)
    return {"user": user}


@router.delete("/{username}", response_model=DeletedOut, dependencies=[Depends(ensure_correct_user_or_admin)])
def delete_user(username: str, database: Database = Depends(get_database)):
    with database.session() as db:
        User.remove(db, username)
    return {"deleted": username}


@router.post(
    "/{username}/jobs/{job_id}",
    response_model=AppliedOut,
    status_code=201,
    dependencies=[Depends(ensure_correct_user_or_admin)],
)
def apply_to_job(username: str, job_id: JobId, database: Database = Depends(get_database)):
    """Apply to a job. Cannot apply twice to the same job."""
    with database.session() as db:
        application = User.apply_to_job(db, username, job_id)
    return {"applied": application["jobId"]}
