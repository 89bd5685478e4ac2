"""Related functions for users."""

import logging

from passlib.context import CryptContext
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.auth import hash_password, verify_password
from jobly.core.errors import BadRequestError, NotFoundError, UnauthorizedError
from jobly.db.errors import FOREIGN_KEY, UNIQUE, constraint_kind
from jobly.schemas.schemas import UserNew
from jobly.utils.sql import sql_for_partial_update

logger = logging.getLogger(__name__)

USER_COLUMNS = """
    username,
    first_name AS "firstName",
    last_name AS "lastName",
    email,
    is_admin AS "isAdmin"
"""


def _user_from_row(row) -> dict:
    user = dict(row)
    user["isAdmin"] = bool(user["isAdmin"])
    return user


class User:

    @staticmethod
    def authenticate(db: Session, username: str, password: str, pwd_context: CryptContext) -> dict:
        """
        Authenticate user with username, password.

        Returns { username, firstName, lastName, email, isAdmin }

        Throws UnauthorizedError if user not found or wrong password.
        """
        row = db.execute(
            text(f"SELECT {USER_COLUMNS}, password FROM users WHERE username = :username"),
            {"username": username},
        ).mappings().first()

        if row and verify_password(password, row["password"], pwd_context):
            user = _user_from_row(row)
            del user["password"]
            return user

        raise UnauthorizedError("Invalid username/password")

    @staticmethod
    def register(db: Session, data: UserNew, pwd_context: CryptContext) -> dict:
        """
        Register user with data.

        Returns { username, firstName, lastName, email, isAdmin }

        Throws BadRequestError on duplicates.
        """
        duplicate = db.execute(
            text("SELECT username FROM users WHERE username = :username"),
            {"username": data.username},
        ).first()
        if duplicate:
            raise BadRequestError(f"Duplicate username: {data.username}")

        values = data.model_dump()
        values["password"] = hash_password(data.password, pwd_context)
        try:
            row = db.execute(
                text(f"""
                    INSERT INTO users (username, password, first_name, last_name, email, is_admin)
                    VALUES (:username, :password, :first_name, :last_name, :email, :is_admin)
                    RETURNING {USER_COLUMNS}
                """),
                values,
            ).mappings().one()
        except IntegrityError as e:
            if constraint_kind(e) == UNIQUE:
                raise BadRequestError(f"Duplicate username: {data.username}")
            raise

        logger.info("Registered user %s (admin=%s)", data.username, data.is_admin)
        return _user_from_row(row)

    @staticmethod
    def find_all(db: Session) -> list:
        """
        Find all users.

        Returns [{ username, firstName, lastName, email, isAdmin }, ...]
        """
        rows = db.execute(
            text(f"SELECT {USER_COLUMNS} FROM users ORDER BY username")
        ).mappings().all()
        return [_user_from_row(r) for r in rows]

    @staticmethod
    def get(db: Session, username: str) -> dict:
        """
        Given a username, return data about user.

        Returns { username, firstName, lastName, email, isAdmin, jobs }
          where jobs is the list of job ids the user applied to

        Throws NotFoundError if user not found.
        """
        row = db.execute(
            text(f"SELECT {USER_COLUMNS} FROM users WHERE username = :username"),
            {"username": username},
        ).mappings().first()

        if not row:
            raise NotFoundError(f"No user: {username}")

        user = _user_from_row(row)
        user["jobs"] = list(db.execute(
            text("SELECT job_id FROM applications WHERE username = :username ORDER BY job_id"),
            {"username": username},
        ).scalars())
        return user

    @staticmethod
    def update(db: Session, username: str, data: dict, pwd_context: CryptContext) -> dict:
        """
        Update user data with `data`.

        This is a "partial update" --- it's fine if data doesn't contain
        all the fields; this only changes provided ones.

        Data can include:
          { firstName, lastName, password, email, isAdmin }

        Returns { username, firstName, lastName, email, isAdmin }

        Throws NotFoundError if not found.
        """
        data = dict(data)
        if data.get("password"):
            data["password"] = hash_password(data["password"], pwd_context)

        set_cols = sql_for_partial_update(
            data,
            {
                "firstName": "first_name",
                "lastName": "last_name",
                "isAdmin": "is_admin",
            },
        )
        row = db.execute(
            text(f"""
                UPDATE users
                SET {set_cols.sql}
                WHERE username = :username
                RETURNING {USER_COLUMNS}
            """),
            {**set_cols.params, "username": username},
        ).mappings().first()

        if not row:
            raise NotFoundError(f"No user: {username}")
        return _user_from_row(row)

    @staticmethod
    def remove(db: Session, username: str) -> None:
        """Delete given user from database. Throws NotFoundError if absent."""
        row = db.execute(
            text("DELETE FROM users WHERE username = :username RETURNING username"),
            {"username": username},
        ).first()

        if not row:
            raise NotFoundError(f"No user: {username}")
        logger.info("Deleted user %s", username)

    @staticmethod
    def apply_to_job(db: Session, username: str, job_id: int) -> dict:
        """
        Apply for a job.

        Returns { username, jobId }

        Throws NotFoundError if the job or the user does not exist,
        BadRequestError if the user already applied.
        """
        job = db.execute(text("SELECT id FROM jobs WHERE id = :id"), {"id": job_id}).first()
        if not job:
            raise NotFoundError(f"No job: {job_id}")

        user = db.execute(
            text("SELECT username FROM users WHERE username = :username"),
            {"username": username},
        ).first()
        if not user:
            raise NotFoundError(f"No user: {username}")

        try:
            row = db.execute(
                text("""
                    INSERT INTO applications (username, job_id)
                    VALUES (:username, :job_id)
                    RETURNING username, job_id AS "jobId"
                """),
                {"username": username, "job_id": job_id},
            ).mappings().one()
        except IntegrityError as e:
            kind = constraint_kind(e)
            if kind == UNIQUE:
                raise BadRequestError(f"Already applied to job: {job_id}")
            if kind == FOREIGN_KEY:
                # job or user removed after the existence checks
                raise NotFoundError(f"No job: {job_id}")
            raise

        logger.info("User %s applied to job %s", username, job_id)
        return dict(row)
