"""
Shared fixtures.

Each test gets its own SQLite database file seeded with:
- companies c1, c2, c3 (1, 2 and 3 employees)
- users u1 (admin), u2, u3
- jobs "Cow Herder" (c1), "Janitor" (c2, no equity), "CEO" (c3)
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text

from jobly.core.auth import build_password_context, create_access_token
from jobly.core.config import Settings
from jobly.db import Database
from jobly.main import create_app
from jobly.models import Company, Job, User
from jobly.schemas.schemas import CompanyNew, JobNew, UserNew


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'jobly_test.db'}",
        jwt_secret_key="test-secret",
        bcrypt_rounds=4,
        log_level="DEBUG",
    )


@pytest.fixture
def pwd_context(settings):
    return build_password_context(settings.bcrypt_rounds)


@pytest.fixture
def database(settings):
    database = Database.from_settings(settings)
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def job_ids(database, pwd_context):
    """Seed the database and return the ids of the three jobs, in creation order."""
    with database.session() as db:
        for n in (1, 2, 3):
            Company.create(db, CompanyNew(
                handle=f"c{n}",
                name=f"C{n}",
                num_employees=n,
                description=f"Desc{n}",
                logo_url=f"http://c{n}.img",
            ))
        for n, is_admin in ((1, True), (2, False), (3, False)):
            User.register(db, UserNew(
                username=f"u{n}",
                first_name=f"U{n}F",
                last_name=f"U{n}L",
                email=f"user{n}@user.com",
                password=f"password{n}",
                is_admin=is_admin,
            ), pwd_context)
        herder = Job.create(db, JobNew(title="Cow Herder", salary=95000, equity="0.15", company_handle="c1"))
        janitor = Job.create(db, JobNew(title="Janitor", salary=32000, equity="0", company_handle="c2"))
        ceo = Job.create(db, JobNew(title="CEO", salary=729000, equity="0.9", company_handle="c3"))
    return [herder["id"], janitor["id"], ceo["id"]]


@pytest.fixture
def db(database, job_ids):
    """A session on the seeded database, rolled back after the test."""
    session = database.SessionLocal()
    yield session
    session.rollback()
    session.close()


class PrecheckSkippingSession:
    """
    Wraps a session so every SELECT finds nothing.

    Existence checks in the models then pass, and inserts run straight into
    the table constraints, as when a concurrent request wins the race.
    """

    def __init__(self, session):
        self._session = session

    def execute(self, statement, params=None):
        if str(statement).lstrip().upper().startswith("SELECT"):
            return self._session.execute(text("SELECT 1 WHERE 1 = 0"))
        return self._session.execute(statement, params)


@pytest.fixture
def racing_db(db):
    return PrecheckSkippingSession(db)


@pytest.fixture
def client(settings, database, job_ids):
    return TestClient(create_app(settings, database))


@pytest.fixture
def admin_token(settings):
    return create_access_token({"username": "u1", "isAdmin": True}, settings)


@pytest.fixture
def user_token(settings):
    return create_access_token({"username": "u2", "isAdmin": False}, settings)


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def user_headers(user_token):
    return {"Authorization": f"Bearer {user_token}"}
