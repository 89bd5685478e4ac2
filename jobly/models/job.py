"""Related functions for jobs."""

import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.errors import BadRequestError, NotFoundError
from jobly.db.errors import FOREIGN_KEY, constraint_kind
from jobly.schemas.schemas import JobNew
from jobly.utils.sql import FilterPredicate, SqlFragment, sql_for_partial_update, sql_where_from_filters

logger = logging.getLogger(__name__)

JOB_COLUMNS = """
    id,
    title,
    salary,
    equity,
    company_handle AS "companyHandle"
"""

# Search filters, in placeholder order. hasEquity binds 0 and picks the operator.
JOB_FILTERS = (
    FilterPredicate("title", "LOWER(title)", "LIKE", lambda v: f"%{v.lower()}%"),
    FilterPredicate("minSalary", "salary", ">="),
    FilterPredicate("hasEquity", "equity", lambda has: ">" if has else "=", lambda has: 0),
)


def _job_from_row(row) -> dict:
    """Equity comes back as Decimal (postgres) or float (sqlite); expose it as a plain decimal string."""
    job = dict(row)
    if job["equity"] is not None:
        job["equity"] = format(Decimal(str(job["equity"])), "f")
    return job


class Job:

    @staticmethod
    def create(db: Session, data: JobNew) -> dict:
        """
        Create a job (from data), update db, return new job data.

        Returns { id, title, salary, equity, companyHandle }

        Company needs to exist before creating a job; throws
        BadRequestError otherwise.
        """
        company = db.execute(
            text("SELECT handle FROM companies WHERE handle = :handle"),
            {"handle": data.company_handle},
        ).first()
        if not company:
            raise BadRequestError(f"Company does not exist: {data.company_handle}")

        try:
            row = db.execute(
                text(f"""
                    INSERT INTO jobs (title, salary, equity, company_handle)
                    VALUES (:title, :salary, :equity, :company_handle)
                    RETURNING {JOB_COLUMNS}
                """),
                data.model_dump(mode="json"),
            ).mappings().one()
        except IntegrityError as e:
            # company removed between the check and the insert
            if constraint_kind(e) == FOREIGN_KEY:
                raise BadRequestError(f"Company does not exist: {data.company_handle}")
            raise

        logger.info("Created job %s for %s", row["id"], data.company_handle)
        return _job_from_row(row)

    @staticmethod
    def _filter_by_query(filters: dict) -> SqlFragment:
        """
        Build the WHERE clause for the optional search filters
        title, minSalary and hasEquity.

        A filter counts as given whenever it is not None, so minSalary=0
        and hasEquity=False still filter.
        """
        return sql_where_from_filters(filters, JOB_FILTERS)

    @classmethod
    def find_all(cls, db: Session, filters: Optional[dict] = None) -> list:
        """
        Find jobs, optionally filtered.

        Input for filter search:
        {"title": "Janitor", "minSalary": 10000, "hasEquity": False}

        Returns [{ id, title, salary, equity, companyHandle }, ...]
        """
        where = cls._filter_by_query(filters or {})
        rows = db.execute(
            text(f"SELECT {JOB_COLUMNS} FROM jobs {where.sql} ORDER BY company_handle, title"),
            where.params,
        ).mappings().all()
        return [_job_from_row(r) for r in rows]

    @staticmethod
    def get(db: Session, job_id: int) -> dict:
        """Given a job id, return data about that job. Throws NotFoundError if not found."""
        row = db.execute(
            text(f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = :id"),
            {"id": job_id},
        ).mappings().first()

        if not row:
            raise NotFoundError(f"No job: {job_id}")
        return _job_from_row(row)

    @staticmethod
    def update(db: Session, job_id: int, data: dict) -> dict:
        """
        Update job data with `data`.

        This is a "partial update" --- it's fine if data doesn't contain all
        the fields; this only changes provided ones.

        Data can include: {title, salary, equity}

        Throws NotFoundError if not found, BadRequestError if data is empty.
        """
        set_cols = sql_for_partial_update(data, {"companyHandle": "company_handle"})
        row = db.execute(
            text(f"""
                UPDATE jobs
                SET {set_cols.sql}
                WHERE id = :id
                RETURNING {JOB_COLUMNS}
            """),
            {**set_cols.params, "id": job_id},
        ).mappings().first()

        if not row:
            raise NotFoundError(f"No job: {job_id}")
        return _job_from_row(row)

    @staticmethod
    def remove(db: Session, job_id: int) -> None:
        """Delete given job from database. Throws NotFoundError if absent."""
        row = db.execute(
            text("DELETE FROM jobs WHERE id = :id RETURNING id"),
            {"id": job_id},
        ).first()

        if not row:
            raise NotFoundError(f"No job: {job_id}")
        logger.info("Deleted job %s", job_id)
