"""Related functions for companies."""

import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.errors import BadRequestError, NotFoundError
from jobly.db.errors import UNIQUE, constraint_kind
from jobly.schemas.schemas import CompanyNew
from jobly.utils.sql import FilterPredicate, SqlFragment, sql_for_partial_update, sql_where_from_filters

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = """
    handle,
    name,
    description,
    num_employees AS "numEmployees",
    logo_url AS "logoUrl"
"""

# Search filters, in placeholder order
COMPANY_FILTERS = (
    FilterPredicate("minEmployees", "num_employees", ">="),
    FilterPredicate("maxEmployees", "num_employees", "<="),
    FilterPredicate("nameLike", "LOWER(name)", "LIKE", lambda v: f"%{v.lower()}%"),
)


class Company:

    @staticmethod
    def create(db: Session, data: CompanyNew) -> dict:
        """
        Create a company (from data), update db, return new company data.

        Returns { handle, name, description, numEmployees, logoUrl }

        Throws BadRequestError if company already in database.
        """
        duplicate = db.execute(
            text("SELECT handle FROM companies WHERE handle = :handle"),
            {"handle": data.handle},
        ).first()
        if duplicate:
            raise BadRequestError(f"Duplicate company: {data.handle}")

        try:
            row = db.execute(
                text(f"""
                    INSERT INTO companies (handle, name, description, num_employees, logo_url)
                    VALUES (:handle, :name, :description, :num_employees, :logo_url)
                    RETURNING {COMPANY_COLUMNS}
                """),
                data.model_dump(),
            ).mappings().one()
        except IntegrityError as e:
            # lost a race with a concurrent insert of the same handle
            if constraint_kind(e) == UNIQUE:
                raise BadRequestError(f"Duplicate company: {data.handle}")
            raise

        logger.info("Created company %s", data.handle)
        return dict(row)

    @staticmethod
    def _filter_by_query(filters: dict) -> SqlFragment:
        """
        Build the WHERE clause for the optional search filters
        minEmployees, maxEmployees and nameLike.

        Returns SqlFragment('WHERE num_employees >= :p1 AND ...', [200, ...])
        """
        return sql_where_from_filters(filters, COMPANY_FILTERS)

    @classmethod
    def find_all(cls, db: Session, filters: Optional[dict] = None) -> list:
        """
        Find all companies, optionally filtered.

        Returns [{ handle, name, description, numEmployees, logoUrl }, ...]

        Throws BadRequestError if minEmployees > maxEmployees.
        """
        filters = filters or {}
        min_employees = filters.get("minEmployees")
        max_employees = filters.get("maxEmployees")
        if min_employees is not None and max_employees is not None and min_employees > max_employees:
            raise BadRequestError("minEmployees must be less than maxEmployees")

        where = cls._filter_by_query(filters)
        rows = db.execute(
            text(f"SELECT {COMPANY_COLUMNS} FROM companies {where.sql} ORDER BY name"),
            where.params,
        ).mappings().all()
        return [dict(r) for r in rows]

    @staticmethod
    def get(db: Session, handle: str) -> dict:
        """
        Given a company handle, return data about company.

        Throws NotFoundError if not found.
        """
        row = db.execute(
            text(f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = :handle"),
            {"handle": handle},
        ).mappings().first()

        if not row:
            raise NotFoundError(f"No company: {handle}")
        return dict(row)

    @staticmethod
    def update(db: Session, handle: str, data: dict) -> dict:
        """
        Update company data with `data`.

        This is a "partial update" --- it's fine if data doesn't contain all
        the fields; this only changes provided ones.

        Data can include: {name, description, numEmployees, logoUrl}

        Throws NotFoundError if not found, BadRequestError if data is empty.
        """
        set_cols = sql_for_partial_update(
            data,
            {
                "numEmployees": "num_employees",
                "logoUrl": "logo_url",
            },
        )
        row = db.execute(
            text(f"""
                UPDATE companies
                SET {set_cols.sql}
                WHERE handle = :handle
                RETURNING {COMPANY_COLUMNS}
            """),
            {**set_cols.params, "handle": handle},
        ).mappings().first()

        if not row:
            raise NotFoundError(f"No company: {handle}")
        return dict(row)

    @staticmethod
    def remove(db: Session, handle: str) -> None:
        """Delete given company from database. Throws NotFoundError if absent."""
        row = db.execute(
            text("DELETE FROM companies WHERE handle = :handle RETURNING handle"),
            {"handle": handle},
        ).first()

        if not row:
            raise NotFoundError(f"No company: {handle}")
        logger.info("Deleted company %s", handle)
