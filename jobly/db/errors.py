"""Classify database constraint violations across PostgreSQL and SQLite."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

UNIQUE = "unique"
FOREIGN_KEY = "foreign_key"
CHECK = "check"
NOT_NULL = "not_null"

# SQLSTATE codes reported by psycopg2 as exc.orig.pgcode
PG_CODES = {
    "23505": UNIQUE,
    "23503": FOREIGN_KEY,
    "23514": CHECK,
    "23502": NOT_NULL,
}

# sqlite3 only reports a message
SQLITE_MARKERS = (
    ("UNIQUE CONSTRAINT FAILED", UNIQUE),
    ("FOREIGN KEY CONSTRAINT FAILED", FOREIGN_KEY),
    ("CHECK CONSTRAINT FAILED", CHECK),
    ("NOT NULL CONSTRAINT FAILED", NOT_NULL),
)


def constraint_kind(exc: IntegrityError) -> Optional[str]:
    """Which kind of constraint an IntegrityError violated, or None if unknown."""
    code = getattr(exc.orig, "pgcode", None)
    if code:
        return PG_CODES.get(code)

    message = str(exc.orig).upper()
    for marker, kind in SQLITE_MARKERS:
        if marker in message:
            return kind
    return None
