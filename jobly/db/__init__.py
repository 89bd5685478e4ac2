"""
Database module - engine, sessions and table definitions.
"""
from jobly.db.database import Database, get_database

__all__ = [
    "Database",
    "get_database",
]
