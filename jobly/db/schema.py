"""
Table definitions (DDL only).

Queries are written as raw SQL in jobly.models; these tables exist so the
schema can be created on PostgreSQL and SQLite from one definition.
"""

from sqlalchemy import (
    Boolean, CheckConstraint, Column, ForeignKey, Integer, MetaData,
    Numeric, PrimaryKeyConstraint, String, Table, Text, false,
)

metadata = MetaData()

companies = Table(
    "companies",
    metadata,
    Column("handle", String(25), primary_key=True),
    Column("name", Text, nullable=False),
    Column("num_employees", Integer, CheckConstraint("num_employees >= 0", name="companies_num_employees_check")),
    Column("description", Text),
    Column("logo_url", Text),
)

jobs = Table(
    "jobs",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", Text, nullable=False),
    Column("salary", Integer, CheckConstraint("salary >= 0", name="jobs_salary_check")),
    Column("equity", Numeric, CheckConstraint("equity >= 0 AND equity <= 1.0", name="jobs_equity_check")),
    Column(
        "company_handle",
        String(25),
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
    ),
)

users = Table(
    "users",
    metadata,
    Column("username", String(25), primary_key=True),
    Column("password", Text, nullable=False),
    Column("first_name", Text, nullable=False),
    Column("last_name", Text, nullable=False),
    Column("email", Text, nullable=False),
    Column("is_admin", Boolean, nullable=False, server_default=false()),
)

applications = Table(
    "applications",
    metadata,
    Column("username", String(25), ForeignKey("users.username", ondelete="CASCADE"), nullable=False),
    Column("job_id", Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False),
    PrimaryKeyConstraint("username", "job_id"),
)
