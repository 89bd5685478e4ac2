"""
Models module - one class per table, issuing parameterized SQL.

Every method takes the request's database session as its first argument.
"""

from jobly.models.company import Company
from jobly.models.job import Job
from jobly.models.user import User

__all__ = ["Company", "Job", "User"]
