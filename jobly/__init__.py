"""
Jobly - Job board API
CRUD and search over companies, jobs and users.

Architecture:
- PostgreSQL: companies, jobs, users, applications
- JWT bearer tokens for authentication
- Admin / self-or-admin authorization gates
"""

__version__ = "1.0.0"
