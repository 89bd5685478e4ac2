"""
Job Routes

POST /jobs - Create job (admin)
GET /jobs - List jobs, filter by title, minSalary, hasEquity
GET /jobs/{job_id} - Get job details
PATCH /jobs/{job_id} - Partially update job (admin)
DELETE /jobs/{job_id} - Delete job (admin)
"""

from fastapi import APIRouter, Depends, Request

from jobly.api.deps import JobId, validate_query
from jobly.core.auth import ensure_admin
from jobly.db import Database, get_database
from jobly.models import Job
from jobly.schemas.schemas import (
    JobNew, JobUpdate, JobSearch, JobOut, JobListOut, DeletedOut
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post("", response_model=JobOut, status_code=201, dependencies=[Depends(ensure_admin)])
def create_job(data: JobNew, database: Database = Depends(get_database)):
    """Create a job. The company must already exist. Admin only."""
    with database.session() as db:
        job = Job.create(db, data)
    return {"job": job}


@router.get("", response_model=JobListOut)
def list_jobs(request: Request, database: Database = Depends(get_database)):
    """
    List jobs, ordered by company handle and title.

    Optional filters:
    - title (case-insensitive, partial match)
    - minSalary
    - hasEquity (true: equity > 0, false: equity = 0)
    """
    search = validate_query(request, JobSearch)
    with database.session() as db:
        jobs = Job.find_all(db, search.model_dump(exclude_none=True, by_alias=True))
    return {"jobs": jobs}


@router.get("/{job_id}", response_model=JobOut)
def get_job(job_id: JobId, database: Database = Depends(get_database)):
    """Get details of a specific job."""
    with database.session() as db:
        job = Job.get(db, job_id)
    return {"job": job}


@router.patch("/{job_id}", response_model=JobOut, dependencies=[Depends(ensure_admin)])
def update_job(job_id: JobId, data: JobUpdate, database: Database = Depends(get_database)):
    """Partially update a job. Fields: title, salary, equity."""
    with database.session() as db:
        job = Job.update(db, job_id, data.model_dump(mode="json", exclude_unset=True, by_alias=True))
    return {"job": job}


@router.delete("/{job_id}", response_model=DeletedOut, dependencies=[Depends(ensure_admin)])
def delete_job(job_id: JobId, database: Database = Depends(get_database)):
    """Delete a job. Cascades to applications. Admin only."""
    with database.session() as db:
        Job.remove(db, job_id)
    return {"deleted": job_id}
