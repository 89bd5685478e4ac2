"""
Company Routes

POST /companies - Create company (admin)
GET /companies - List companies, filter by minEmployees, maxEmployees, nameLike
GET /companies/{handle} - Get company
PATCH /companies/{handle} - Partially update company (admin)
DELETE /companies/{handle} - Delete company (admin)
"""

from fastapi import APIRouter, Depends, Request

from jobly.api.deps import validate_query
from jobly.core.auth import ensure_admin
from jobly.db import Database, get_database
from jobly.models import Company
from jobly.schemas.schemas import (
    CompanyNew, CompanyUpdate, CompanySearch, CompanyOut, CompanyListOut, DeletedOut
)

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("", response_model=CompanyOut, status_code=201, dependencies=[Depends(ensure_admin)])
def create_company(data: CompanyNew, database: Database = Depends(get_database)):
    """Create a company. Admin only."""
    with database.session() as db:
        company = Company.create(db, data)
    return {"company": company}


@router.get("", response_model=CompanyListOut)
def list_companies(request: Request, database: Database = Depends(get_database)):
    """
    List companies, ordered by name.

    Optional filters:
    - minEmployees / maxEmployees
    - nameLike (case-insensitive, partial match)
    """
    search = validate_query(request, CompanySearch)
    with database.session() as db:
        companies = Company.find_all(db, search.model_dump(exclude_none=True, by_alias=True))
    return {"companies": companies}


@router.get("/{handle}", response_model=CompanyOut)
def get_company(handle: str, database: Database = Depends(get_database)):
    with database.session() as db:
        company = Company.get(db, handle)
    return {"company": company}


@router.patch("/{handle}", response_model=CompanyOut, dependencies=[Depends(ensure_admin)])
def update_company(handle: str, data: CompanyUpdate, database: Database = Depends(get_database)):
    """Partially update a company. Fields: name, description, numEmployees, logoUrl."""
    with database.session() as db:
        company = Company.update(db, handle, data.model_dump(exclude_unset=True, by_alias=True))
    return {"company": company}


@router.delete("/{handle}", response_model=DeletedOut, dependencies=[Depends(ensure_admin)])
def delete_company(handle: str, database: Database = Depends(get_database)):
    """Delete a company and its jobs. Admin only."""
    with database.session() as db:
        Company.remove(db, handle)
    return {"deleted": handle}
