import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user
from app.crud import company as company_crud
from app.models.user import User
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyUpdateRequest,
    CompanyEnvelope,
    CompanyDetailEnvelope,
    CompanyListEnvelope,
)
from app.schemas.job import DeletedResponse

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=CompanyEnvelope)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """
    Create a company. Admin only.

    Returns 400 if a company with the same handle exists.
    """
    data = request.model_dump(mode="json", by_alias=True)
    company = company_crud.create(db, data)
    return {"company": company}


@router.get("/", response_model=CompanyListEnvelope)
def list_companies(
    min_employees: Optional[int] = Query(None, ge=0, alias="minEmployees"),
    max_employees: Optional[int] = Query(None, ge=0, alias="maxEmployees"),
    name: Optional[str] = Query(None, min_length=1),
    db: Session = Depends(get_db)
):
    """
    List companies ordered by name.

    Optional filters:
    - minEmployees / maxEmployees: employee count bounds (400 if min > max)
    - name: case-insensitive partial match on the company name
    """
    filters = {
        "minEmployees": min_employees,
        "maxEmployees": max_employees,
        "name": name,
    }
    companies = company_crud.find_all(db, filters)
    return {"companies": companies}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """
    Retrieve a company and its jobs.
    """
    company = company_crud.get(db, handle)
    return {"company": company}


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """
    Partially update a company. Admin only.

    Fields can be: { name, description, numEmployees, logoUrl }
    """
    data = request.model_dump(mode="json", by_alias=True, exclude_unset=True)
    company = company_crud.update(db, handle, data)
    return {"company": company}


@router.delete("/{handle}", response_model=DeletedResponse)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """
    Delete a company and its jobs. Admin only.
    """
    company_crud.remove(db, handle)
    logger.info(f"Admin {admin_user.username} deleted company {handle}")
    return {"deleted": handle}
