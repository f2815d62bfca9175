import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user
from app.crud import job as job_crud
from app.models.user import User
from app.schemas.job import (
    JobCreateRequest,
    JobUpdateRequest,
    JobEnvelope,
    JobListEnvelope,
    DeletedResponse,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=JobEnvelope)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """
    Create a job posting for an existing company. Admin only.
    """
    data = request.model_dump(mode="json", by_alias=True)
    job = job_crud.create(db, data)
    return {"job": job}


@router.get("/", response_model=JobListEnvelope)
def list_jobs(
    min_salary: Optional[int] = Query(None, ge=0, alias="minSalary"),
    title: Optional[str] = Query(None, min_length=1),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db)
):
    """
    List jobs ordered by title.

    Optional filters:
    - minSalary: minimum salary
    - title: case-insensitive partial match on the title
    - hasEquity: true to only list jobs offering non-zero equity
    """
    filters = {
        "minSalary": min_salary,
        "title": title,
        "hasEquity": has_equity,
    }
    jobs = job_crud.find_all(db, filters)
    return {"jobs": jobs}


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a job by ID.
    """
    job = job_crud.get(db, job_id)
    return {"job": job}


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """
    Partially update a job. Admin only.

    Fields can be: { title, salary, equity }. A companyHandle in the body is ignored.
    """
    data = request.model_dump(mode="json", by_alias=True, exclude_unset=True)
    job = job_crud.update(db, job_id, data)
    return {"job": job}


@router.delete("/{job_id}", response_model=DeletedResponse)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """
    Delete a job by ID. Admin only.
    """
    job_crud.remove(db, job_id)
    logger.info(f"Admin {admin_user.username} deleted job {job_id}")
    return {"deleted": str(job_id)}
