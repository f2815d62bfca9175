"""
CRUD operations for jobs.

Implements the Repository pattern over raw parameterized SQL; callers pass
and receive plain dicts keyed by the API's field names.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.database import run_query
from app.core.exceptions import BadRequestError, NotFoundError
from app.core.sql import Predicate, build_where, check_columns, contains_ci, sql_for_partial_update

logger = logging.getLogger(__name__)

# Updatable fields -> column names. companyHandle is deliberately absent.
JOB_COLUMNS = {
    "title": "title",
    "salary": "salary",
    "equity": "equity",
}

JOB_RETURNING = 'id, title, salary, equity, company_handle AS "companyHandle"'


def format_equity(equity: Any) -> Optional[str]:
    """Render a NUMERIC equity value as a decimal string."""
    return None if equity is None else str(equity)


def _to_job(row: Dict[str, Any]) -> Dict[str, Any]:
    return {**row, "equity": format_equity(row["equity"])}


def create(db: Session, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a new job.

    Args:
        db: Database session
        data: {title, salary, equity, companyHandle}

    Returns:
        {id, title, salary, equity, companyHandle}

    Raises:
        BadRequestError: If companyHandle does not name an existing company
    """
    company_handle = data["companyHandle"]
    company_check = run_query(
        db,
        """SELECT handle
           FROM companies
           WHERE handle = $1""",
        [company_handle]
    )
    if not company_check:
        raise BadRequestError(f"No company: {company_handle}")

    rows = run_query(
        db,
        f"""INSERT INTO jobs
            (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {JOB_RETURNING}""",
        [
            data["title"],
            data.get("salary"),
            data.get("equity"),
            company_handle,
        ]
    )
    db.commit()

    job = _to_job(rows[0])
    logger.info(f"Created job {job['id']}: {job['title']} ({company_handle})")
    return job


def find_all(db: Session, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    """
    List jobs ordered by title, optionally filtered.

    Supported filters, each optional:
    - minSalary: salary >= value
    - title: case-insensitive substring of the title
    - hasEquity: when true, only jobs with non-zero equity;
      false is the same as not filtering

    Returns:
        [{id, title, salary, equity, companyHandle}, ...]
    """
    filters = filters or {}
    predicates = []

    if filters.get("minSalary") is not None:
        predicates.append(Predicate("salary", ">=", filters["minSalary"]))
    if filters.get("title") is not None:
        predicates.append(contains_ci("title", filters["title"]))
    if filters.get("hasEquity"):
        predicates.append(Predicate("equity", "> 0"))

    where, values = build_where(predicates)

    rows = run_query(
        db,
        f"""SELECT {JOB_RETURNING}
            FROM jobs
            {where}
            ORDER BY title""",
        values
    )
    return [_to_job(row) for row in rows]


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Retrieve a job by its ID.

    Raises:
        NotFoundError: If no job has this id
    """
    rows = run_query(
        db,
        f"""SELECT {JOB_RETURNING}
            FROM jobs
            WHERE id = $1""",
        [job_id]
    )
    if not rows:
        raise NotFoundError(f"No job: {job_id}")

    return _to_job(rows[0])


def update(db: Session, job_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job; only the supplied fields change.

    Data can include: {title, salary, equity}. A companyHandle entry is
    dropped without error since a job cannot move between companies.

    Raises:
        BadRequestError: If nothing updatable is supplied
        NotFoundError: If no job has this id
    """
    data = {key: value for key, value in data.items() if key != "companyHandle"}
    check_columns(data, JOB_COLUMNS)
    set_cols, values = sql_for_partial_update(data, JOB_COLUMNS)
    job_id_idx = len(values) + 1

    rows = run_query(
        db,
        f"""UPDATE jobs
            SET {set_cols}
            WHERE id = ${job_id_idx}
            RETURNING {JOB_RETURNING}""",
        [*values, job_id]
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return _to_job(rows[0])


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by ID.

    Raises:
        NotFoundError: If no job has this id
    """
    rows = run_query(
        db,
        """DELETE
           FROM jobs
           WHERE id = $1
           RETURNING id""",
        [job_id]
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Deleted job {job_id}")
