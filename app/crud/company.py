"""
CRUD operations for companies.

Field mappings use the API's camelCase names (numEmployees, logoUrl); the
translation to column names happens here.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.database import run_query
from app.core.exceptions import BadRequestError, NotFoundError
from app.core.sql import Predicate, build_where, check_columns, contains_ci, sql_for_partial_update
from app.crud.job import format_equity

logger = logging.getLogger(__name__)

# Updatable fields -> column names
COMPANY_COLUMNS = {
    "name": "name",
    "description": "description",
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

COMPANY_RETURNING = (
    'handle, name, description, '
    'num_employees AS "numEmployees", logo_url AS "logoUrl"'
)


def create(db: Session, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a company.

    Args:
        db: Database session
        data: {handle, name, description, numEmployees, logoUrl}

    Returns:
        {handle, name, description, numEmployees, logoUrl}

    Raises:
        BadRequestError: If a company with this handle already exists
    """
    handle = data["handle"]
    duplicate_check = run_query(
        db,
        """SELECT handle
           FROM companies
           WHERE handle = $1""",
        [handle]
    )
    if duplicate_check:
        raise BadRequestError(f"Duplicate company: {handle}")

    rows = run_query(
        db,
        f"""INSERT INTO companies
            (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {COMPANY_RETURNING}""",
        [
            handle,
            data["name"],
            data["description"],
            data.get("numEmployees"),
            data.get("logoUrl"),
        ]
    )
    db.commit()

    logger.info(f"Created company {handle}")
    return rows[0]


def find_all(db: Session, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    """
    List companies ordered by name, optionally filtered.

    Supported filters, each optional:
    - minEmployees: num_employees >= value
    - maxEmployees: num_employees <= value
    - name: case-insensitive substring of the company name

    Raises:
        BadRequestError: If minEmployees is greater than maxEmployees
    """
    filters = filters or {}
    min_employees = filters.get("minEmployees")
    max_employees = filters.get("maxEmployees")
    name = filters.get("name")

    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise BadRequestError("minEmployees cannot be greater than maxEmployees")

    predicates = []
    if min_employees is not None:
        predicates.append(Predicate("num_employees", ">=", min_employees))
    if max_employees is not None:
        predicates.append(Predicate("num_employees", "<=", max_employees))
    if name is not None:
        predicates.append(contains_ci("name", name))

    where, values = build_where(predicates)

    return run_query(
        db,
        f"""SELECT {COMPANY_RETURNING}
            FROM companies
            {where}
            ORDER BY name""",
        values
    )


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Fetch a company together with its jobs.

    Returns:
        {handle, name, description, numEmployees, logoUrl, jobs}
        where jobs is [{id, title, salary, equity}, ...], possibly empty

    Raises:
        NotFoundError: If no company has this handle
    """
    rows = run_query(
        db,
        """SELECT companies.handle,
                  companies.name,
                  companies.description,
                  companies.num_employees AS "numEmployees",
                  companies.logo_url AS "logoUrl",
                  jobs.id,
                  jobs.title,
                  jobs.salary,
                  jobs.equity
           FROM companies
           LEFT JOIN jobs ON companies.handle = jobs.company_handle
           WHERE companies.handle = $1
           ORDER BY jobs.id""",
        [handle]
    )
    if not rows:
        raise NotFoundError(f"No company: {handle}")

    first = rows[0]
    company = {
        "handle": first["handle"],
        "name": first["name"],
        "description": first["description"],
        "numEmployees": first["numEmployees"],
        "logoUrl": first["logoUrl"],
    }
    # LEFT JOIN yields one row with NULL job columns when there are no jobs
    company["jobs"] = [
        {
            "id": row["id"],
            "title": row["title"],
            "salary": row["salary"],
            "equity": format_equity(row["equity"]),
        }
        for row in rows
        if row["id"] is not None
    ]

    return company


def update(db: Session, handle: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company; only the supplied fields change.

    Data can include: {name, description, numEmployees, logoUrl}

    Raises:
        BadRequestError: If data is empty or names a field that cannot be updated
        NotFoundError: If no company has this handle
    """
    check_columns(data, COMPANY_COLUMNS)
    set_cols, values = sql_for_partial_update(data, COMPANY_COLUMNS)
    handle_idx = len(values) + 1

    rows = run_query(
        db,
        f"""UPDATE companies
            SET {set_cols}
            WHERE handle = ${handle_idx}
            RETURNING {COMPANY_RETURNING}""",
        [*values, handle]
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return rows[0]


def remove(db: Session, handle: str) -> None:
    """
    Delete a company (its jobs go with it).

    Raises:
        NotFoundError: If no company has this handle
    """
    rows = run_query(
        db,
        """DELETE
           FROM companies
           WHERE handle = $1
           RETURNING handle""",
        [handle]
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Deleted company {handle}")
