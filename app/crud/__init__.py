"""
CRUD operations (Create, Read, Update, Delete) for companies and jobs.

This layer provides a clean separation between API routes and database operations,
following the Repository pattern.
"""

from app.crud import company, job

__all__ = ["company", "job"]
