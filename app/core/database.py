import logging
import re
from typing import Any, Dict, List, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from app.core.config import settings

logger = logging.getLogger(__name__)

# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using them
    pool_size=10,  # Connection pool size
    max_overflow=20  # Allow up to 20 connections beyond pool_size
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()

# $1, $2, ... positional placeholders
_POSITIONAL_PARAM = re.compile(r"\$(\d+)")


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def run_query(db: Session, sql: str, values: Sequence[Any] = ()) -> List[Dict[str, Any]]:
    """
    Execute SQL written with $1..$n positional placeholders.

    The placeholders are rewritten to SQLAlchemy named binds (:p1..:pn) so the
    same statement runs on PostgreSQL and on the SQLite test database.

    Args:
        db: Database session
        sql: Statement text; must return rows (SELECT or ... RETURNING)
        values: Positional values, values[0] binds to $1

    Returns:
        Result rows as plain dicts keyed by column label
    """
    statement = text(_POSITIONAL_PARAM.sub(r":p\1", sql))
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}

    logger.debug(f"Executing SQL: {' '.join(sql.split())} | values={list(values)}")

    result = db.execute(statement, params)
    return [dict(row) for row in result.mappings().all()]


def init_db():
    """
    Initialize database.

    We rely on Alembic for table creation, so this only makes sure the
    models are imported and registered on Base.metadata.

    Use "alembic upgrade head" to create/update database schema.
    """
    from app.models import company, job, user  # noqa: F401
