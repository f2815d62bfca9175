"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Seeded companies and jobs
- Admin and regular user tokens
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db, run_query
from app.core.security import create_access_token, get_password_hash
from app.models.user import User
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def db_session():
    """
    Create a fresh database session for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seeded(db_session):
    """
    Three companies and four jobs.

    c1 has j1..j3 (salaries 100/200/300, all with equity), c2 has j4
    (salary 400, no equity) and c3 has no jobs.

    Returns a dict of job title -> job id.
    """
    for handle, name, num_employees in [("c1", "C1", 1), ("c2", "C2", 2), ("c3", "C3", 3)]:
        run_query(
            db_session,
            """INSERT INTO companies (handle, name, num_employees, description, logo_url)
               VALUES ($1, $2, $3, $4, $5)
               RETURNING handle""",
            [handle, name, num_employees, f"Desc{handle[-1]}", f"http://{handle}.img"]
        )

    job_ids = {}
    for title, salary, equity, company_handle in [
        ("j1", 100, "0.5", "c1"),
        ("j2", 200, "0.6", "c1"),
        ("j3", 300, "0.7", "c1"),
        ("j4", 400, None, "c2"),
    ]:
        rows = run_query(
            db_session,
            """INSERT INTO jobs (title, salary, equity, company_handle)
               VALUES ($1, $2, $3, $4)
               RETURNING id""",
            [title, salary, equity, company_handle]
        )
        job_ids[title] = rows[0]["id"]

    db_session.commit()
    return job_ids


def _create_user(db_session, username: str, is_admin: bool) -> User:
    user = User(
        username=username,
        hashed_password=get_password_hash("password1"),
        first_name="First",
        last_name="Last",
        email=f"{username}@example.com",
        is_admin=is_admin,
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def admin_headers(db_session):
    """Authorization headers for an admin user"""
    user = _create_user(db_session, "admin", is_admin=True)
    token = create_access_token(data={"sub": user.username, "is_admin": True})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(db_session):
    """Authorization headers for a regular (non-admin) user"""
    user = _create_user(db_session, "u1", is_admin=False)
    token = create_access_token(data={"sub": user.username, "is_admin": False})
    return {"Authorization": f"Bearer {token}"}
