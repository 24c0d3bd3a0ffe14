"""Pytest fixtures: file-backed SQLite database for fast, isolated tests."""
import os
import uuid

SQLITE_URL = "sqlite:///./test.db"
os.environ["DATABASE_URL"] = SQLITE_URL

import pytest  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from request_tracker.auth import CurrentUser, create_access_token  # noqa: E402
from request_tracker.database import Base, get_db  # noqa: E402
from request_tracker.main import app  # noqa: E402

# Import all models so they register with Base.metadata
from request_tracker.models.user import Role, User, StudentProfile  # noqa: E402
from request_tracker.models.request import Request, SubjectLine  # noqa: E402,F401
from request_tracker.models.status_history import StatusHistoryEntry  # noqa: E402,F401


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # Enable WAL mode for better concurrency
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session, closed after the test."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_engine):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers: users are inserted directly; registration belongs to the
# credential store, not this service.
# ---------------------------------------------------------------------------
def create_test_user(db, role: Role = Role.STUDENT, email: str = None) -> User:
    """Insert a user with ``role`` and return it."""
    user = User(email=email or f"{role.value.lower()}-{uuid.uuid4().hex[:8]}@pup.edu.ph", role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_test_student(db, first_name: str = "Juan", last_name: str = "Dela Cruz",
                        student_no: str = None, phone: str = "09123456789") -> User:
    """Insert a STUDENT user together with a profile."""
    user = create_test_user(db, Role.STUDENT)
    db.add(StudentProfile(
        user_id=user.user_id,
        student_no=student_no or f"2024-{uuid.uuid4().hex[:6]}",
        first_name=first_name,
        last_name=last_name,
        phone=phone,
        section="CPE-3A",
        year_level=3,
        course="Computer Engineering",
    ))
    db.commit()
    db.refresh(user)
    return user


def as_actor(user: User) -> CurrentUser:
    return CurrentUser(user_id=user.user_id, role=user.role, email=user.email)


def auth_headers(user: User) -> dict:
    """Bearer headers for ``user``."""
    return {"Authorization": f"Bearer {create_access_token(user.user_id, user.role, user.email)}"}


def subject_payload(code: str = "CPE-401", title: str = "Embedded Systems", units: int = 3, **extra) -> dict:
    return {"code": code, "title": title, "units": units, **extra}


def create_test_request(client: TestClient, student: User, request_type: str = "OVERLOAD",
                        semester: str = "1st Sem 2025-2026", subjects: list = None,
                        reason: str = None) -> dict:
    """Helper: POST /api/requests as ``student`` and return response JSON."""
    resp = client.post("/api/requests/", headers=auth_headers(student), json={
        "request_type": request_type,
        "semester": semester,
        "reason": reason,
        "subjects": subjects or [subject_payload()],
    })
    assert resp.status_code == 201, resp.text
    return resp.json()
