"""Seed demo users, a student profile and one request.

Run with ``python -m request_tracker.seed``. Users are created without
credentials; logging in is the credential store's job.
"""
import logging

from sqlalchemy.orm import Session

from request_tracker.auth import CurrentUser
from request_tracker.config import settings
from request_tracker.database import Base, create_db_engine, create_session_factory
from request_tracker.models.request import Request, RequestType
from request_tracker.models.status_history import StatusHistoryEntry  # noqa: F401
from request_tracker.models.user import Role, StudentProfile, User
from request_tracker.schemas.request import SubjectLineIn
from request_tracker.services.workflow_engine import WorkflowEngine

logger = logging.getLogger(__name__)

DEMO_USERS = [
    ("admin@pup.edu.ph", Role.ADMIN),
    ("staff@pup.edu.ph", Role.STAFF),
    ("chairperson@pup.edu.ph", Role.CHAIR),
    ("student@pup.edu.ph", Role.STUDENT),
]


def _upsert_user(db: Session, email: str, role: Role) -> User:
    user = db.query(User).filter(User.email == email).first()
    if user:
        return user
    user = User(email=email, role=role)
    db.add(user)
    db.flush()
    return user


def seed(db: Session) -> dict[str, User]:
    """Create demo data; running it twice does not duplicate anything."""
    users = {role: _upsert_user(db, email, role) for email, role in DEMO_USERS}
    student = users[Role.STUDENT]

    if not db.query(StudentProfile).filter(StudentProfile.user_id == student.user_id).first():
        db.add(StudentProfile(
            user_id=student.user_id,
            student_no="2024-0001",
            first_name="Juan",
            last_name="Dela Cruz",
            phone="09123456789",
            section="CPE-3A",
            year_level=3,
            course="Computer Engineering",
        ))
    db.commit()

    if not db.query(Request).filter(Request.requested_by_id == student.user_id).first():
        WorkflowEngine(db).create_request(
            actor=CurrentUser(user_id=student.user_id, role=Role.STUDENT, email=student.email),
            request_type=RequestType.OVERLOAD,
            semester="2nd Sem 2025-2026",
            reason="Need extra units for graduation plan",
            subjects=[
                SubjectLineIn(code="CPE-401", title="Embedded Systems", units=3,
                              section="CPE-3A", schedule="MWF 08:00-09:30"),
                SubjectLineIn(code="CPE-402", title="Computer Networks", units=3,
                              section="CPE-3A", schedule="TTh 10:00-11:30"),
            ],
        )

    logger.info("Seed complete")
    return users


def main() -> None:
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    engine = create_db_engine(settings.DATABASE_URL)
    # Other backends get their schema from ``alembic upgrade head``.
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    session = create_session_factory(engine)()
    try:
        seed(session)
    finally:
        session.close()
        engine.dispose()


if __name__ == "__main__":
    main()
