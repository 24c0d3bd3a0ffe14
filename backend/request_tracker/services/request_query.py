"""Query/Listing Service: role-scoped reads of requests, history and students.

A STUDENT sees only the requests they submitted; STAFF, CHAIR and ADMIN see
everything. Reading another student's request is reported as "Forbidden";
``NotFoundError`` is reserved for ids that do not exist at all.
"""
import logging
from collections import defaultdict
from typing import Optional

from sqlalchemy.orm import Session, selectinload

from request_tracker.auth import CurrentUser
from request_tracker.errors import AuthorizationError, NotFoundError
from request_tracker.models.request import Request, RequestStatus
from request_tracker.models.user import Role, StudentProfile, User
from request_tracker.schemas.request import (
    RequestDetailOut,
    RequestOut,
    StatusHistoryOut,
    StudentSummary,
    SubjectLineOut,
)
from request_tracker.schemas.student import RequestCounts, StudentRosterEntry
from request_tracker.services.authorization import FORBIDDEN, REVIEWER_ROLES, require_role
from request_tracker.services.status_ledger import StatusLedger

logger = logging.getLogger(__name__)

PENDING_BUCKET = frozenset({RequestStatus.FOR_EVALUATION, RequestStatus.PENDING})


def _student_summary(user: Optional[User]) -> Optional[StudentSummary]:
    if user is None:
        return None
    profile = user.student_profile
    return StudentSummary(
        name=(profile.full_name if profile else "") or "Student",
        student_number=profile.student_no if profile else None,
        email=user.email,
        phone=profile.phone if profile else None,
    )


def project_request(request: Request) -> RequestOut:
    """Build the public projection of a request (no history)."""
    return RequestOut(
        request_id=request.request_id,
        request_type=request.request_type,
        semester=request.semester,
        reason=request.reason,
        status=request.status,
        remarks=request.remarks,
        requested_by_id=request.requested_by_id,
        created_at=request.created_at,
        updated_at=request.updated_at,
        subjects=[SubjectLineOut.model_validate(s) for s in request.subjects],
        student=_student_summary(request.requested_by),
    )


def _with_relations(query):
    return query.options(
        selectinload(Request.subjects),
        selectinload(Request.requested_by).selectinload(User.student_profile),
    )


class RequestQueryService:
    def __init__(self, db: Session, ledger: Optional[StatusLedger] = None):
        self.db = db
        self.ledger = ledger or StatusLedger(db)

    def list_requests(self, actor: CurrentUser) -> list[Request]:
        """Requests visible to ``actor``, newest first."""
        query = _with_relations(self.db.query(Request))
        if actor.role == Role.STUDENT:
            query = query.filter(Request.requested_by_id == actor.user_id)
        return query.order_by(Request.created_at.desc()).all()

    def list_all_requests(self, actor: CurrentUser, status: Optional[RequestStatus] = None) -> list[Request]:
        """Every request, newest first; reviewers only."""
        require_role(actor, REVIEWER_ROLES, "list all requests")
        query = _with_relations(self.db.query(Request))
        if status is not None:
            query = query.filter(Request.status == status)
        return query.order_by(Request.created_at.desc()).all()

    def _load_visible(self, actor: CurrentUser, request_id: str) -> Request:
        request = _with_relations(self.db.query(Request)).filter(Request.request_id == request_id).first()
        if not request:
            raise NotFoundError("Request not found")
        if actor.role == Role.STUDENT and request.requested_by_id != actor.user_id:
            logger.warning("Student %s denied access to request %s", actor.user_id, request_id)
            raise AuthorizationError(FORBIDDEN)
        return request

    def get_request(self, actor: CurrentUser, request_id: str) -> RequestDetailOut:
        """One request with subjects and its full history, newest entry first."""
        request = self._load_visible(actor, request_id)
        base = project_request(request)
        return RequestDetailOut(
            **base.model_dump(),
            status_history=self._history(request_id),
        )

    def get_history(self, actor: CurrentUser, request_id: str) -> list[StatusHistoryOut]:
        self._load_visible(actor, request_id)
        return self._history(request_id)

    def _history(self, request_id: str) -> list[StatusHistoryOut]:
        return [StatusHistoryOut.model_validate(e) for e in self.ledger.entries(request_id, newest_first=True)]

    def list_students_with_request_counts(self, actor: CurrentUser) -> list[StudentRosterEntry]:
        """Every student profile with request counts by status bucket."""
        require_role(actor, REVIEWER_ROLES, "list students")

        counts: dict[str, RequestCounts] = defaultdict(RequestCounts)
        for requested_by_id, status in self.db.query(Request.requested_by_id, Request.status):
            bucket = counts[requested_by_id]
            bucket.total += 1
            if status in PENDING_BUCKET:
                bucket.pending += 1
            elif status == RequestStatus.APPROVED:
                bucket.approved += 1

        profiles = (
            self.db.query(StudentProfile)
            .options(selectinload(StudentProfile.user))
            .order_by(StudentProfile.last_name, StudentProfile.first_name)
            .all()
        )
        return [
            StudentRosterEntry(
                user_id=p.user_id,
                email=p.user.email,
                role=p.user.role,
                student_no=p.student_no,
                first_name=p.first_name,
                last_name=p.last_name,
                phone=p.phone,
                section=p.section,
                year_level=p.year_level,
                course=p.course,
                request_counts=counts.get(p.user_id, RequestCounts()),
            )
            for p in profiles
        ]
