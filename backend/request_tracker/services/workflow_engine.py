"""Workflow Engine: request creation and status transitions.

Responsibilities:
- Role gating for submission (STUDENT only) and for every transition
  (see ``authorization.TRANSITION_RULES``)
- Input constraints on subjects, semester and status values
- Atomic write-through: the Request write and its ledger entry commit in a
  single transaction, or neither does
- Invariant: ``Request.status`` always equals the status of the newest
  ledger entry for that request
"""
import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from sqlalchemy.orm import Session

from request_tracker.auth import CurrentUser
from request_tracker.errors import NotFoundError, ValidationError
from request_tracker.models.request import Request, RequestStatus, RequestType, SubjectLine
from request_tracker.schemas.request import SubjectLineIn
from request_tracker.services.authorization import SUBMITTER_ROLES, authorize_transition, require_role
from request_tracker.services.status_ledger import StatusLedger

logger = logging.getLogger(__name__)

SUBMITTED_REMARK = "Submitted for evaluation"
TERMINAL_STATUSES = frozenset({RequestStatus.APPROVED, RequestStatus.REJECTED})


def _validate_subjects(subjects: Sequence[SubjectLineIn]) -> None:
    if not subjects:
        raise ValidationError("At least one subject is required")
    for index, subject in enumerate(subjects):
        if not subject.code or not subject.code.strip():
            raise ValidationError(f"Subject {index + 1}: code is required")
        if not subject.title or not subject.title.strip():
            raise ValidationError(f"Subject {index + 1}: title is required")
        if isinstance(subject.units, bool) or not isinstance(subject.units, int) or subject.units <= 0:
            raise ValidationError(f"Subject {index + 1}: units must be a positive integer")


def _check_transition(current: RequestStatus, new_status: RequestStatus) -> None:
    """A decided request may only be re-affirmed, never moved elsewhere."""
    if current in TERMINAL_STATUSES and new_status != current:
        raise ValidationError(f"Request is already {current.value}")


def _coerce(enum_cls, value, label: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Invalid {label}: {value}")


class WorkflowEngine:
    """Applies creations and status transitions to the Request aggregate."""

    def __init__(self, db: Session, ledger: Optional[StatusLedger] = None):
        self.db = db
        self.ledger = ledger or StatusLedger(db)

    def create_request(
        self,
        actor: CurrentUser,
        request_type: RequestType,
        semester: str,
        reason: Optional[str],
        subjects: Sequence[SubjectLineIn],
    ) -> Request:
        """Submit a new request as ``actor``; status always starts at FOR_EVALUATION."""
        require_role(actor, SUBMITTER_ROLES, "create request")
        request_type = _coerce(RequestType, request_type, "request type")
        if not semester or not semester.strip():
            raise ValidationError("Semester is required")
        _validate_subjects(subjects)

        try:
            request = Request(
                request_type=request_type,
                semester=semester,
                reason=reason,
                status=RequestStatus.FOR_EVALUATION,
                requested_by_id=actor.user_id,
            )
            request.subjects = [
                SubjectLine(
                    code=s.code,
                    title=s.title,
                    units=s.units,
                    section=s.section,
                    schedule=s.schedule,
                )
                for s in subjects
            ]
            self.db.add(request)
            self.db.flush()

            self.ledger.append(
                request,
                status=RequestStatus.FOR_EVALUATION,
                changed_by_id=actor.user_id,
                remark=SUBMITTED_REMARK,
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(request)
        logger.info(
            "Request %s (%s, %d subjects) submitted by %s",
            request.request_id, request_type.value, len(subjects), actor.user_id,
        )
        return request

    def apply_status(
        self,
        request_id: str,
        actor: CurrentUser,
        new_status: RequestStatus,
        remark: Optional[str] = None,
    ) -> Request:
        """Move ``request_id`` to ``new_status`` and record it in the ledger.

        ``remark`` replaces ``Request.remarks``; omitting it clears them.
        Setting the current status again is allowed and still appends an entry;
        APPROVED and REJECTED requests accept nothing else.
        """
        new_status = _coerce(RequestStatus, new_status, "status")
        authorize_transition(actor, new_status)

        try:
            request = (
                self.db.query(Request)
                .filter(Request.request_id == request_id)
                .with_for_update()
                .populate_existing()
                .first()
            )
            if not request:
                raise NotFoundError("Request not found")

            _check_transition(request.status, new_status)
            previous = request.status
            request.status = new_status
            request.remarks = remark
            request.updated_at = datetime.now(timezone.utc)
            self.db.flush()

            self.ledger.append(request, status=new_status, changed_by_id=actor.user_id, remark=remark)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(request)
        logger.info(
            "Request %s moved %s -> %s by %s (%s)",
            request_id, previous.value, new_status.value, actor.user_id, actor.role.value,
        )
        return request
