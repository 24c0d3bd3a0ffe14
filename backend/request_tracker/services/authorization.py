"""Role rules for the request workflow, kept as data.

``TRANSITION_RULES`` maps each target status to the roles allowed to move a
request into it and the denial message reported otherwise. The source status
plays no part: any request may be moved to any status by an allowed role.
"""
import logging
from typing import NamedTuple

from request_tracker.auth import CurrentUser
from request_tracker.errors import AuthorizationError
from request_tracker.models.request import RequestStatus
from request_tracker.models.user import Role

logger = logging.getLogger(__name__)

REVIEWER_ROLES = frozenset({Role.STAFF, Role.CHAIR, Role.ADMIN})
DECISION_ROLES = frozenset({Role.CHAIR, Role.ADMIN})
SUBMITTER_ROLES = frozenset({Role.STUDENT})

FORBIDDEN = "Forbidden"
CHAIRPERSON_ONLY = "Chairperson only"


class TransitionRule(NamedTuple):
    allowed_roles: frozenset
    denial_message: str


TRANSITION_RULES: dict[RequestStatus, TransitionRule] = {
    RequestStatus.FOR_EVALUATION: TransitionRule(REVIEWER_ROLES, FORBIDDEN),
    RequestStatus.PENDING: TransitionRule(REVIEWER_ROLES, FORBIDDEN),
    RequestStatus.DISCREPANCY: TransitionRule(REVIEWER_ROLES, FORBIDDEN),
    RequestStatus.APPROVED: TransitionRule(DECISION_ROLES, CHAIRPERSON_ONLY),
    RequestStatus.REJECTED: TransitionRule(DECISION_ROLES, CHAIRPERSON_ONLY),
}


def require_role(actor: CurrentUser, allowed: frozenset, action: str) -> None:
    """Raise ``AuthorizationError("Forbidden")`` unless ``actor.role`` is allowed."""
    if actor.role not in allowed:
        logger.warning("User %s (%s) denied: %s", actor.user_id, actor.role.value, action)
        raise AuthorizationError(FORBIDDEN)


def authorize_transition(actor: CurrentUser, new_status: RequestStatus) -> None:
    """Check ``actor`` may move a request into ``new_status``.

    Callers outside the reviewer roles are refused with "Forbidden" before the
    per-status rule is consulted, so a STUDENT never sees "Chairperson only".
    """
    require_role(actor, REVIEWER_ROLES, f"set status {new_status.value}")
    rule = TRANSITION_RULES[new_status]
    if actor.role not in rule.allowed_roles:
        logger.warning(
            "User %s (%s) denied transition to %s", actor.user_id, actor.role.value, new_status.value
        )
        raise AuthorizationError(rule.denial_message)
