"""Status History Ledger: append-only record of every status transition.

Entries are only ever added. ``append`` does not commit: it is always called
inside the Workflow Engine's transaction together with the Request write.
"""
import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from request_tracker.models.request import Request, RequestStatus
from request_tracker.models.status_history import StatusHistoryEntry

logger = logging.getLogger(__name__)


class StatusLedger:
    def __init__(self, db: Session):
        self.db = db

    def _next_sequence(self, request_id: str) -> int:
        current = (
            self.db.query(func.max(StatusHistoryEntry.sequence))
            .filter(StatusHistoryEntry.request_id == request_id)
            .scalar()
        )
        return (current or 0) + 1

    def append(self, request: Request, status: RequestStatus, changed_by_id: str,
               remark: Optional[str] = None) -> StatusHistoryEntry:
        """Add one entry for ``request`` and flush it into the open transaction."""
        entry = StatusHistoryEntry(
            request_id=request.request_id,
            sequence=self._next_sequence(request.request_id),
            status=status,
            remark=remark,
            changed_by_id=changed_by_id,
        )
        self.db.add(entry)
        self.db.flush()
        logger.debug("Ledger entry %d for request %s: %s", entry.sequence, request.request_id, status.value)
        return entry

    def entries(self, request_id: str, newest_first: bool = True) -> list[StatusHistoryEntry]:
        order = StatusHistoryEntry.sequence.desc() if newest_first else StatusHistoryEntry.sequence
        return (
            self.db.query(StatusHistoryEntry)
            .filter(StatusHistoryEntry.request_id == request_id)
            .order_by(order)
            .all()
        )

    def latest(self, request_id: str) -> Optional[StatusHistoryEntry]:
        return (
            self.db.query(StatusHistoryEntry)
            .filter(StatusHistoryEntry.request_id == request_id)
            .order_by(StatusHistoryEntry.sequence.desc())
            .first()
        )
