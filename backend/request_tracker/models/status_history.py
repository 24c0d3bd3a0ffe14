"""StatusHistoryEntry ORM model: append-only ledger of status transitions."""
import uuid
from sqlalchemy import Column, String, Text, Integer, DateTime, ForeignKey, UniqueConstraint, Enum as SAEnum
from sqlalchemy.orm import relationship
from request_tracker.database import Base
from request_tracker.models.request import RequestStatus, _utcnow


class StatusHistoryEntry(Base):
    __tablename__ = "status_history"
    __table_args__ = (UniqueConstraint("request_id", "sequence", name="uq_status_history_request_sequence"),)

    entry_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    request_id = Column(String(36), ForeignKey("requests.request_id"), nullable=False, index=True)
    sequence = Column(Integer, nullable=False)  # 1-based creation order within a request
    status = Column(SAEnum(RequestStatus, native_enum=False, length=20), nullable=False)
    remark = Column(Text, nullable=True)
    changed_by_id = Column(String(36), ForeignKey("users.user_id"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    request = relationship("Request", back_populates="status_history")
