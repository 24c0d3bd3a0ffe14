"""Request aggregate ORM models: Request and its SubjectLines."""
import uuid
import enum
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, Integer, DateTime, ForeignKey, CheckConstraint, Enum as SAEnum
from sqlalchemy.orm import relationship
from request_tracker.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RequestType(str, enum.Enum):
    OVERLOAD = "OVERLOAD"
    OVERRIDE = "OVERRIDE"
    MANUAL_TAGGING = "MANUAL_TAGGING"


class RequestStatus(str, enum.Enum):
    FOR_EVALUATION = "FOR_EVALUATION"
    PENDING = "PENDING"
    DISCREPANCY = "DISCREPANCY"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Request(Base):
    __tablename__ = "requests"

    request_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    request_type = Column(SAEnum(RequestType, native_enum=False, length=20), nullable=False)
    reason = Column(Text, nullable=True)
    semester = Column(String(100), nullable=False)
    status = Column(SAEnum(RequestStatus, native_enum=False, length=20), nullable=False, default=RequestStatus.FOR_EVALUATION)
    remarks = Column(Text, nullable=True)  # latest remark, mirrors the newest history entry
    requested_by_id = Column(String(36), ForeignKey("users.user_id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    requested_by = relationship("User")
    subjects = relationship("SubjectLine", back_populates="request", cascade="all, delete-orphan")
    status_history = relationship(
        "StatusHistoryEntry",
        back_populates="request",
        order_by="StatusHistoryEntry.sequence",
        cascade="all, delete-orphan",
    )


class SubjectLine(Base):
    __tablename__ = "subject_lines"
    __table_args__ = (CheckConstraint("units > 0", name="ck_subject_lines_units_positive"),)

    subject_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    request_id = Column(String(36), ForeignKey("requests.request_id"), nullable=False, index=True)
    code = Column(String(50), nullable=False)
    title = Column(String(255), nullable=False)
    units = Column(Integer, nullable=False)
    section = Column(String(50), nullable=True)
    schedule = Column(String(255), nullable=True)

    request = relationship("Request", back_populates="subjects")
