"""User and StudentProfile ORM models.

Both tables belong to the identity/profile collaborators; the request core
only reads them.
"""
import uuid
import enum
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from request_tracker.database import Base


class Role(str, enum.Enum):
    STUDENT = "STUDENT"
    STAFF = "STAFF"
    CHAIR = "CHAIR"
    ADMIN = "ADMIN"


class User(Base):
    __tablename__ = "users"

    user_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False, default="")  # owned by the credential store
    role = Column(SAEnum(Role, native_enum=False, length=20), nullable=False, default=Role.STUDENT)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    student_profile = relationship("StudentProfile", back_populates="user", uselist=False)


class StudentProfile(Base):
    __tablename__ = "student_profiles"

    profile_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.user_id"), nullable=False, unique=True)
    student_no = Column(String(50), nullable=False, unique=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    phone = Column(String(50), nullable=True)
    section = Column(String(50), nullable=True)
    year_level = Column(Integer, nullable=True)
    course = Column(String(150), nullable=True)

    user = relationship("User", back_populates="student_profile")

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)
