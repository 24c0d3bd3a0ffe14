"""Pydantic schemas for the students roster."""
from typing import Optional
from pydantic import BaseModel

from request_tracker.models.user import Role


class RequestCounts(BaseModel):
    pending: int = 0
    approved: int = 0
    total: int = 0


class StudentRosterEntry(BaseModel):
    user_id: str
    email: str
    role: Role
    student_no: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    section: Optional[str] = None
    year_level: Optional[int] = None
    course: Optional[str] = None
    request_counts: RequestCounts


class StudentRoster(BaseModel):
    students: list[StudentRosterEntry]
