"""Pydantic schemas for Requests, SubjectLines and status history."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from request_tracker.models.request import RequestStatus, RequestType


class SubjectLineIn(BaseModel):
    code: str = Field(min_length=1)
    title: str = Field(min_length=1)
    units: int = Field(gt=0)
    section: Optional[str] = None
    schedule: Optional[str] = None


class RequestCreate(BaseModel):
    request_type: RequestType
    semester: str = Field(min_length=1)
    reason: Optional[str] = None
    subjects: list[SubjectLineIn] = Field(min_length=1)


class StatusUpdate(BaseModel):
    status: RequestStatus
    remarks: Optional[str] = None


class SubjectLineOut(BaseModel):
    code: str
    title: str
    units: int
    section: Optional[str] = None
    schedule: Optional[str] = None

    model_config = {"from_attributes": True}


class StudentSummary(BaseModel):
    name: str
    student_number: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class StatusHistoryOut(BaseModel):
    entry_id: str
    request_id: str
    sequence: int
    status: RequestStatus
    remark: Optional[str] = None
    changed_by_id: str
    created_at: datetime

    model_config = {"from_attributes": True}


class RequestOut(BaseModel):
    request_id: str
    request_type: RequestType
    semester: str
    reason: Optional[str] = None
    status: RequestStatus
    remarks: Optional[str] = None
    requested_by_id: str
    created_at: datetime
    updated_at: datetime
    subjects: list[SubjectLineOut] = []
    student: Optional[StudentSummary] = None


class RequestDetailOut(RequestOut):
    status_history: list[StatusHistoryOut] = []


class StatusHistoryList(BaseModel):
    history: list[StatusHistoryOut]
