"""Pydantic schemas for Users."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from request_tracker.models.user import Role


class UserOut(BaseModel):
    user_id: str
    email: str
    role: Role
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
