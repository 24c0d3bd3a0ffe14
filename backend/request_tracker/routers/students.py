"""Students roster API routes."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from request_tracker.auth import CurrentUser, get_current_user
from request_tracker.database import get_db
from request_tracker.schemas.student import StudentRoster
from request_tracker.services.request_query import RequestQueryService

router = APIRouter()


@router.get("/", response_model=StudentRoster)
def list_students(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """All student profiles with pending / approved / total request counts."""
    return {"students": RequestQueryService(db).list_students_with_request_counts(current_user)}
