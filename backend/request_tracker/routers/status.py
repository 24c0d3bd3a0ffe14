"""Status history API routes."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from request_tracker.auth import CurrentUser, get_current_user
from request_tracker.database import get_db
from request_tracker.schemas.request import StatusHistoryList
from request_tracker.services.request_query import RequestQueryService

router = APIRouter()


@router.get("/{request_id}/history", response_model=StatusHistoryList)
def get_status_history(
    request_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Status history for a request, newest first."""
    return {"history": RequestQueryService(db).get_history(current_user, request_id)}
