"""Request API routes: delegates to the Workflow Engine and Query service."""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from request_tracker.auth import CurrentUser, get_current_user
from request_tracker.database import get_db
from request_tracker.models.request import RequestStatus
from request_tracker.schemas.request import RequestCreate, RequestDetailOut, RequestOut, StatusUpdate
from request_tracker.services.request_query import RequestQueryService, project_request
from request_tracker.services.workflow_engine import WorkflowEngine

router = APIRouter()


@router.get("/", response_model=list[RequestOut])
def list_requests(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List requests visible to the caller (students see only their own)."""
    requests = RequestQueryService(db).list_requests(current_user)
    return [project_request(r) for r in requests]


@router.get("/all", response_model=list[RequestOut])
def list_all_requests(
    status_filter: Optional[RequestStatus] = Query(None, alias="status"),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List every request, optionally filtered by status. Staff, chair and admin only."""
    requests = RequestQueryService(db).list_all_requests(current_user, status=status_filter)
    return [project_request(r) for r in requests]


@router.post("/", response_model=RequestOut, status_code=status.HTTP_201_CREATED)
def create_request(
    payload: RequestCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Submit a new request. Students only; status always starts at FOR_EVALUATION."""
    request = WorkflowEngine(db).create_request(
        actor=current_user,
        request_type=payload.request_type,
        semester=payload.semester,
        reason=payload.reason,
        subjects=payload.subjects,
    )
    return project_request(request)


@router.get("/{request_id}", response_model=RequestDetailOut)
def get_request(
    request_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Fetch one request with subjects and status history."""
    return RequestQueryService(db).get_request(current_user, request_id)


def _update_status(request_id: str, payload: StatusUpdate, current_user: CurrentUser, db: Session) -> RequestOut:
    request = WorkflowEngine(db).apply_status(
        request_id=request_id,
        actor=current_user,
        new_status=payload.status,
        remark=payload.remarks,
    )
    return project_request(request)


@router.patch("/{request_id}/status", response_model=RequestOut)
def patch_request_status(
    request_id: str,
    payload: StatusUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Transition a request to a new status and append to its history."""
    return _update_status(request_id, payload, current_user, db)


@router.put("/{request_id}/status", response_model=RequestOut)
def put_request_status(
    request_id: str,
    payload: StatusUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Same as PATCH; kept for clients that send PUT."""
    return _update_status(request_id, payload, current_user, db)
