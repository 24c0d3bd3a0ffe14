"""User API routes."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from request_tracker.auth import CurrentUser, get_current_user
from request_tracker.database import get_db
from request_tracker.models.user import User
from request_tracker.schemas.user import UserOut

router = APIRouter()


@router.get("/me", response_model=UserOut)
def get_me(current_user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    """Fetch the authenticated caller's user record."""
    user = db.query(User).filter(User.user_id == current_user.user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
