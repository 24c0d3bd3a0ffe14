"""Identity & role context: resolves a Bearer JWT into ``CurrentUser``.

Registration, login and password checks belong to the credential store;
this module only issues and verifies the signed token that carries the
caller's id and role.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Header, HTTPException, status
from jose import ExpiredSignatureError, JWTError, jwt

from request_tracker.config import settings
from request_tracker.models.user import Role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    """The authenticated caller."""

    user_id: str
    role: Role
    email: Optional[str] = None


def create_access_token(user_id: str, role: Role, email: Optional[str] = None,
                        expires_minutes: Optional[int] = None) -> str:
    """Sign a token for ``user_id`` with the configured secret."""
    now = datetime.now(timezone.utc)
    lifetime = timedelta(minutes=expires_minutes if expires_minutes is not None else settings.JWT_EXPIRES_MINUTES)
    claims = {
        "sub": user_id,
        "role": Role(role).value,
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int((now + lifetime).timestamp()),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> CurrentUser:
    """Verify ``token`` and return the caller; raises 401 on any failure."""
    try:
        claims = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token has expired")
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

    user_id = claims.get("sub")
    try:
        role = Role(claims.get("role"))
    except ValueError:
        role = None
    if not user_id or role is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")
    return CurrentUser(user_id=user_id, role=role, email=claims.get("email"))


def get_current_user(authorization: Optional[str] = Header(None)) -> CurrentUser:
    """FastAPI dependency: parse ``Authorization: Bearer <token>``."""
    if not authorization:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing authorization header")

    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer" or not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid authorization format")

    user = decode_access_token(token)
    logger.debug("Authenticated user %s as %s", user.user_id, user.role.value)
    return user
