# miledesigns/deps/auth.py
from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError
from sqlalchemy.orm import Session

from miledesigns.core.settings import settings
from miledesigns.db.session import get_db
from miledesigns.models.auth import User
from miledesigns.security.jwt import decode_token
from miledesigns.services.content_store import StoreError
from miledesigns.services.editor import is_site_admin

# Reusable HTTP bearer scheme (non-fatal if header is missing)
_bearer = HTTPBearer(auto_error=False)


# -----------------------------
# Helpers
# -----------------------------
def _load_user_from_sub(db: Session, sub: str | int) -> Optional[User]:
    try:
        uid = int(sub)
    except (TypeError, ValueError):
        return None
    user = db.get(User, uid)
    if not user or not getattr(user, "is_active", True):
        return None
    return user


def _decode_and_get_user_id(db: Session, token: str) -> int:
    try:
        payload = decode_token(token)
    except ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired")
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    if payload.get("type") != "access":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    user = _load_user_from_sub(db, payload.get("sub"))
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found or inactive")
    return int(user.id)


# -----------------------------
# Public dependencies
# -----------------------------
def get_bearer_token(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> str:
    if not creds or not creds.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return creds.credentials


def get_current_user_id(
    db: Session = Depends(get_db),
    token: str = Depends(get_bearer_token),
) -> int:
    return _decode_and_get_user_id(db, token)


def get_current_user(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> User:
    user = db.get(User, user_id)
    if not user or not getattr(user, "is_active", True):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found or inactive")
    return user


def require_admin_enabled() -> None:
    # a site deployed without the dashboard doesn't advertise it
    if not settings.ENABLE_ADMIN:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")


def require_site_admin(
    request: Request,
    current_user: User = Depends(get_current_user),
) -> User:
    """
    Dashboard access: superadmins, the profile's main admin email,
    or an enabled sub-admin listed in the published admin profile.
    """
    if current_user.is_superadmin:
        return current_user
    try:
        profile = request.app.state.content_store.get_all_content()["adminProfile"]
    except StoreError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    if not is_site_admin(profile, current_user.email):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not an administrator of this site")
    return current_user
