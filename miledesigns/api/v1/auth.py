# miledesigns/api/v1/auth.py
from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status, Response
from jose import JWTError
from pydantic import BaseModel, EmailStr
from sqlalchemy.orm import Session

from miledesigns.db.session import get_db
from miledesigns.models.auth import User
from miledesigns.security.jwt import create_access_token, create_refresh_token, decode_token
from miledesigns.services.identity import IdentityError, authenticate, change_password
from miledesigns.deps.auth import get_current_user  # dependencia estándar para /me

router = APIRouter(tags=["auth"])  # el prefix lo pone api/v1/router.py


# ---------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------
class LoginIn(BaseModel):
    email: EmailStr
    password: str

class TokenOut(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"

class RefreshIn(BaseModel):
    refresh_token: str

class PasswordIn(BaseModel):
    new_password: str

class MeOut(BaseModel):
    id: int
    email: EmailStr
    full_name: Optional[str] = None
    is_superadmin: bool


def _tokens_for(user: User) -> TokenOut:
    extra = {"email": user.email, "is_superadmin": user.is_superadmin}
    return TokenOut(
        access_token=create_access_token(user.id, extra),
        refresh_token=create_refresh_token(user.id, extra),
    )


# ---------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------
@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    try:
        user = authenticate(db, payload.email, payload.password)
    except IdentityError as e:
        code = status.HTTP_403_FORBIDDEN if str(e) == "User inactive" else status.HTTP_401_UNAUTHORIZED
        raise HTTPException(status_code=code, detail=str(e))
    return _tokens_for(user)


@router.post("/refresh", response_model=TokenOut)
def refresh(body: RefreshIn, db: Session = Depends(get_db)):
    try:
        payload = decode_token(body.refresh_token)
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid refresh token")
    if payload.get("type") != "refresh":
        raise HTTPException(status_code=401, detail="Invalid refresh token")

    try:
        user = db.get(User, int(payload.get("sub")))
    except (TypeError, ValueError):
        user = None
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="User not found or inactive")
    return _tokens_for(user)


@router.get("/me", response_model=MeOut)
def me(current_user: User = Depends(get_current_user)):
    return MeOut(
        id=current_user.id,
        email=current_user.email,
        full_name=current_user.full_name,
        is_superadmin=current_user.is_superadmin,
    )


@router.post("/password", status_code=204)
def update_password(
    body: PasswordIn,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        change_password(db, current_user, body.new_password)
    except IdentityError as e:
        raise HTTPException(status_code=422, detail=str(e))
    db.commit()
    return Response(status_code=204)


@router.post("/logout", status_code=204)
def logout(_: Response):
    # JWT stateless: client-side logout
    return Response(status_code=204)
