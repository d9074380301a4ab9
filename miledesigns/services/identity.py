# miledesigns/services/identity.py
# Logins for the admin dashboard: credential checks, provisioning of sub-admin
# logins and a small client-side session with change notifications.
from __future__ import annotations

import logging
from typing import Callable, Optional

from jose import JWTError
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from miledesigns.models.auth import User
from miledesigns.security.jwt import create_access_token, decode_token
from miledesigns.services.passwords import hash_password, verify_password, password_problem

log = logging.getLogger(__name__)

AuthListener = Callable[[Optional[str]], None]


class IdentityError(Exception):
    """User-facing identity failure (bad credentials, duplicate login, ...). Never retried."""


# -----------------------------
# DB-level operations
# -----------------------------
def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(func.lower(User.email) == normalize_email(email)))


def authenticate(db: Session, email: str, password: str) -> User:
    user = find_user_by_email(db, email)
    if not user or not verify_password(password or "", user.hashed_password or ""):
        raise IdentityError("Invalid login credentials")
    if not user.is_active:
        raise IdentityError("User inactive")
    return user


def provision_user(
    db: Session,
    *,
    email: str,
    password: str,
    full_name: str | None = None,
    created_by_id: int | None = None,
    is_superadmin: bool = False,
) -> User:
    """Creates a login. The caller commits."""
    email_norm = normalize_email(email)
    if not email_norm:
        raise IdentityError("Email is required")
    problem = password_problem(password)
    if problem:
        raise IdentityError(problem)
    if find_user_by_email(db, email_norm):
        raise IdentityError("User already registered")
    user = User(
        email=email_norm,
        full_name=full_name,
        hashed_password=hash_password(password),
        is_active=True,
        is_superadmin=is_superadmin,
        created_by_id=created_by_id,
    )
    db.add(user)
    db.flush()
    return user


def change_password(db: Session, user: User, new_password: str) -> None:
    problem = password_problem(new_password)
    if problem:
        raise IdentityError(problem)
    user.hashed_password = hash_password(new_password)
    db.flush()


def issue_access_token(user: User) -> str:
    return create_access_token(user.id, {"email": user.email, "is_superadmin": bool(user.is_superadmin)})


# -----------------------------
# Session-bound client
# -----------------------------
class IdentityClient:
    """
    One operator's session against the identity store.
    Holds the current access token and notifies listeners with the
    signed-in email (or None) whenever it changes.
    """

    def __init__(self, session_factory: sessionmaker, token: str | None = None):
        self._session_factory = session_factory
        self._token = token
        self._listeners: list[AuthListener] = []

    @property
    def access_token(self) -> str | None:
        return self._token

    def _claims(self) -> dict | None:
        if not self._token:
            return None
        try:
            return decode_token(self._token)
        except JWTError:
            return None

    def get_current_user_email(self) -> str | None:
        claims = self._claims()
        return claims.get("email") if claims else None

    def on_auth_state_change(self, callback: AuthListener) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _emit(self) -> None:
        email = self.get_current_user_email()
        for listener in list(self._listeners):
            listener(email)

    def restore_session(self, token: str | None) -> None:
        if token == self._token:
            return
        self._token = token
        self._emit()

    def sign_in(self, email: str, password: str) -> str:
        try:
            with self._session_factory() as db:
                user = authenticate(db, email, password)
                token = issue_access_token(user)
        except SQLAlchemyError as e:
            log.error("sign-in failed: %s", e)
            raise IdentityError("Sign-in is temporarily unavailable") from e
        self.restore_session(token)
        return user.email

    def sign_out(self) -> None:
        self.restore_session(None)

    def update_password(self, new_password: str) -> None:
        claims = self._claims()
        if not claims:
            raise IdentityError("Not signed in")
        try:
            with self._session_factory.begin() as db:
                user = db.get(User, int(claims["sub"]))
                if not user or not user.is_active:
                    raise IdentityError("User not found or inactive")
                change_password(db, user, new_password)
        except SQLAlchemyError as e:
            log.error("password update failed: %s", e)
            raise IdentityError("Could not update password") from e

    def _sign_up(self, email: str, password: str, created_by_id: int | None) -> None:
        # sign-up logs the new user in, like a hosted auth provider would
        try:
            with self._session_factory.begin() as db:
                user = provision_user(db, email=email, password=password, created_by_id=created_by_id)
                token = issue_access_token(user)
        except SQLAlchemyError as e:
            log.error("provisioning %s failed: %s", email, e)
            raise IdentityError("Could not create login") from e
        self.restore_session(token)

    def create_user_from_admin(self, email: str, password: str) -> None:
        """Provision a login without losing the caller's own session."""
        snapshot = self._token
        claims = self._claims()
        if not claims:
            raise IdentityError("Not signed in")
        try:
            self._sign_up(email, password, created_by_id=int(claims["sub"]))
        finally:
            self.restore_session(snapshot)
        log.info("login provisioned for %s by user %s", normalize_email(email), claims.get("sub"))
