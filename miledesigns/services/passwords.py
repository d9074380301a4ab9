# miledesigns/services/passwords.py
from __future__ import annotations

from passlib.context import CryptContext

from miledesigns.core.settings import settings

_pwd = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__truncate_error=False,
)

def hash_password(plain: str) -> str:
    return _pwd.hash(plain)

def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plaintext password against a stored bcrypt hash."""
    if not hashed:
        return False
    return _pwd.verify(plain, hashed)

def password_problem(plain: str | None) -> str | None:
    """Human-readable reason a new password is refused, or None when acceptable."""
    if not plain:
        return "Password is required"
    if len(plain) < settings.PASSWORD_MIN_LENGTH:
        return f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters"
    return None
