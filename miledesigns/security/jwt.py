# miledesigns/security/jwt.py
from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import jwt
from miledesigns.core.settings import settings

ALGO   = settings.JWT_ALGORITHM or "HS256"
SECRET = settings.JWT_SECRET_KEY or "dev-secret"

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

def _exp_ts(minutes: int) -> int:
    # exp as integer UNIX seconds
    return int((_utcnow() + timedelta(minutes=minutes)).timestamp())

def _iat_ts() -> int:
    return int(_utcnow().timestamp())

def _encode(subject: int | str, kind: str, minutes: int, extra: Dict[str, Any] | None) -> str:
    payload: Dict[str, Any] = {
        "sub": str(subject),
        "type": kind,
        "iat": _iat_ts(),
        "exp": _exp_ts(minutes),
    }
    if extra:
        payload.update(extra)
    return jwt.encode(payload, SECRET, algorithm=ALGO)

def create_access_token(subject: int | str, extra: Dict[str, Any] | None = None) -> str:
    return _encode(subject, "access", settings.ACCESS_MIN, extra)

def create_refresh_token(subject: int | str, extra: Dict[str, Any] | None = None) -> str:
    return _encode(subject, "refresh", settings.REFRESH_MIN, extra)

def decode_token(token: str) -> Dict[str, Any]:
    """Raises jose.JWTError (incl. ExpiredSignatureError); callers map it to 401."""
    return jwt.decode(
        token,
        SECRET,
        algorithms=[ALGO],
        options={"verify_aud": False, "verify_iss": False},
    )
