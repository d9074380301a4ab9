# miledesigns/middleware/ratelimit.py
from __future__ import annotations
import hashlib
import time
import threading
from typing import Dict, Tuple
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from miledesigns.core.settings import settings

WindowState = Tuple[int, int]  # (window_epoch_sec, count)

_WRITE_METHODS = ("POST", "PUT", "PATCH", "DELETE")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Per-minute limit with fixed windows (in-process; one dyno).
    - POST /api/v1/auth/login: key by IP.
    - POST /delivery/v1/consultant: key by IP (each call costs a model request).
    - Writes under /api/v1/content and /api/v1/workspace: key by bearer token, IP fallback.
    """

    def __init__(self, app):
        super().__init__(app)
        self._store: Dict[str, WindowState] = {}
        self._lock = threading.Lock()

    def _hit(self, key: str, limit: int) -> bool:
        now = int(time.time())
        window = now - (now % 60)
        with self._lock:
            w, c = self._store.get(key, (window, 0))
            if w != window:
                w, c = window, 0
            c += 1
            self._store[key] = (w, c)
            return c <= limit

    @staticmethod
    def _caller(request: Request, client_ip: str) -> str:
        auth = request.headers.get("Authorization") or ""
        if auth.lower().startswith("bearer "):
            return "tok:" + hashlib.sha256(auth[7:].strip().encode()).hexdigest()[:16]
        return f"ip:{client_ip}"

    async def dispatch(self, request: Request, call_next):
        if not settings.RATELIMIT_ENABLED:
            return await call_next(request)

        path = request.url.path or ""
        method = request.method.upper()
        client_ip = request.client.host if request.client else "unknown"
        api = settings.API_V1_STR

        limit = None
        key = None

        if path == f"{api}/auth/login" and method == "POST":
            limit = settings.RATELIMIT_LOGIN_PER_MIN
            key = f"login:{client_ip}"

        elif path == "/delivery/v1/consultant" and method == "POST":
            limit = settings.RATELIMIT_CONSULTANT_PER_MIN
            key = f"ai:{client_ip}"

        elif path.startswith((f"{api}/content", f"{api}/workspace")) and method in _WRITE_METHODS:
            limit = settings.RATELIMIT_WRITE_PER_MIN
            key = f"write:{self._caller(request, client_ip)}"

        if limit is not None:
            allowed = self._hit(key, limit)
            if not allowed:
                return JSONResponse(
                    {"detail": "Rate limit exceeded", "limit_per_min": limit},
                    status_code=429,
                    headers={"Retry-After": "60"},
                )

        return await call_next(request)
