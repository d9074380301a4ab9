# miledesigns/api/v1/router.py
from fastapi import APIRouter, Depends

from .endpoints import health, content, workspace
from miledesigns.api.v1 import auth as auth_endpoints
from miledesigns.deps.auth import require_admin_enabled

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth_endpoints.router, prefix="/auth")

# Admin dashboard: hidden entirely when ENABLE_ADMIN is off
_admin = [Depends(require_admin_enabled)]
api_router.include_router(content.router, prefix="/content", tags=["content"], dependencies=_admin)
api_router.include_router(workspace.router, prefix="/workspace", tags=["workspace"], dependencies=_admin)
