# miledesigns/deps/services.py
from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status

from miledesigns.deps.auth import get_bearer_token, require_site_admin
from miledesigns.models.auth import User
from miledesigns.services.content_store import ContentStore, StoreError
from miledesigns.services.editor import AdminEditor
from miledesigns.services.presentation import SitePresentation
from miledesigns.services.workspaces import WorkspaceRegistry


def get_content_store(request: Request) -> ContentStore:
    return request.app.state.content_store


def get_presentation(request: Request) -> SitePresentation:
    return request.app.state.presentation


def get_workspaces(request: Request) -> WorkspaceRegistry:
    return request.app.state.workspaces


def get_editor(
    user: User = Depends(require_site_admin),
    token: str = Depends(get_bearer_token),
    workspaces: WorkspaceRegistry = Depends(get_workspaces),
) -> AdminEditor:
    try:
        return workspaces.open(user, token)
    except StoreError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
