# =============================================================================
# Content Endpoints (whole-aggregate read / overwrite / reset)
# miledesigns/api/v1/endpoints/content.py
# =============================================================================
from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError

from miledesigns.deps.auth import require_site_admin
from miledesigns.deps.services import get_content_store, get_presentation
from miledesigns.models.auth import User
from miledesigns.schemas.content import SiteContentData
from miledesigns.services.content_store import ContentStore, StoreError, StoreUnavailable
from miledesigns.services.presentation import SitePresentation

log = logging.getLogger(__name__)

router = APIRouter()


def _store_failure(e: StoreError) -> HTTPException:
    return HTTPException(status_code=503 if isinstance(e, StoreUnavailable) else 500, detail=str(e))


@router.get("", response_model=Dict[str, Any])
def get_content(
    _: User = Depends(require_site_admin),
    store: ContentStore = Depends(get_content_store),
):
    try:
        return store.get_all_content()
    except StoreError as e:
        raise _store_failure(e)


@router.put("", response_model=Dict[str, Any])
def put_content(
    payload: Dict[str, Any] = Body(...),
    user: User = Depends(require_site_admin),
    store: ContentStore = Depends(get_content_store),
    presentation: SitePresentation = Depends(get_presentation),
):
    """
    Overwrite the whole aggregate (normalized first). Last writer wins:
    no version token is compared.
    """
    try:
        SiteContentData.model_validate(payload)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))
    try:
        stored = store.save_all_content(payload)
    except StoreError as e:
        raise _store_failure(e)
    log.info("site content overwritten by %s", user.email)
    presentation.invalidate()
    return stored


@router.post("/reset", response_model=Dict[str, Any])
def reset_content(
    user: User = Depends(require_site_admin),
    store: ContentStore = Depends(get_content_store),
    presentation: SitePresentation = Depends(get_presentation),
):
    try:
        stored = store.reset()
    except StoreError as e:
        raise _store_failure(e)
    log.warning("site content reset to defaults by %s", user.email)
    presentation.invalidate()
    return stored
