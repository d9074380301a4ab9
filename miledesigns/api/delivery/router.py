#  miledesigns/api/delivery/router.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, Header

from miledesigns.deps.services import get_presentation
from miledesigns.schemas.delivery import (
    ConsultantIn,
    ConsultantOut,
    ProjectListOut,
    SiteOut,
    SiteView,
)
from miledesigns.services.consultant import get_advice
from miledesigns.services.content_store import StoreError, StoreUnavailable
from miledesigns.services.estimator import CostEstimate, ProjectType, Quality, estimate_cost, MAX_AREA, MIN_AREA
from miledesigns.services.presentation import ALL_TAG, SitePresentation
from miledesigns.services.publish_service import (
    apply_delivery_cache_headers,
    compute_etag_from_bytes,
    content_bytes,
    etag_matches,
)

router = APIRouter(prefix="/delivery/v1", tags=["Delivery"])


def _store_failure(e: StoreError) -> HTTPException:
    code = 503 if isinstance(e, StoreUnavailable) else 500
    return HTTPException(status_code=code, detail=str(e))


def _cached_json(payload: dict, if_none_match: str | None) -> Response:
    """
    Serializa de forma estable, calcula ETag y responde 304
    cuando If-None-Match coincide.
    """
    body = content_bytes(payload)
    etag = compute_etag_from_bytes(body)
    if etag_matches(if_none_match, etag):
        resp = Response(status_code=304)
    else:
        resp = Response(content=body, media_type="application/json")
    apply_delivery_cache_headers(resp, etag=etag)
    return resp


@router.get("/site", response_model=SiteOut, summary="Published site content (public)")
def get_site(
    presentation: SitePresentation = Depends(get_presentation),
    if_none_match: str | None = Header(default=None, alias="If-None-Match"),
):
    """
    Everything the public page renders: the normalized aggregate plus
    derived view values. ETag (If-None-Match → 304) and short public caching.
    """
    try:
        payload = presentation.payload()
    except StoreError as e:
        raise _store_failure(e)
    content = presentation.content
    view = SiteView(
        heading=presentation.heading(),
        tags=presentation.all_tags(),
        visible_social_links=[l.model_dump(by_alias=True, mode="json") for l in presentation.visible_social_links()],
        testimonial_avatars={t.id: presentation.testimonial_avatar(t) for t in content.testimonials},
        rotates_home_background=presentation.rotates_home_background(),
    )
    out = SiteOut(content=payload, view=view)
    return _cached_json(out.model_dump(by_alias=True, mode="json"), if_none_match)


@router.get("/projects", response_model=ProjectListOut, summary="Portfolio filtered by tag (public)")
def list_projects(
    tag: str = Query(ALL_TAG, description="Tag to filter by; 'All' returns every project"),
    presentation: SitePresentation = Depends(get_presentation),
    if_none_match: str | None = Header(default=None, alias="If-None-Match"),
):
    try:
        projects = presentation.filtered_projects(tag)
    except StoreError as e:
        raise _store_failure(e)
    out = ProjectListOut(
        tag=tag,
        total=len(projects),
        items=[p.model_dump(by_alias=True, mode="json") for p in projects],
    )
    return _cached_json(out.model_dump(by_alias=True, mode="json"), if_none_match)


@router.get("/estimate", response_model=CostEstimate, summary="Ballpark construction cost")
def get_estimate(
    area: int = Query(2000, ge=MIN_AREA, le=MAX_AREA, description="Total area in sq. ft."),
    quality: Quality = Query("Premium"),
    project_type: ProjectType = Query("New", alias="type"),
):
    return estimate_cost(area, quality, project_type)


@router.post("/consultant", response_model=ConsultantOut, summary="Ask the AI consultant")
async def ask_consultant(body: ConsultantIn, response: Response):
    reply = await get_advice(body.prompt, [t.model_dump() for t in body.history])
    response.headers["Cache-Control"] = "no-store"
    return ConsultantOut(reply=reply)
