from __future__ import annotations

import logging

from fastapi.openapi.utils import get_openapi
from fastapi.routing import APIRoute

from miledesigns.api.delivery.router import router as delivery_router
from miledesigns.api.v1.router import api_router
from miledesigns.core.config import create_app
from miledesigns.core.logging import configure_logging
from miledesigns.core.settings import settings
from miledesigns.middleware.ratelimit import RateLimitMiddleware

from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware


app = create_app()
configure_logging()

if settings.ENV != "dev" and settings.JWT_SECRET_KEY == "dev-secret":
    logging.getLogger(__name__).warning("JWT_SECRET_KEY is the development default; set it for %s", settings.ENV)

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

def _inject_bearer_security(app):
    """
    Injects bearerAuth globally into OpenAPI. /delivery/* is then marked
    public in the docs (docs only; real security lives in the endpoints).
    """
    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title=settings.APP_NAME,
            version="1.0.0",
            description="Site content, admin workspace and public delivery API",
            routes=app.routes,
        )

        # Global default security (JWT Bearer)
        components = openapi_schema.setdefault("components", {})
        security_schemes = components.setdefault("securitySchemes", {})
        security_schemes["bearerAuth"] = {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
        openapi_schema["security"] = [{"bearerAuth": []}]

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi


def _mark_public_routes(app):
    """
    Marks /delivery/... and login/refresh as public in Swagger by removing
    the global bearer requirement at the OpenAPI level only.
    """
    public_auth = {f"{settings.API_V1_STR}/auth/login", f"{settings.API_V1_STR}/auth/refresh"}
    for route in app.routes:
        if isinstance(route, APIRoute):
            path = route.path or ""
            if path.startswith("/delivery/") or path in public_auth:
                extra = dict(route.openapi_extra or {})
                extra["security"] = []  # overrides the global bearer in docs
                route.openapi_extra = extra


# OpenAPI with bearer by default
_inject_bearer_security(app)

# The middleware itself checks settings.RATELIMIT_ENABLED per request
app.add_middleware(RateLimitMiddleware)


# Private API (JWT)
app.include_router(api_router, prefix=settings.API_V1_STR)

# Public delivery (what the site renders)
app.include_router(delivery_router)

_mark_public_routes(app)
