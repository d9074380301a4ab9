# miledesigns/core/config.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import sessionmaker

from .settings import settings
from miledesigns.services.content_store import ContentStore
from miledesigns.services.presentation import SitePresentation
from miledesigns.services.workspaces import WorkspaceRegistry


def wire_services(app: FastAPI, session_factory: sessionmaker) -> None:
    """
    Explicitly injected collaborators (no module-level singletons):
    one ContentStore shared by the public presentation and every admin workspace.
    """
    store = ContentStore(session_factory)
    presentation = SitePresentation(store)
    app.state.session_factory = session_factory
    app.state.content_store = store
    app.state.presentation = presentation
    # a successful Publish/Reset refreshes what the public site renders
    app.state.workspaces = WorkspaceRegistry(store, session_factory, on_data_update=presentation.refresh)


def create_app(session_factory: sessionmaker | None = None) -> FastAPI:
    app = FastAPI(title=settings.APP_NAME)

    if settings.BACKEND_CORS_ORIGINS:
        origins = settings.CORS_ORIGINS
        allow_credentials = True
        if "*" in origins:
            origins = ["*"]
            allow_credentials = False
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=allow_credentials,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["ETag"],
        )

    if session_factory is None:
        from miledesigns.db.session import SessionLocal
        session_factory = SessionLocal
    wire_services(app, session_factory)
    return app
