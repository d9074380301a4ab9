# miledesigns/models/content.py
# Single-row store: the whole site aggregate lives in one JSON document
from __future__ import annotations
from datetime import datetime

from sqlalchemy import JSON, String, DateTime, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from miledesigns.db.base import Base

# JSONB on Postgres, plain JSON elsewhere (SQLite in dev/tests)
ContentJSON = JSON().with_variant(JSONB(), "postgresql")


class SiteContent(Base):
    __tablename__ = "site_content"

    # fixed key (settings.SITE_CONTENT_ROW_ID); never more than one row per site
    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    data: Mapped[dict] = mapped_column(ContentJSON)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
