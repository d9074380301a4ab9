# miledesigns/services/presentation.py
# Read-only view of the published site. Renders whatever it last loaded
# until refresh() is called (e.g. after a Publish).
from __future__ import annotations

import threading

from miledesigns.schemas.content import SiteContentData, SocialLink, Testimonial
from miledesigns.services.content_store import ContentStore, StoreError

ALL_TAG = "All"
AVATAR_PLACEHOLDER = "https://i.pravatar.cc/150?u={id}"


class SitePresentation:
    def __init__(self, store: ContentStore):
        self.store = store
        self._content: SiteContentData | None = None
        self._payload: dict | None = None
        self._lock = threading.Lock()

    def refresh(self) -> SiteContentData:
        try:
            payload = self.store.get_all_content()
        except StoreError:
            # stale cache must not outlive a failed reload; the next read retries
            self.invalidate()
            raise
        content = SiteContentData.model_validate(payload)
        with self._lock:
            self._payload = payload
            self._content = content
        return content

    def invalidate(self) -> None:
        with self._lock:
            self._payload = None
            self._content = None

    @property
    def content(self) -> SiteContentData:
        if self._content is None:
            return self.refresh()
        return self._content

    def payload(self) -> dict:
        if self._payload is None:
            self.refresh()
        return self._payload

    # ---- portfolio ----
    def all_tags(self) -> list[str]:
        tags: list[str] = [ALL_TAG]
        for project in self.content.projects:
            for tag in project.tags:
                if tag not in tags:
                    tags.append(tag)
        return tags

    def filtered_projects(self, tag: str | None = ALL_TAG) -> list:
        projects = self.content.projects
        if not tag or tag == ALL_TAG:
            return list(projects)
        return [p for p in projects if tag in p.tags]

    # ---- misc sections ----
    def visible_social_links(self) -> list[SocialLink]:
        return [link for link in self.content.social_links if link.enabled]

    @staticmethod
    def testimonial_avatar(testimonial: Testimonial) -> str:
        return testimonial.avatar_url or AVATAR_PLACEHOLDER.format(id=testimonial.id)

    def rotates_home_background(self) -> bool:
        return len(self.content.about_content.home_background_images) >= 2

    def heading(self) -> str:
        about = self.content.about_content
        parts = (about.heading_prefix, about.heading_highlight, about.heading_suffix)
        return " ".join(p.strip() for p in parts if p and p.strip())
