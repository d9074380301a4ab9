# miledesigns/services/editor.py
# Admin editing surface: working copies of every collection, dirty tracking
# against the last saved snapshot, per-tab CRUD and the single Publish action.
from __future__ import annotations

import json
import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Iterable, Literal, Optional

from pydantic import ValidationError

from miledesigns.schemas.content import (
    AboutContent,
    AdminProfile,
    ContactDetails,
    EditableItem,
    Project,
    Service,
    SiteContentData,
    SocialLink,
    SubAdmin,
    TeamMember,
    Testimonial,
    VlogEntry,
)
from miledesigns.services.content_store import ContentStore, StoreError, StoreUnavailable
from miledesigns.services.identity import IdentityClient, IdentityError, normalize_email
from miledesigns.services.passwords import password_problem
from miledesigns.services.publish_service import serialize_content
from miledesigns.utils.payload_guard import ImageRejected, ImageUpload, image_to_data_url
from miledesigns.utils.urls import UrlNormalizationError, normalize_url

log = logging.getLogger(__name__)

Tab = Literal[
    "projects", "services", "testimonials", "socialLinks", "teamMembers", "vlogEntries",
    "contactDetails", "aboutContent", "adminProfile",
]
NotificationKind = Literal["success", "error", "info"]

# tab -> (attribute on SiteContentData, model, singular label)
LIST_TABS: dict[str, tuple[str, type, str]] = {
    "projects": ("projects", Project, "Project"),
    "services": ("services", Service, "Service"),
    "testimonials": ("testimonials", Testimonial, "Testimonial"),
    "socialLinks": ("social_links", SocialLink, "Social link"),
    "teamMembers": ("team_members", TeamMember, "Team member"),
    "vlogEntries": ("vlog_entries", VlogEntry, "Vlog entry"),
}
SINGLETON_TABS: dict[str, tuple[str, type, str]] = {
    "contactDetails": ("contact_details", ContactDetails, "Contact details"),
    "aboutContent": ("about_content", AboutContent, "About content"),
    "adminProfile": ("admin_profile", AdminProfile, "Admin profile"),
}
ALL_TABS = {**LIST_TABS, **SINGLETON_TABS}

# JSON names of image-bearing fields; multi-image fields append, single ones replace
SINGLE_IMAGE_FIELDS = {"imageUrl", "avatarUrl", "thumbnailUrl"}
MULTI_IMAGE_FIELDS = {"homeBackgroundImages", "certificateImages", "gallery"}

# searched text per list tab (JSON names)
_SEARCH_FIELDS: dict[str, tuple[str, ...]] = {
    "projects": ("title", "location", "category", "tags"),
    "services": ("title", "description"),
    "testimonials": ("name", "projectType", "feedback"),
    "socialLinks": ("name", "platform", "url"),
    "teamMembers": ("name", "role"),
    "vlogEntries": ("title", "topic"),
}


class ValidationFailed(ValueError):
    """Input refused before any I/O; the editor reports it as a notification."""


def new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Notification:
    kind: NotificationKind
    message: str
    # machine-readable cause for the HTTP layer: validation | store | unavailable | identity |
    # conflict | unsupported | too_large | not_found
    code: Optional[str] = None


@dataclass
class EditingItem:
    """Modal draft, tagged by the tab it belongs to."""
    tab: Tab
    draft: EditableItem
    is_new: bool = False


@dataclass
class PendingConfirmation:
    message: str
    action: Callable[[], bool] = field(repr=False)


def is_site_admin(profile: dict | AdminProfile, email: str | None) -> bool:
    """Main admin email or an enabled sub-admin (case-insensitive)."""
    if isinstance(profile, AdminProfile):
        profile = profile.model_dump(by_alias=True)
    target = normalize_email(email)
    if not target:
        return False
    if normalize_email(profile.get("email")) == target:
        return True
    return any(
        normalize_email(s.get("email")) == target and s.get("enabled", True)
        for s in profile.get("subAdmins") or []
    )


class AdminEditor:
    def __init__(
        self,
        store: ContentStore,
        identity: IdentityClient,
        *,
        on_data_update: Optional[Callable[[], None]] = None,
    ):
        self.store = store
        self.identity = identity
        self.on_data_update = on_data_update

        self.working: SiteContentData = SiteContentData()
        self.saved_snapshot: str = self.current_snapshot()
        self.loaded = False

        self.active_tab: Tab = "projects"
        self.search_term: str = ""
        self.editing_item: Optional[EditingItem] = None
        self.confirmation: Optional[PendingConfirmation] = None
        self.notifications: list[Notification] = []

        self._publish_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------
    @property
    def notification(self) -> Optional[Notification]:
        return self.notifications[-1] if self.notifications else None

    def _notify(self, kind: NotificationKind, message: str, code: str | None = None) -> None:
        self.notifications.append(Notification(kind, message, code))
        del self.notifications[:-20]

    def _fail(self, message: str, code: str = "validation") -> bool:
        self._notify("error", message, code)
        return False

    def dismiss_notification(self) -> None:
        self.notifications.clear()

    def _require_loaded(self) -> bool:
        if self.loaded:
            return True
        return self._fail("Site content is not loaded; reload before saving", "unavailable")

    def _refresh_public_view(self) -> None:
        if self.on_data_update is None:
            return
        try:
            self.on_data_update()
        except StoreError as e:
            log.warning("public view refresh failed after a write: %s", e)
            self._notify("info", "Changes are saved; the public site will pick them up on its next read")

    # ------------------------------------------------------------------
    # Loading & dirty tracking
    # ------------------------------------------------------------------
    def load(self) -> bool:
        """(Re)seed working state from the store and take a fresh baseline."""
        try:
            content = self.store.get_all_content()
            working = SiteContentData.model_validate(content)
        except StoreError as e:
            return self._fail(str(e), "unavailable" if isinstance(e, StoreUnavailable) else "store")
        except ValidationError as e:
            log.error("stored site content does not match the content model: %s", e)
            return self._fail("Stored site content is invalid", "store")
        self.working = working
        self.saved_snapshot = self.current_snapshot()
        self.editing_item = None
        self.confirmation = None
        self.loaded = True
        return True

    def working_payload(self) -> dict:
        return self.working.to_payload()

    def current_snapshot(self) -> str:
        return serialize_content(self.working_payload())

    @property
    def has_unsaved_changes(self) -> bool:
        return self.current_snapshot() != self.saved_snapshot

    @property
    def is_publishing(self) -> bool:
        return self._publish_lock.locked()

    # ------------------------------------------------------------------
    # Tabs & search
    # ------------------------------------------------------------------
    def set_active_tab(self, tab: str) -> None:
        if tab not in ALL_TABS:
            raise ValueError(f"Unknown tab: {tab}")
        if tab != self.active_tab:
            self.search_term = ""
            self.editing_item = None
        self.active_tab = tab

    def set_search_term(self, term: str) -> None:
        self.search_term = term or ""

    def items(self, tab: str | None = None) -> list:
        tab = tab or self.active_tab
        attr, _, _ = LIST_TABS[tab]
        return getattr(self.working, attr)

    def _set_items(self, tab: str, items: list) -> None:
        attr, _, _ = LIST_TABS[tab]
        setattr(self.working, attr, items)

    def visible_items(self) -> list:
        if self.active_tab not in LIST_TABS:
            return []
        items = self.items()
        term = self.search_term.strip().lower()
        if not term:
            return list(items)
        fields = _SEARCH_FIELDS[self.active_tab]

        def haystack(item) -> str:
            data = item.model_dump(by_alias=True)
            parts: list[str] = []
            for f in fields:
                value = data.get(f)
                if isinstance(value, list):
                    parts.extend(str(v) for v in value)
                elif value is not None:
                    parts.append(str(value))
            return " ".join(parts).lower()

        return [item for item in items if term in haystack(item)]

    def find_item(self, item_id: str, tab: str | None = None):
        for item in self.items(tab):
            if item.id == item_id:
                return item
        return None

    # ------------------------------------------------------------------
    # Modal: add / edit / submit
    # ------------------------------------------------------------------
    def _blank_item(self, tab: str) -> EditableItem:
        item_id = new_id()
        if tab == "projects":
            return Project(id=item_id, category="Residential", year=date.today().year)
        if tab == "services":
            return Service(id=item_id, icon="📐")
        if tab == "testimonials":
            return Testimonial(id=item_id, rating=5)
        if tab == "socialLinks":
            return SocialLink(id=item_id, platform="Website", enabled=True)
        if tab in LIST_TABS:
            _, model, _ = LIST_TABS[tab]
            return model(id=item_id)
        raise ValueError(f"Cannot add items to {tab}")

    def start_add(self) -> EditingItem:
        tab = self.active_tab
        if tab not in LIST_TABS:
            raise ValueError(f"{tab} is a single record; edit it instead")
        self.editing_item = EditingItem(tab=tab, draft=self._blank_item(tab), is_new=True)
        return self.editing_item

    def start_edit(self, item_id: str | None = None) -> EditingItem:
        tab = self.active_tab
        if tab in SINGLETON_TABS:
            attr, _, _ = SINGLETON_TABS[tab]
            source = getattr(self.working, attr)
        else:
            source = self.find_item(item_id or "")
            if source is None:
                raise KeyError(item_id)
        # copy-on-write: the listed entity only changes on submit
        self.editing_item = EditingItem(tab=tab, draft=source.model_copy(deep=True), is_new=False)
        return self.editing_item

    def cancel_edit(self) -> None:
        self.editing_item = None

    def update_draft(self, changes: dict[str, Any]) -> bool:
        """Apply JSON-named field changes to the draft, re-validating it."""
        if self.editing_item is None:
            return self._fail("Nothing is being edited")
        draft = self.editing_item.draft
        merged = {**draft.model_dump(by_alias=True), **(changes or {})}
        merged["id"] = draft.id
        try:
            self.editing_item.draft = type(draft).model_validate(merged)
        except ValidationError as e:
            err = e.errors()[0]
            where = ".".join(str(p) for p in err.get("loc", ()))
            return self._fail(f"Invalid value for '{where}': {err.get('msg')}")
        return True

    def submit(self) -> bool:
        editing = self.editing_item
        if editing is None:
            return self._fail("Nothing is being edited")
        tab = editing.tab
        draft = editing.draft

        if tab in SINGLETON_TABS:
            attr, _, label = SINGLETON_TABS[tab]
            if isinstance(draft, AdminProfile):
                # sub-admins are written through separately; never roll them back from a stale draft
                draft = draft.model_copy(update={"sub_admins": list(self.working.admin_profile.sub_admins)})
            setattr(self.working, attr, draft)
            self.editing_item = None
            self._notify("success", f"{label} updated")
            return True

        _, _, label = LIST_TABS[tab]
        if isinstance(draft, VlogEntry):
            try:
                draft = draft.model_copy(update={"url": normalize_url(draft.url)})
            except UrlNormalizationError:
                # modal stays open
                return self._fail("Please enter a valid video URL (e.g. https://youtube.com/...)")

        items = self.items(tab)
        if any(item.id == draft.id for item in items):
            updated = [draft if item.id == draft.id else item for item in items]
        else:
            updated = [*items, draft]
        self._set_items(tab, updated)
        self.editing_item = None
        self._notify("success", f"{label} saved")
        return True

    # ------------------------------------------------------------------
    # Confirmations (non-blocking)
    # ------------------------------------------------------------------
    def _ask(self, message: str, action: Callable[[], bool]) -> PendingConfirmation:
        self.confirmation = PendingConfirmation(message=message, action=action)
        return self.confirmation

    def confirm(self) -> bool:
        pending = self.confirmation
        if pending is None:
            return False
        self.confirmation = None
        return pending.action()

    def cancel_confirmation(self) -> None:
        self.confirmation = None

    def request_delete(self, item_id: str) -> PendingConfirmation:
        tab = self.active_tab
        if tab not in LIST_TABS:
            raise ValueError(f"{tab} is a single record and cannot be deleted")
        item = self.find_item(item_id)
        if item is None:
            raise KeyError(item_id)
        _, _, label = LIST_TABS[tab]
        title = getattr(item, "title", None) or getattr(item, "name", None) or item_id
        return self._ask(
            f"Delete {label.lower()} '{title}'? It will disappear from the site after you publish.",
            lambda: self._delete(tab, item_id),
        )

    def _delete(self, tab: str, item_id: str) -> bool:
        self._set_items(tab, [item for item in self.items(tab) if item.id != item_id])
        _, _, label = LIST_TABS[tab]
        self._notify("success", f"{label} deleted")
        return True

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------
    def _image_target(self, field_name: str) -> tuple[dict, Any] | None:
        if self.editing_item is None:
            self._fail("Open an item before uploading images")
            return None
        data = self.editing_item.draft.model_dump(by_alias=True)
        if field_name not in data or field_name not in (SINGLE_IMAGE_FIELDS | MULTI_IMAGE_FIELDS):
            self._fail(f"{field_name} is not an image field of this item")
            return None
        return data, data[field_name]

    def attach_image(self, field_name: str, upload: ImageUpload) -> bool:
        """Single-image field: validate, convert to a data URL and set it on the draft."""
        if field_name in MULTI_IMAGE_FIELDS:
            return self.attach_images(field_name, [upload]) > 0
        if self._image_target(field_name) is None:
            return False
        try:
            data_url = image_to_data_url(upload)
        except ImageRejected as e:
            return self._fail(f"{field_name}: {e}", e.reason)
        return self.update_draft({field_name: data_url})

    def attach_images(self, field_name: str, uploads: Iterable[ImageUpload]) -> int:
        """Multi-image field: each file on its own, failures reported, successes appended."""
        target = self._image_target(field_name)
        if target is None:
            return 0
        _, current = target
        if field_name not in MULTI_IMAGE_FIELDS:
            self._fail(f"{field_name} holds a single image")
            return 0
        added: list[str] = []
        for upload in uploads:
            try:
                added.append(image_to_data_url(upload))
            except ImageRejected as e:
                self._notify("error", f"{field_name}: {e}", e.reason)
        if added and self.update_draft({field_name: [*(current or []), *added]}):
            self._notify("success", f"Added {len(added)} image(s)")
            return len(added)
        return 0

    # ------------------------------------------------------------------
    # Publish / reset
    # ------------------------------------------------------------------
    def publish(self) -> bool:
        if not self._require_loaded():
            return False
        if not self._publish_lock.acquire(blocking=False):
            return self._fail("A publish is already in progress", "conflict")
        try:
            payload = self.working_payload()
            try:
                self.store.save_all_content(payload)
            except StoreError as e:
                log.warning("publish failed: %s", e)
                return self._fail(
                    f"Failed to publish changes: {e}",
                    "unavailable" if isinstance(e, StoreUnavailable) else "store",
                )
            self.saved_snapshot = serialize_content(payload)
            self._notify("success", "All changes published")
        finally:
            self._publish_lock.release()
        self._refresh_public_view()
        return True

    def request_reset(self) -> PendingConfirmation:
        return self._ask(
            "Reset ALL site content to the built-in defaults? Published changes will be lost.",
            self._reset_all_data,
        )

    def _reset_all_data(self) -> bool:
        try:
            self.store.reset()
        except StoreError as e:
            return self._fail(f"Failed to reset data: {e}", "store")
        # the old working copy predates the reset and must not be published back
        self.loaded = False
        # full reload of admin and public state instead of reconciling in place
        reloaded = self.load()
        if reloaded:
            self._notify("success", "Site content reset to defaults")
        self._refresh_public_view()
        return reloaded

    # ------------------------------------------------------------------
    # Sub-admins (written through immediately, outside Publish)
    # ------------------------------------------------------------------
    def _check_sub_admin(self, name: str, email: str, password: str) -> None:
        if not (name or "").strip() or not (email or "").strip() or not password:
            raise ValidationFailed("Name, email and password are required")
        problem = password_problem(password)
        if problem:
            raise ValidationFailed(problem)
        target = normalize_email(email)
        if target == normalize_email(self.working.admin_profile.email):
            raise ValidationFailed("That email belongs to the main admin")
        if any(normalize_email(s.email) == target for s in self.working.admin_profile.sub_admins):
            raise ValidationFailed("A sub-admin with that email already exists")

    def _write_sub_admins(self, sub_admins: list[SubAdmin]) -> None:
        """Persist only adminProfile.subAdmins; other unpublished edits stay pending."""
        dumped = [s.model_dump(by_alias=True, mode="json") for s in sub_admins]
        stored = self.store.get_all_content()
        stored["adminProfile"] = {**stored.get("adminProfile", {}), "subAdmins": dumped}
        self.store.save_all_content(stored)

        self.working.admin_profile.sub_admins = list(sub_admins)
        baseline = json.loads(self.saved_snapshot)
        baseline.setdefault("adminProfile", {})["subAdmins"] = dumped
        self.saved_snapshot = serialize_content(baseline)

    def add_sub_admin(self, name: str, email: str, password: str) -> bool:
        if not self._require_loaded():
            return False
        try:
            self._check_sub_admin(name, email, password)
        except ValidationFailed as e:
            return self._fail(str(e))
        try:
            self.identity.create_user_from_admin(email.strip(), password)
        except IdentityError as e:
            return self._fail(f"Could not create login: {e}", "identity")
        sub = SubAdmin(id=new_id(), name=name.strip(), email=email.strip(), enabled=True)
        try:
            self._write_sub_admins([*self.working.admin_profile.sub_admins, sub])
        except StoreError as e:
            # the login exists but is not listed yet; the operator re-adds or fixes it by hand
            log.error("login for %s created but sub-admin list not saved: %s", sub.email, e)
            return self._fail(f"Login created, but the sub-admin list could not be saved: {e}", "store")
        self._notify("success", f"Sub-admin {sub.email} added")
        return True

    def set_sub_admin_enabled(self, sub_admin_id: str, enabled: bool) -> bool:
        if not self._require_loaded():
            return False
        subs = self.working.admin_profile.sub_admins
        if not any(s.id == sub_admin_id for s in subs):
            return self._fail("Sub-admin not found", "not_found")
        updated = [s.model_copy(update={"enabled": enabled}) if s.id == sub_admin_id else s for s in subs]
        try:
            self._write_sub_admins(updated)
        except StoreError as e:
            return self._fail(f"Could not update sub-admin: {e}", "store")
        self._notify("success", "Sub-admin enabled" if enabled else "Sub-admin disabled")
        return True

    def toggle_sub_admin(self, sub_admin_id: str) -> bool:
        current = next((s for s in self.working.admin_profile.sub_admins if s.id == sub_admin_id), None)
        if current is None:
            return self._fail("Sub-admin not found", "not_found")
        return self.set_sub_admin_enabled(sub_admin_id, not current.enabled)

    def request_remove_sub_admin(self, sub_admin_id: str) -> PendingConfirmation:
        current = next((s for s in self.working.admin_profile.sub_admins if s.id == sub_admin_id), None)
        if current is None:
            raise KeyError(sub_admin_id)
        return self._ask(
            f"Remove sub-admin {current.email}? They will lose dashboard access.",
            lambda: self._remove_sub_admin(sub_admin_id),
        )

    def _remove_sub_admin(self, sub_admin_id: str) -> bool:
        if not self._require_loaded():
            return False
        remaining = [s for s in self.working.admin_profile.sub_admins if s.id != sub_admin_id]
        try:
            self._write_sub_admins(remaining)
        except StoreError as e:
            return self._fail(f"Could not remove sub-admin: {e}", "store")
        self._notify("success", "Sub-admin removed")
        return True

    # ------------------------------------------------------------------
    # View state
    # ------------------------------------------------------------------
    def state(self) -> dict:
        def dump(obj) -> dict:
            return obj.model_dump(by_alias=True, mode="json")

        note = self.notification
        return {
            "activeTab": self.active_tab,
            "searchTerm": self.search_term,
            "hasUnsavedChanges": self.has_unsaved_changes,
            "isPublishing": self.is_publishing,
            "items": [dump(i) for i in self.visible_items()],
            "editingItem": (
                {"tab": self.editing_item.tab, "isNew": self.editing_item.is_new, "draft": dump(self.editing_item.draft)}
                if self.editing_item else None
            ),
            "confirmation": self.confirmation.message if self.confirmation else None,
            "notification": {"kind": note.kind, "message": note.message} if note else None,
            "content": self.working_payload(),
        }
