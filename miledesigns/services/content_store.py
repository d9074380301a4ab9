# miledesigns/services/content_store.py
# Single-row persistence of the site aggregate + normalization against the default catalog
from __future__ import annotations

import copy
import logging
from typing import Any, Callable

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from miledesigns.core.settings import settings
from miledesigns.models.content import SiteContent
from miledesigns.seeds.default_catalog import default_site_content

log = logging.getLogger(__name__)

LIST_FIELDS = ("projects", "services", "testimonials", "teamMembers", "vlogEntries")
ABOUT_LIST_FIELDS = ("stats", "homeBackgroundImages", "certificateImages")


class StoreError(RuntimeError):
    """Generic persistence failure (read succeeded but a write failed, bad row, ...)."""


class StoreUnavailable(StoreError):
    """The backing database could not be reached."""


# -------- Normalization --------
def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _is_sub_admin(item: Any) -> bool:
    return isinstance(item, dict) and isinstance(item.get("id"), str) and isinstance(item.get("email"), str)


def normalize_content(raw: Any) -> dict:
    """
    Merge a stored (possibly partial or older) payload with the default catalog.
    - list collections: stored list verbatim, else default list
    - socialLinks: stored list + defaults whose id is not present (appended at the end)
    - contactDetails / aboutContent / adminProfile: shallow merge over defaults,
      with per-field list rules
    Idempotent: normalize_content(normalize_content(x)) == normalize_content(x).
    """
    raw = copy.deepcopy(_as_dict(raw))
    defaults = default_site_content()
    out: dict = {}

    for key in LIST_FIELDS:
        out[key] = raw[key] if isinstance(raw.get(key), list) else defaults[key]

    loaded_links = raw.get("socialLinks")
    if isinstance(loaded_links, list):
        seen = {item.get("id") for item in loaded_links if isinstance(item, dict)}
        missing = [d for d in defaults["socialLinks"] if d["id"] not in seen]
        out["socialLinks"] = loaded_links + missing
    else:
        out["socialLinks"] = defaults["socialLinks"]

    loaded_contact = _as_dict(raw.get("contactDetails"))
    contact = {**defaults["contactDetails"], **loaded_contact}
    phones = loaded_contact.get("phoneNumbers")
    contact["phoneNumbers"] = phones if isinstance(phones, list) else defaults["contactDetails"]["phoneNumbers"]
    out["contactDetails"] = contact

    loaded_about = _as_dict(raw.get("aboutContent"))
    about = {**defaults["aboutContent"], **loaded_about}
    for key in ABOUT_LIST_FIELDS:
        # empty and absent are treated alike: the About section always has content
        value = loaded_about.get(key)
        about[key] = value if isinstance(value, list) and value else defaults["aboutContent"][key]
    out["aboutContent"] = about

    loaded_profile = _as_dict(raw.get("adminProfile"))
    profile = {**defaults["adminProfile"], **loaded_profile}
    subs = loaded_profile.get("subAdmins")
    profile["subAdmins"] = [s for s in subs if _is_sub_admin(s)] if isinstance(subs, list) else defaults["adminProfile"]["subAdmins"]
    out["adminProfile"] = profile

    # keys we don't know about are carried through untouched
    for key, value in raw.items():
        out.setdefault(key, value)
    return out


# -------- Store --------
def _field_accessors(key: str) -> tuple[Callable, Callable]:
    def getter(self: "ContentStore"):
        return self.get_all_content()[key]

    def setter(self: "ContentStore", value) -> dict:
        data = self.get_all_content()
        data[key] = value
        return self.save_all_content(data)

    getter.__name__ = f"get_{key}"
    setter.__name__ = f"save_{key}"
    return getter, setter


class ContentStore:
    """
    Owns the "one row holds everything" contract:
    get-or-initialize on read, normalize + full overwrite on write.
    No partial remote updates; last writer wins.
    """

    def __init__(self, session_factory: sessionmaker, *, row_id: str | None = None):
        self._session_factory = session_factory
        self.row_id = row_id or settings.SITE_CONTENT_ROW_ID

    # ---- read ----
    def get_all_content(self) -> dict:
        try:
            with self._session_factory() as db:
                row = db.get(SiteContent, self.row_id)
                if row is not None:
                    return normalize_content(row.data)
                return self._initialize(db)
        except StoreError:
            raise
        except OperationalError as e:
            log.error("content store unreachable: %s", e)
            raise StoreUnavailable("Content store is unavailable") from e
        except SQLAlchemyError as e:
            log.exception("content store read failed")
            raise StoreError(f"Could not load site content: {e.__class__.__name__}") from e

    def _initialize(self, db: Session) -> dict:
        data = default_site_content()
        db.add(SiteContent(id=self.row_id, data=data))
        try:
            db.commit()
        except IntegrityError:
            # another process created the row first; use theirs
            db.rollback()
            row = db.get(SiteContent, self.row_id)
            if row is None:
                raise StoreError("Could not initialize site content")
            return normalize_content(row.data)
        except SQLAlchemyError as e:
            db.rollback()
            log.exception("content store initialization failed")
            raise StoreError("Could not initialize site content") from e
        log.info("site content row %r initialized from default catalog", self.row_id)
        return copy.deepcopy(data)

    # ---- write ----
    def save_all_content(self, data: dict) -> dict:
        """Normalize and upsert the whole aggregate in one transaction. Returns what was stored."""
        normalized = normalize_content(data)
        try:
            with self._session_factory.begin() as db:
                row = db.get(SiteContent, self.row_id)
                if row is None:
                    db.add(SiteContent(id=self.row_id, data=normalized))
                else:
                    row.data = normalized
        except OperationalError as e:
            log.error("content store unreachable on save: %s", e)
            raise StoreUnavailable("Content store is unavailable") from e
        except SQLAlchemyError as e:
            log.exception("content store save failed")
            raise StoreError(f"Could not save site content: {e.__class__.__name__}") from e
        log.info("site content row %r overwritten", self.row_id)
        return copy.deepcopy(normalized)

    def reset(self) -> dict:
        """Overwrite the row with the default catalog. Callers reload their own state."""
        return self.save_all_content(default_site_content())

    # ---- per-collection convenience (read aggregate, replace one field, save) ----
    get_projects, save_projects = _field_accessors("projects")
    get_services, save_services = _field_accessors("services")
    get_testimonials, save_testimonials = _field_accessors("testimonials")
    get_social_links, save_social_links = _field_accessors("socialLinks")
    get_team_members, save_team_members = _field_accessors("teamMembers")
    get_vlog_entries, save_vlog_entries = _field_accessors("vlogEntries")
    get_contact_details, save_contact_details = _field_accessors("contactDetails")
    get_about_content, save_about_content = _field_accessors("aboutContent")
    get_admin_profile, save_admin_profile = _field_accessors("adminProfile")
