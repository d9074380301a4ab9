import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from miledesigns.models.content import SiteContent
from miledesigns.seeds.default_catalog import default_site_content
from miledesigns.services.content_store import ContentStore, StoreUnavailable


def _row_count(session_factory) -> int:
    with session_factory() as s:
        return s.scalar(select(func.count()).select_from(SiteContent))


def test_first_read_initializes_row_with_defaults(store: ContentStore, session_factory):
    assert _row_count(session_factory) == 0

    data = store.get_all_content()

    assert data == default_site_content()
    with session_factory() as s:
        row = s.get(SiteContent, store.row_id)
        assert row is not None
        assert row.data == default_site_content()


def test_save_overwrites_single_row(store: ContentStore, session_factory):
    data = store.get_all_content()
    data["projects"] = data["projects"][:1]
    data["contactDetails"]["location"] = "Abuja"

    saved = store.save_all_content(data)
    saved_again = store.save_all_content(saved)

    assert _row_count(session_factory) == 1
    assert saved_again == saved
    reloaded = store.get_all_content()
    assert [p["id"] for p in reloaded["projects"]] == ["1"]
    assert reloaded["contactDetails"]["location"] == "Abuja"


def test_save_normalizes_before_writing(store: ContentStore):
    saved = store.save_all_content({"projects": []})
    assert saved["projects"] == []
    assert saved["services"] == default_site_content()["services"]
    assert store.get_all_content() == saved


def test_reset_restores_defaults(store: ContentStore):
    store.save_all_content({"projects": [], "testimonials": []})
    store.reset()
    assert store.get_all_content() == default_site_content()


def test_per_collection_accessors(store: ContentStore):
    projects = store.get_projects()
    store.save_projects(projects[:2])
    assert [p["id"] for p in store.get_projects()] == ["1", "2"]

    contact = store.get_contact_details()
    contact["inquiryEmail"] = "studio@example.com"
    store.save_contact_details(contact)
    assert store.get_all_content()["contactDetails"]["inquiryEmail"] == "studio@example.com"


def test_unreachable_database_is_store_unavailable():
    class _Broken:
        def __call__(self):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        def begin(self):
            raise OperationalError("BEGIN", {}, Exception("connection refused"))

    store = ContentStore(_Broken())
    with pytest.raises(StoreUnavailable):
        store.get_all_content()
    with pytest.raises(StoreUnavailable):
        store.save_all_content({})


def test_last_writer_wins(session_factory):
    # two editors, no version token: the second publish replaces the first entirely
    first, second = ContentStore(session_factory), ContentStore(session_factory)
    a = first.get_all_content()
    b = second.get_all_content()

    a["projects"].append({"id": "from-a", "title": "A"})
    b["services"] = b["services"][:1]
    first.save_all_content(a)
    second.save_all_content(b)

    final = first.get_all_content()
    assert "from-a" not in [p["id"] for p in final["projects"]]
    assert len(final["services"]) == 1


def test_contact_overrides_from_settings(store: ContentStore, monkeypatch):
    from miledesigns.core.settings import settings

    monkeypatch.setattr(settings, "INQUIRY_EMAIL", "leads@example.com")
    assert store.get_all_content()["contactDetails"]["inquiryEmail"] == "leads@example.com"
