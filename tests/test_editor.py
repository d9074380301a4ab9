import pytest

from miledesigns.services.content_store import ContentStore, StoreError, StoreUnavailable
from miledesigns.services.editor import AdminEditor
from miledesigns.services.presentation import SitePresentation


@pytest.fixture
def presentation(store: ContentStore) -> SitePresentation:
    p = SitePresentation(store)
    p.refresh()
    return p


@pytest.fixture
def editor(store: ContentStore, fake_identity, presentation) -> AdminEditor:
    e = AdminEditor(store, fake_identity, on_data_update=presentation.refresh)
    assert e.load()
    return e


def _add_project(editor: AdminEditor, **changes) -> None:
    editor.set_active_tab("projects")
    editor.start_add()
    assert editor.update_draft(changes)
    assert editor.submit()


def test_fresh_load_is_clean(editor: AdminEditor):
    assert editor.has_unsaved_changes is False
    assert len(editor.items("projects")) == 4


def test_add_project_publish_and_presentation_refresh(editor: AdminEditor, store, presentation):
    _add_project(editor, title="Nexus Hub", year=2024, tags=["Sustainable", "Tech"])

    assert len(editor.items("projects")) == 5
    assert editor.has_unsaved_changes is True
    # the public side keeps rendering what it last loaded
    assert len(presentation.content.projects) == 4

    assert editor.publish()

    assert editor.has_unsaved_changes is False
    stored = store.get_all_content()["projects"]
    assert stored[-1]["title"] == "Nexus Hub"
    assert stored[-1]["tags"] == ["Sustainable", "Tech"]
    assert len(presentation.content.projects) == 5
    assert editor.notification.kind == "success"


def test_new_item_defaults(editor: AdminEditor):
    editor.set_active_tab("testimonials")
    draft = editor.start_add().draft
    assert draft.rating == 5
    assert draft.id not in {t.id for t in editor.items()}

    editor.set_active_tab("socialLinks")
    assert editor.start_add().draft.enabled is True

    editor.set_active_tab("projects")
    assert editor.start_add().draft.category == "Residential"


def test_edit_replaces_in_place_without_touching_others(editor: AdminEditor):
    editor.set_active_tab("projects")
    before = [p.model_copy(deep=True) for p in editor.items()]

    editor.start_edit("2")
    editor.update_draft({"title": "Nexus Hub II"})
    # copy-on-write: the listed entity is untouched until submit
    assert editor.find_item("2").title == "Nexus Hub"
    assert editor.submit()

    after = editor.items()
    assert [p.id for p in after] == [p.id for p in before]
    assert after[1].title == "Nexus Hub II"
    for i in (0, 2, 3):
        assert after[i] == before[i]


def test_reverting_an_edit_clears_dirty_flag(editor: AdminEditor):
    editor.set_active_tab("services")
    editor.start_edit("reno")
    editor.update_draft({"title": "Retrofit"})
    editor.submit()
    assert editor.has_unsaved_changes

    editor.start_edit("reno")
    editor.update_draft({"title": "Renovation & Retrofit"})
    editor.submit()
    assert editor.has_unsaved_changes is False


def test_delete_requires_confirmation(editor: AdminEditor):
    editor.set_active_tab("testimonials")

    editor.request_delete("t2")
    editor.cancel_confirmation()
    assert "t2" in [t.id for t in editor.items()]
    assert editor.has_unsaved_changes is False

    editor.request_delete("t2")
    assert editor.confirm()
    assert "t2" not in [t.id for t in editor.items()]
    assert editor.has_unsaved_changes is True


def test_delete_unknown_item_raises(editor: AdminEditor):
    editor.set_active_tab("projects")
    with pytest.raises(KeyError):
        editor.request_delete("missing")


def test_vlog_url_normalized_on_submit(editor: AdminEditor):
    editor.set_active_tab("vlogEntries")
    editor.start_add()
    editor.update_draft({"title": "Site walk", "url": "youtube.com/watch?v=abc"})
    assert editor.submit()
    assert editor.items()[-1].url == "https://youtube.com/watch?v=abc"


def test_invalid_vlog_url_keeps_modal_open(editor: AdminEditor):
    editor.set_active_tab("vlogEntries")
    editor.start_add()
    editor.update_draft({"title": "Broken", "url": "not a url"})
    count = len(editor.items())

    assert editor.submit() is False
    assert editor.editing_item is not None
    assert len(editor.items()) == count
    assert editor.notification.code == "validation"


def test_invalid_draft_value_is_rejected(editor: AdminEditor):
    editor.set_active_tab("testimonials")
    editor.start_edit("t1")
    assert editor.update_draft({"rating": 9}) is False
    assert editor.editing_item.draft.rating == 5


def test_singleton_edit(editor: AdminEditor):
    editor.set_active_tab("contactDetails")
    editor.start_edit()
    editor.update_draft({"location": "Victoria Island, Lagos", "phoneNumbers": ["+234 1"]})
    assert editor.submit()
    assert editor.working.contact_details.location == "Victoria Island, Lagos"
    assert editor.has_unsaved_changes

    editor.set_active_tab("aboutContent")
    with pytest.raises(ValueError):
        editor.start_add()


def test_tab_switch_clears_search(editor: AdminEditor):
    editor.set_active_tab("projects")
    editor.set_search_term("loft")
    assert [p.id for p in editor.visible_items()] == ["4"]

    editor.set_search_term("sustainable")
    assert {p.id for p in editor.visible_items()} == {"2", "3"}

    editor.set_active_tab("services")
    assert editor.search_term == ""
    assert len(editor.visible_items()) == 4


def test_publish_failure_keeps_working_state(editor: AdminEditor, store, monkeypatch):
    _add_project(editor, title="Unsaved")

    def _boom(data):
        raise StoreError("Could not save site content: OperationalError")

    monkeypatch.setattr(store, "save_all_content", _boom)
    assert editor.publish() is False
    assert editor.has_unsaved_changes is True
    assert editor.items("projects")[-1].title == "Unsaved"
    assert editor.notification.code == "store"


def test_second_publish_while_in_flight_is_refused(editor: AdminEditor):
    _add_project(editor, title="Pending")
    editor._publish_lock.acquire()
    try:
        assert editor.publish() is False
        assert editor.notification.code == "conflict"
    finally:
        editor._publish_lock.release()
    assert editor.publish() is True


def test_reset_all_data(editor: AdminEditor, store, presentation):
    _add_project(editor, title="Gone after reset")
    assert editor.publish()
    assert len(presentation.content.projects) == 5

    editor.request_reset()
    assert editor.confirm()

    assert len(editor.items("projects")) == 4
    assert editor.has_unsaved_changes is False
    assert len(store.get_all_content()["projects"]) == 4
    assert len(presentation.content.projects) == 4


def test_cleared_about_stats_come_back_after_publish(editor: AdminEditor, store):
    # empty About lists are not persisted: the defaults return on reload
    editor.set_active_tab("aboutContent")
    editor.start_edit()
    editor.update_draft({"stats": []})
    editor.submit()
    assert editor.working.about_content.stats == []
    assert editor.publish()

    assert len(store.get_all_content()["aboutContent"]["stats"]) == 3
    editor.load()
    assert len(editor.working.about_content.stats) == 3


def test_unloaded_editor_never_overwrites_the_store(store: ContentStore, fake_identity, monkeypatch):
    store.get_all_content()  # seed the row with defaults
    e = AdminEditor(store, fake_identity)

    def _down():
        raise StoreUnavailable("database unavailable")

    monkeypatch.setattr(store, "get_all_content", _down)
    assert e.load() is False
    monkeypatch.undo()

    assert e.loaded is False
    assert e.publish() is False
    assert e.notification.code == "unavailable"
    assert e.add_sub_admin("Ada", "ada@example.com", "long-enough") is False
    assert fake_identity.calls == []
    assert len(store.get_all_content()["projects"]) == 4
    assert len(store.get_all_content()["services"]) > 0


def test_public_refresh_failure_does_not_fail_publish(store: ContentStore, fake_identity):
    def _refresh():
        raise StoreUnavailable("down after write")

    e = AdminEditor(store, fake_identity, on_data_update=_refresh)
    assert e.load()
    _add_project(e, title="Committed")

    assert e.publish() is True
    assert e.has_unsaved_changes is False
    assert e.notification.kind == "info"
    assert store.get_all_content()["projects"][-1]["title"] == "Committed"

    e.request_reset()
    assert e.confirm() is True
    assert e.notification.kind == "info"
    assert len(store.get_all_content()["projects"]) == 4
