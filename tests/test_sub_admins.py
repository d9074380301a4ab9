import pytest

from miledesigns.services.content_store import StoreError
from miledesigns.services.editor import AdminEditor, is_site_admin
from miledesigns.services.identity import IdentityClient, IdentityError


@pytest.fixture
def editor(store, fake_identity) -> AdminEditor:
    e = AdminEditor(store, fake_identity)
    assert e.load()
    return e


@pytest.mark.parametrize(
    "name,email,password,message",
    [
        ("", "ada@example.com", "long-enough", "required"),
        ("Ada", "", "long-enough", "required"),
        ("Ada", "ada@example.com", "", "required"),
        ("Ada", "ada@example.com", "short", "at least 8"),
        ("Ada", "ADMIN@MileDesigns.com", "long-enough", "main admin"),
    ],
)
def test_invalid_sub_admin_rejected_before_identity_call(editor, fake_identity, name, email, password, message):
    assert editor.add_sub_admin(name, email, password) is False
    assert message in editor.notification.message
    assert editor.notification.code == "validation"
    assert fake_identity.calls == []
    assert editor.working.admin_profile.sub_admins == []


def test_duplicate_sub_admin_email_rejected(editor, fake_identity):
    assert editor.add_sub_admin("Ada", "ada@example.com", "long-enough")
    assert editor.add_sub_admin("Ada Again", "Ada@Example.com", "long-enough") is False
    assert "already exists" in editor.notification.message
    assert len(fake_identity.calls) == 1


def test_add_sub_admin_writes_through_without_publishing_other_edits(editor, store, fake_identity):
    editor.set_active_tab("projects")
    editor.start_add()
    editor.update_draft({"title": "Still a draft"})
    editor.submit()

    assert editor.add_sub_admin("Ada", "ada@example.com", "long-enough")

    assert fake_identity.calls == [("ada@example.com", "long-enough")]
    stored = store.get_all_content()
    assert [s["email"] for s in stored["adminProfile"]["subAdmins"]] == ["ada@example.com"]
    assert "Still a draft" not in [p["title"] for p in stored["projects"]]
    # only the project remains unpublished
    assert editor.has_unsaved_changes is True
    editor.set_active_tab("projects")
    editor.request_delete(editor.items()[-1].id)
    editor.confirm()
    assert editor.has_unsaved_changes is False


def test_toggle_and_remove_write_through(editor, store):
    editor.add_sub_admin("Ada", "ada@example.com", "long-enough")
    sub_id = editor.working.admin_profile.sub_admins[0].id

    assert editor.toggle_sub_admin(sub_id)
    assert store.get_all_content()["adminProfile"]["subAdmins"][0]["enabled"] is False
    assert editor.has_unsaved_changes is False

    editor.request_remove_sub_admin(sub_id)
    editor.cancel_confirmation()
    assert len(store.get_all_content()["adminProfile"]["subAdmins"]) == 1

    editor.request_remove_sub_admin(sub_id)
    assert editor.confirm()
    assert store.get_all_content()["adminProfile"]["subAdmins"] == []
    assert editor.working.admin_profile.sub_admins == []


def test_identity_failure_is_reported(editor, fake_identity, store):
    fake_identity.fail_with = IdentityError("User already registered")
    assert editor.add_sub_admin("Ada", "ada@example.com", "long-enough") is False
    assert editor.notification.code == "identity"
    assert store.get_all_content()["adminProfile"]["subAdmins"] == []


def test_store_failure_after_login_created(editor, fake_identity, store, monkeypatch):
    def _boom(data):
        raise StoreError("Could not save site content: OperationalError")

    monkeypatch.setattr(store, "save_all_content", _boom)
    assert editor.add_sub_admin("Ada", "ada@example.com", "long-enough") is False
    # the login exists but is not listed; reported, not retried
    assert len(fake_identity.calls) == 1
    assert editor.notification.code == "store"
    assert "Login created" in editor.notification.message
    assert editor.working.admin_profile.sub_admins == []


def test_admin_profile_submit_keeps_written_sub_admins(editor):
    editor.set_active_tab("adminProfile")
    editor.start_edit()
    editor.add_sub_admin("Ada", "ada@example.com", "long-enough")
    editor.update_draft({"name": "Mile Owner"})
    assert editor.submit()
    assert editor.working.admin_profile.name == "Mile Owner"
    assert [s.email for s in editor.working.admin_profile.sub_admins] == ["ada@example.com"]


def test_is_site_admin():
    profile = {
        "email": "admin@miledesigns.com",
        "subAdmins": [
            {"id": "a", "email": "on@example.com", "enabled": True},
            {"id": "b", "email": "off@example.com", "enabled": False},
        ],
    }
    assert is_site_admin(profile, "Admin@MileDesigns.com")
    assert is_site_admin(profile, "on@example.com")
    assert not is_site_admin(profile, "off@example.com")
    assert not is_site_admin(profile, "stranger@example.com")
    assert not is_site_admin(profile, None)


def test_with_real_identity_caller_session_is_kept(store, session_factory, make_user):
    owner, token = make_user("owner@example.com", superadmin=True)
    identity = IdentityClient(session_factory, token)
    editor = AdminEditor(store, identity)
    editor.load()

    assert editor.add_sub_admin("Ada", "ada@example.com", "long-enough")
    assert identity.access_token == token
    assert identity.get_current_user_email() == "owner@example.com"

    helper = IdentityClient(session_factory)
    assert helper.sign_in("ada@example.com", "long-enough") == "ada@example.com"
