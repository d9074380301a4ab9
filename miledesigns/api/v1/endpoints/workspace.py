# =============================================================================
# Admin workspace endpoints: one editing surface per signed-in operator.
# Edits stay in the workspace until POST /publish; sub-admin changes write through.
# miledesigns/api/v1/endpoints/workspace.py
# =============================================================================
from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile

from miledesigns.deps.services import get_editor
from miledesigns.schemas.admin import (
    DraftChanges,
    DraftOpen,
    SearchIn,
    SubAdminCreate,
    SubAdminUpdate,
    TabIn,
)
from miledesigns.services.editor import AdminEditor, LIST_TABS, SINGLETON_TABS
from miledesigns.utils.payload_guard import ImageUpload

router = APIRouter()

# notification code -> HTTP status
_STATUS_BY_CODE = {
    "validation": 422,
    "identity": 400,
    "conflict": 409,
    "not_found": 404,
    "too_large": 413,
    "unsupported": 415,
    "store": 500,
    "unavailable": 503,
}


def _ok_or_raise(editor: AdminEditor, ok: bool) -> Dict[str, Any]:
    if not ok:
        note = editor.notification
        code = _STATUS_BY_CODE.get(note.code if note else None, 400)
        raise HTTPException(status_code=code, detail=note.message if note else "Operation failed")
    return editor.state()


def _select(editor: AdminEditor, collection: str) -> None:
    try:
        editor.set_active_tab(collection)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown collection: {collection}")


def _open_draft(editor: AdminEditor, collection: str, item_id: str | None) -> None:
    _select(editor, collection)
    try:
        if collection in SINGLETON_TABS or item_id:
            editor.start_edit(item_id)
        else:
            editor.start_add()
    except KeyError:
        raise HTTPException(status_code=404, detail=f"{collection} item not found: {item_id}")


def _pending(editor: AdminEditor, response: Response) -> Dict[str, Any]:
    # the destructive part runs on POST /confirm
    response.status_code = 202
    return editor.state()


# ------------------------------------------------------------------
# State / navigation
# ------------------------------------------------------------------
@router.get("")
def get_workspace(editor: AdminEditor = Depends(get_editor)):
    return editor.state()


@router.post("/tab")
def set_tab(body: TabIn, editor: AdminEditor = Depends(get_editor)):
    _select(editor, body.tab)
    if body.search_term is not None:
        editor.set_search_term(body.search_term)
    return editor.state()


@router.post("/search")
def set_search(body: SearchIn, editor: AdminEditor = Depends(get_editor)):
    editor.set_search_term(body.search_term)
    return editor.state()


@router.post("/reload")
def reload_workspace(editor: AdminEditor = Depends(get_editor)):
    """Discard unpublished edits and take a fresh baseline from the store."""
    return _ok_or_raise(editor, editor.load())


# ------------------------------------------------------------------
# Modal draft
# ------------------------------------------------------------------
@router.post("/drafts")
def open_draft(body: DraftOpen, editor: AdminEditor = Depends(get_editor)):
    _open_draft(editor, body.collection, body.item_id)
    return editor.state()


@router.patch("/drafts")
def update_draft(body: DraftChanges, editor: AdminEditor = Depends(get_editor)):
    return _ok_or_raise(editor, editor.update_draft(body.changes))


@router.post("/drafts/images/{field}")
def upload_draft_images(
    field: str,
    files: List[UploadFile] = File(...),
    editor: AdminEditor = Depends(get_editor),
):
    uploads = [ImageUpload(filename=f.filename or "", content_type=f.content_type, data=f.file.read()) for f in files]
    before = len(editor.notifications)
    if len(uploads) == 1:
        ok = editor.attach_image(field, uploads[0])
    else:
        ok = editor.attach_images(field, uploads) > 0
    state = _ok_or_raise(editor, ok)
    state["messages"] = [n.message for n in editor.notifications[before:]]
    return state


@router.post("/drafts/submit")
def submit_draft(editor: AdminEditor = Depends(get_editor)):
    return _ok_or_raise(editor, editor.submit())


@router.delete("/drafts")
def cancel_draft(editor: AdminEditor = Depends(get_editor)):
    editor.cancel_edit()
    return editor.state()


# ------------------------------------------------------------------
# One-shot CRUD (open + change + submit)
# ------------------------------------------------------------------
@router.post("/items/{collection}")
def save_item(collection: str, body: Dict[str, Any], editor: AdminEditor = Depends(get_editor)):
    if collection not in LIST_TABS:
        raise HTTPException(status_code=404, detail=f"Unknown list collection: {collection}")
    item_id = body.get("id")
    existing = editor.find_item(item_id, collection) if item_id else None
    _open_draft(editor, collection, item_id if existing else None)
    changes = {k: v for k, v in body.items() if k != "id"}
    if not editor.update_draft(changes):
        editor.cancel_edit()
        return _ok_or_raise(editor, False)
    return _ok_or_raise(editor, editor.submit())


@router.put("/singletons/{name}")
def save_singleton(name: str, body: Dict[str, Any], editor: AdminEditor = Depends(get_editor)):
    if name not in SINGLETON_TABS:
        raise HTTPException(status_code=404, detail=f"Unknown record: {name}")
    _open_draft(editor, name, None)
    if not editor.update_draft(body):
        editor.cancel_edit()
        return _ok_or_raise(editor, False)
    return _ok_or_raise(editor, editor.submit())


@router.delete("/items/{collection}/{item_id}", status_code=202)
def delete_item(collection: str, item_id: str, response: Response, editor: AdminEditor = Depends(get_editor)):
    if collection not in LIST_TABS:
        raise HTTPException(status_code=404, detail=f"Unknown list collection: {collection}")
    _select(editor, collection)
    try:
        editor.request_delete(item_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"{collection} item not found: {item_id}")
    return _pending(editor, response)


# ------------------------------------------------------------------
# Confirmation dialog
# ------------------------------------------------------------------
@router.post("/confirm")
def confirm(editor: AdminEditor = Depends(get_editor)):
    if editor.confirmation is None:
        raise HTTPException(status_code=409, detail="Nothing to confirm")
    return _ok_or_raise(editor, editor.confirm())


@router.post("/cancel")
def cancel(editor: AdminEditor = Depends(get_editor)):
    editor.cancel_confirmation()
    return editor.state()


# ------------------------------------------------------------------
# Publish / reset
# ------------------------------------------------------------------
@router.post("/publish")
def publish(editor: AdminEditor = Depends(get_editor)):
    return _ok_or_raise(editor, editor.publish())


@router.post("/reset", status_code=202)
def reset(response: Response, editor: AdminEditor = Depends(get_editor)):
    editor.request_reset()
    return _pending(editor, response)


# ------------------------------------------------------------------
# Sub-admins (write-through)
# ------------------------------------------------------------------
@router.post("/sub-admins", status_code=201)
def add_sub_admin(body: SubAdminCreate, editor: AdminEditor = Depends(get_editor)):
    return _ok_or_raise(editor, editor.add_sub_admin(body.name, body.email, body.password))


@router.patch("/sub-admins/{sub_admin_id}")
def update_sub_admin(sub_admin_id: str, body: SubAdminUpdate, editor: AdminEditor = Depends(get_editor)):
    return _ok_or_raise(editor, editor.set_sub_admin_enabled(sub_admin_id, body.enabled))


@router.delete("/sub-admins/{sub_admin_id}", status_code=202)
def remove_sub_admin(sub_admin_id: str, response: Response, editor: AdminEditor = Depends(get_editor)):
    try:
        editor.request_remove_sub_admin(sub_admin_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Sub-admin not found")
    return _pending(editor, response)
