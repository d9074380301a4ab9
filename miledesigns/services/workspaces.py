# miledesigns/services/workspaces.py
# One AdminEditor per signed-in operator, kept in process memory.
from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from sqlalchemy.orm import sessionmaker

from miledesigns.models.auth import User
from miledesigns.services.content_store import ContentStore, StoreError, StoreUnavailable
from miledesigns.services.editor import AdminEditor
from miledesigns.services.identity import IdentityClient

log = logging.getLogger(__name__)


class WorkspaceRegistry:
    def __init__(
        self,
        store: ContentStore,
        session_factory: sessionmaker,
        *,
        on_data_update: Optional[Callable[[], None]] = None,
    ):
        self.store = store
        self.session_factory = session_factory
        self.on_data_update = on_data_update
        self._editors: dict[int, AdminEditor] = {}
        self._lock = threading.Lock()

    def open(self, user: User, token: str) -> AdminEditor:
        """Editor for `user`, created and loaded on first use; its identity session follows `token`."""
        with self._lock:
            editor = self._editors.get(user.id)
            if editor is None:
                identity = IdentityClient(self.session_factory, token)
                editor = AdminEditor(self.store, identity, on_data_update=self.on_data_update)
                self._editors[user.id] = editor
                log.info("workspace opened for %s", user.email)
        editor.identity.restore_session(token)
        if not editor.loaded and not editor.load():
            failure = editor.notification
            message = failure.message if failure else "Site content could not be loaded"
            if failure is not None and failure.code == "unavailable":
                raise StoreUnavailable(message)
            raise StoreError(message)
        return editor

    def close(self, user_id: int) -> None:
        with self._lock:
            self._editors.pop(user_id, None)

    def clear(self) -> None:
        with self._lock:
            self._editors.clear()
