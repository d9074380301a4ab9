# miledesigns/schemas/admin.py
# Request bodies of the admin workspace API
from __future__ import annotations
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AdminIn(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ===== Tabs / search =====
class TabIn(AdminIn):
    tab: str
    search_term: Optional[str] = None

class SearchIn(AdminIn):
    search_term: str = ""

# ===== Modal draft =====
class DraftOpen(AdminIn):
    collection: str
    item_id: Optional[str] = None  # None -> add (singletons: always edit)

class DraftChanges(AdminIn):
    changes: Dict[str, Any] = Field(default_factory=dict)

# ===== Sub-admins =====
class SubAdminCreate(AdminIn):
    name: str = ""
    email: str = ""
    password: str = ""

class SubAdminUpdate(AdminIn):
    enabled: bool
