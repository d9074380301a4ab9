# miledesigns/schemas/delivery.py
from __future__ import annotations
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DeliveryModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SiteView(DeliveryModel):
    """Derived values the public page needs besides the raw content."""
    heading: str
    tags: List[str]
    visible_social_links: List[Dict[str, Any]]
    testimonial_avatars: Dict[str, str]
    rotates_home_background: bool


class SiteOut(DeliveryModel):
    content: Dict[str, Any]
    view: SiteView


class ProjectListOut(DeliveryModel):
    tag: str
    total: int
    items: List[Dict[str, Any]]


class ChatTurn(BaseModel):
    role: Literal["user", "model", "assistant"] = "user"
    content: str = ""


class ConsultantIn(BaseModel):
    prompt: str = Field(..., min_length=1, max_length=4000)
    history: List[ChatTurn] = Field(default_factory=list)


class ConsultantOut(BaseModel):
    reply: str
