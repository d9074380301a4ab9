# miledesigns/schemas/content.py
# Pydantic: typed shape of every editable collection and of the site aggregate.
# JSON keys are camelCase (the persisted document and the public API use them);
# Python attributes are snake_case.
from __future__ import annotations
from typing import Optional, Literal, Union

from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel

ProjectCategory = Literal["Residential", "Commercial", "Industrial"]
SocialPlatform = Literal[
    "LinkedIn", "Instagram", "Facebook", "YouTube", "TikTok", "X", "Pinterest", "WhatsApp", "Website"
]

CONTACT_DETAILS_ID = "contact-details"
ABOUT_CONTENT_ID = "about-content"
ADMIN_PROFILE_ID = "admin-profile"


class ContentModel(BaseModel):
    # extra="allow": fields written by newer versions survive a load/publish cycle
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )


# ---------- List entities ----------
class Project(ContentModel):
    id: str
    title: str = ""
    category: ProjectCategory = "Residential"
    location: str = ""
    image_url: str = ""
    year: int = 2024
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    gallery: list[str] = Field(default_factory=list)


class Service(ContentModel):
    id: str
    title: str = ""
    description: str = ""
    icon: str = ""
    image_url: str = ""


class Testimonial(ContentModel):
    id: str
    name: str = ""
    project_type: str = ""
    feedback: str = ""
    rating: int = Field(5, ge=1, le=5)
    avatar_url: Optional[str] = None


class SocialLink(ContentModel):
    id: str
    name: str = ""
    platform: SocialPlatform = "Website"
    url: str = ""
    enabled: bool = True


class TeamMember(ContentModel):
    id: str
    name: str = ""
    role: str = ""
    bio: str = ""
    image_url: str = ""


class VlogEntry(ContentModel):
    id: str
    title: str = ""
    topic: str = ""
    duration: str = ""  # display string ("12:40"), not seconds
    thumbnail_url: str = ""
    url: str = ""


# ---------- Singleton records ----------
class ContactDetails(ContentModel):
    id: str = CONTACT_DETAILS_ID
    location: str = ""
    phone_numbers: list[str] = Field(default_factory=list)
    inquiry_email: str = ""
    inquiry_whatsapp_number: str = Field("", alias="inquiryWhatsAppNumber")
    show_floating_whatsapp: bool = Field(True, alias="showFloatingWhatsApp")
    floating_whatsapp_message: str = Field("", alias="floatingWhatsAppMessage")


class AboutStat(ContentModel):
    value: str = ""
    suffix: str = ""
    label: str = ""
    description: str = ""


class AboutContent(ContentModel):
    id: str = ABOUT_CONTENT_ID
    badge: str = ""
    heading_prefix: str = ""
    heading_highlight: str = ""
    heading_suffix: str = ""
    intro_text: str = ""
    body_text: str = ""
    stats: list[AboutStat] = Field(default_factory=list)
    home_background_images: list[str] = Field(default_factory=list)
    certificate_images: list[str] = Field(default_factory=list)
    image_url: str = ""
    vision_text: str = ""
    cta_text: str = ""
    cta_button_text: str = ""


class SubAdmin(ContentModel):
    id: str
    name: str = ""
    email: str
    enabled: bool = True


class AdminProfile(ContentModel):
    id: str = ADMIN_PROFILE_ID
    name: str = ""
    email: str = ""
    avatar_url: str = ""
    sub_admins: list[SubAdmin] = Field(default_factory=list)


# ---------- Aggregate ----------
class SiteContentData(ContentModel):
    projects: list[Project] = Field(default_factory=list)
    services: list[Service] = Field(default_factory=list)
    testimonials: list[Testimonial] = Field(default_factory=list)
    social_links: list[SocialLink] = Field(default_factory=list)
    team_members: list[TeamMember] = Field(default_factory=list)
    vlog_entries: list[VlogEntry] = Field(default_factory=list)
    contact_details: ContactDetails = Field(default_factory=ContactDetails)
    about_content: AboutContent = Field(default_factory=AboutContent)
    admin_profile: AdminProfile = Field(default_factory=AdminProfile)

    def to_payload(self) -> dict:
        """JSON-ready dict with camelCase keys, as persisted."""
        return self.model_dump(by_alias=True, mode="json")


ListItem = Union[Project, Service, Testimonial, SocialLink, TeamMember, VlogEntry]
SingletonRecord = Union[ContactDetails, AboutContent, AdminProfile]
EditableItem = Union[ListItem, SingletonRecord]
