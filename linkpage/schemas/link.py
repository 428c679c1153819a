from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from linkpage.schemas.common import CamelModel


class LinkLayout(str, Enum):
    DEFAULT = "default"
    ICON_ONLY = "icon-only"
    THUMBNAIL = "thumbnail"
    CARD = "card"
    MINIMAL = "minimal"
    FEATURED = "featured"


ICON_OPTIONS: dict[str, str] = {
    "Instagram": "Instagram",
    "Facebook": "Facebook",
    "Twitter": "Twitter / X",
    "Linkedin": "LinkedIn",
    "Youtube": "YouTube",
    "Github": "GitHub",
    "Globe": "Website",
    "Mail": "Email",
    "Phone": "Phone",
    "MessageCircle": "Message",
    "Music": "Music",
    "Camera": "Camera",
    "ShoppingBag": "Shop",
    "Link": "Link",
    "Twitch": "Twitch",
    "Discord": "Discord",
    "Slack": "Slack",
    "Figma": "Figma",
    "Dribbble": "Dribbble",
    "TiktokIcon": "TikTok",
    "Podcast": "Podcast",
    "Video": "Video",
    "MapPin": "Location",
    "Calendar": "Calendar",
    "BookOpen": "Blog",
    "Newspaper": "Newsletter",
    "Heart": "Favorite",
    "Star": "Featured",
}

NO_ICON = "none"


def known_icon(icon: str | None) -> str | None:
    if not icon or icon == NO_ICON:
        return None
    return icon if icon in ICON_OPTIONS else None


class Link(CamelModel):
    id: Optional[int] = None
    title: str
    url: str
    icon: Optional[str] = None
    layout: str = LinkLayout.DEFAULT.value
    position: int = Field(default=0, ge=0)
    clicks: int = Field(default=0, ge=0)
    is_active: bool = True

    @field_validator("layout", mode="before")
    @classmethod
    def default_layout(cls, value):
        # Older records carry no layout at all.
        return value or LinkLayout.DEFAULT.value

    @property
    def is_persisted(self) -> bool:
        return self.id is not None


class LinkDraft(CamelModel):
    """Add/edit form payload. Required fields are enforced here, at the input boundary."""

    title: str = Field(min_length=1, max_length=255)
    url: str = Field(min_length=1, max_length=2048)
    icon: Optional[str] = None
    layout: str = LinkLayout.DEFAULT.value

    @field_validator("title", "url", mode="before")
    @classmethod
    def strip_text(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("icon", mode="before")
    @classmethod
    def none_icon(cls, value):
        if value in (None, "", NO_ICON):
            return None
        return value

    @field_validator("layout", mode="before")
    @classmethod
    def default_layout(cls, value):
        return value or LinkLayout.DEFAULT.value


class LinkPosition(CamelModel):
    id: int
    position: int = Field(ge=0)


class ReorderPayload(CamelModel):
    links: list[LinkPosition]
