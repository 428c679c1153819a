from __future__ import annotations

from typing import Optional

from pydantic import Field

from linkpage.schemas.common import CamelModel
from linkpage.schemas.link import Link
from linkpage.schemas.theme import Theme


class PageProfile(CamelModel):
    """Identity shown in the page header."""

    username: str
    name: Optional[str] = None
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None


class UserProfile(PageProfile):
    id: int
    links: list[Link] = Field(default_factory=list)
    theme: Optional[Theme] = None


class ProfileUpdate(CamelModel):
    name: str = ""
    bio: str = ""
    profile_image_url: str = ""

    def to_persistence_payload(self) -> dict[str, str]:
        return {
            "name": self.name,
            "bio": self.bio,
            "profile_image_url": self.profile_image_url,
        }
