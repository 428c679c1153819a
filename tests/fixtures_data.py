"""Reusable data for the backend test scenarios."""

from linkpage.schemas.link import Link
from linkpage.schemas.profile import UserProfile
from linkpage.services.theme_model import normalize

ALICE_USER = {
    "id": 1,
    "username": "alice",
    "name": "Alice",
    "bio": "Designer and runner",
    "profile_image_url": "https://cdn.example.com/alice.png",
}

ALICE_THEME = {
    "backgroundColor": "#1a1a1a",
    "wallpaperStyle": "gradient",
    "wallpaperGradientStart": "#112233",
    "buttonColor": "#ffffff",
    "buttonTextColor": "#000000",
    "buttonStyleType": "glass",
    "buttonShadow": "subtle",
    "titleColor": "#ffffff",
    "profileImageLayout": "hero",
}

ALICE_LINKS = [
    {"id": 1, "title": "Portfolio", "url": "https://alice.example", "icon": "Globe", "layout": "default", "position": 0},
    {"id": 2, "title": "Shop", "url": "https://shop.example", "icon": None, "layout": "icon-only", "position": 1},
    {"id": 3, "title": "Blog", "url": "https://blog.example/posts", "icon": "BookOpen", "layout": "card", "position": 2},
    {"id": 4, "title": "Old", "url": "https://old.example", "layout": "minimal", "position": 3, "is_active": False},
]


def make_links(count: int) -> list[Link]:
    return [
        Link(id=index + 1, title=f"Link {index}", url=f"https://example.com/{index}", position=index)
        for index in range(count)
    ]


def alice_profile(*, links=None, theme=None) -> UserProfile:
    return UserProfile(
        **ALICE_USER,
        links=[Link.model_validate(item) for item in (ALICE_LINKS if links is None else links)],
        theme=normalize(ALICE_THEME if theme is None else theme),
    )
