from __future__ import annotations

from typing import Any, Protocol

from linkpage.schemas.link import Link
from linkpage.schemas.profile import UserProfile
from linkpage.schemas.theme import Theme


class PersistenceGateway(Protocol):
    """Users / links / themes store the editor talks to.

    Implementations raise ``NetworkError`` for anything that did not complete
    and ``ProfileNotFoundError`` when ``fetch_user`` finds no such user.
    """

    async def fetch_user(self, username: str) -> UserProfile:
        ...

    async def update_user(self, username: str, payload: dict[str, Any]) -> UserProfile:
        ...

    async def create_link(self, payload: dict[str, Any]) -> Link:
        ...

    async def update_link(self, link_id: int, payload: dict[str, Any]) -> Link:
        ...

    async def delete_link(self, link_id: int) -> None:
        ...

    async def reorder_links(self, items: list[dict[str, int]]) -> None:
        ...

    async def save_theme(self, user_id: int, payload: dict[str, Any]) -> Theme:
        ...

    async def aclose(self) -> None:
        ...
