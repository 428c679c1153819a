from __future__ import annotations

import itertools
import logging
from typing import Any, Iterable

from linkpage.core.errors import NetworkError, ProfileNotFoundError
from linkpage.persistence.base import PersistenceGateway
from linkpage.schemas.link import Link
from linkpage.schemas.profile import UserProfile
from linkpage.schemas.theme import Theme
from linkpage.services.theme_model import normalize

logger = logging.getLogger(__name__)


class InMemoryPersistenceGateway(PersistenceGateway):
    """Process-local stand-in for the persistence service (dev server and tests).

    ``fail_operations`` makes the named operations raise ``NetworkError``,
    which is how tests exercise the silent-failure path.
    """

    def __init__(self, profiles: Iterable[UserProfile] = (), *, fail_operations: Iterable[str] = ()) -> None:
        self._users: dict[str, dict[str, Any]] = {}
        self._links: dict[int, tuple[int, Link]] = {}
        self._themes: dict[int, Theme] = {}
        self._link_ids = itertools.count(1)
        self.fail_operations = set(fail_operations)
        self.calls: list[tuple[str, Any]] = []
        for profile in profiles:
            self.add_profile(profile)

    def add_profile(self, profile: UserProfile) -> None:
        self._users[profile.username] = profile.model_dump(include={"id", "username", "name", "bio", "profile_image_url"})
        self._themes[profile.id] = normalize(profile.theme)
        for link in profile.links:
            link_id = link.id if link.id is not None else next(self._link_ids)
            self._links[link_id] = (profile.id, link.model_copy(update={"id": link_id}))
        if self._links:
            self._link_ids = itertools.count(max(self._links) + 1)

    def _record(self, operation: str, payload: Any = None) -> None:
        self.calls.append((operation, payload))
        if operation in self.fail_operations:
            logger.debug("Simulated failure for %s", operation)
            raise NetworkError(f"{operation} failed (simulated)", operation=operation)

    def _user_links(self, user_id: int) -> list[Link]:
        links = [link for owner, link in self._links.values() if owner == user_id]
        return sorted(links, key=lambda link: (link.position, link.id))

    def _renumber(self, user_id: int) -> None:
        for index, link in enumerate(self._user_links(user_id)):
            self._links[link.id] = (user_id, link.model_copy(update={"position": index}))

    async def aclose(self) -> None:
        return None

    async def fetch_user(self, username: str) -> UserProfile:
        self._record("fetch_user", username)
        user = self._users.get(username)
        if user is None:
            raise ProfileNotFoundError(username)
        return UserProfile(
            **user,
            links=self._user_links(user["id"]),
            theme=self._themes.get(user["id"], normalize(None)),
        )

    async def update_user(self, username: str, payload: dict[str, Any]) -> UserProfile:
        self._record("update_user", payload)
        user = self._users.get(username)
        if user is None:
            raise NetworkError(f"update_user answered 404 for {username}", status_code=404, operation="update_user")
        for key in ("name", "bio", "profile_image_url"):
            if key in payload:
                user[key] = payload[key]
        return UserProfile(**user)

    async def create_link(self, payload: dict[str, Any]) -> Link:
        self._record("create_link", payload)
        data = dict(payload)
        user_id = data.pop("user_id")
        link = Link.model_validate({**data, "id": next(self._link_ids)})
        self._links[link.id] = (user_id, link)
        return link

    async def update_link(self, link_id: int, payload: dict[str, Any]) -> Link:
        self._record("update_link", payload)
        stored = self._links.get(link_id)
        if stored is None:
            raise NetworkError(f"update_link answered 404 for {link_id}", status_code=404, operation="update_link")
        owner, link = stored
        updated = link.model_copy(update={key: value for key, value in payload.items() if key in {"title", "url", "icon", "layout"}})
        self._links[link_id] = (owner, updated)
        return updated

    async def delete_link(self, link_id: int) -> None:
        self._record("delete_link", link_id)
        stored = self._links.pop(link_id, None)
        if stored is not None:
            self._renumber(stored[0])

    async def reorder_links(self, items: list[dict[str, int]]) -> None:
        self._record("reorder_links", items)
        for item in items:
            stored = self._links.get(item["id"])
            if stored is None:
                continue
            owner, link = stored
            self._links[link.id] = (owner, link.model_copy(update={"position": item["position"]}))

    async def save_theme(self, user_id: int, payload: dict[str, Any]) -> Theme:
        self._record("save_theme", payload)
        theme = normalize(payload)
        self._themes[user_id] = theme
        return theme
