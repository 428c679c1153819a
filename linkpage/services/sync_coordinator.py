"""Editor state plus background persistence.

Every mutation changes the in-memory state first, so the next preview already
shows it, and then hands the minimal change to the persistence gateway in a
background task. A failed call is logged and announced on the event bus; the
local state is left as it is until the next ``load``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Protocol, TypeVar

from linkpage.core.config import SYNC_MODE
from linkpage.core.errors import LinkpageError, NetworkError, OutOfRangeError
from linkpage.persistence.base import PersistenceGateway
from linkpage.schemas.link import Link, LinkDraft
from linkpage.schemas.profile import ProfileUpdate, UserProfile
from linkpage.schemas.theme import Theme
from linkpage.schemas.visual import PageVisual
from linkpage.services.event_bus import SYNC_COMPLETED, SYNC_FAILED, EventBus, event_bus
from linkpage.services.link_collection import LinkCollection
from linkpage.services.presets import Preset
from linkpage.services.presets import apply_preset as apply_preset_to_theme
from linkpage.services.renderer import render_page
from linkpage.services.theme_model import DEFAULT_THEME, normalize, to_persistence_payload

logger = logging.getLogger(__name__)

T = TypeVar("T")

ConfirmDelete = Callable[[Link], bool]

THEME_RESOURCE = "theme"
ORDER_RESOURCE = "order"
PROFILE_RESOURCE = "profile"
LINKS_RESOURCE = "links"


def link_resource(link_id: int) -> str:
    return f"link:{link_id}"


class SyncCoordinator(Protocol):
    @property
    def links(self) -> LinkCollection: ...

    @property
    def theme(self) -> Theme: ...

    @property
    def profile(self) -> Optional[UserProfile]: ...

    async def load(self, username: str) -> Optional[UserProfile]: ...

    def add_link(self, draft: LinkDraft) -> Link: ...

    def edit_link(self, link_id: int, draft: LinkDraft) -> Optional[Link]: ...

    def delete_link(self, link_id: int) -> bool: ...

    def reorder(self, from_index: int, to_index: int) -> bool: ...

    def move_link(self, active_id: int, over_id: int) -> bool: ...

    def update_theme(self, **changes: Any) -> Theme: ...

    def set_theme(self, theme: Theme) -> Theme: ...

    def apply_preset(self, preset: Preset) -> Theme: ...

    def update_profile(self, update: ProfileUpdate) -> UserProfile: ...

    async def drain(self) -> None: ...

    def preview(self) -> PageVisual: ...


class OptimisticSyncCoordinator:
    def __init__(
        self,
        gateway: PersistenceGateway,
        *,
        confirm_delete: ConfirmDelete | None = None,
        bus: EventBus = event_bus,
    ) -> None:
        self._gateway = gateway
        self._confirm_delete = confirm_delete
        self._bus = bus
        self._profile: Optional[UserProfile] = None
        self._links = LinkCollection()
        self._theme: Theme = DEFAULT_THEME
        self._tasks: set[asyncio.Task] = set()

    # --- state ---------------------------------------------------------------

    @property
    def links(self) -> LinkCollection:
        return self._links

    @property
    def theme(self) -> Theme:
        return self._theme

    @property
    def profile(self) -> Optional[UserProfile]:
        return self._profile

    def _require_profile(self) -> UserProfile:
        if self._profile is None:
            raise LinkpageError("No profile loaded; call load() first")
        return self._profile

    def preview(self) -> PageVisual:
        return render_page(self._theme, self._links, profile=self._profile)

    async def load(self, username: str) -> Optional[UserProfile]:
        """Replace local state with the stored profile.

        ``ProfileNotFoundError`` propagates so the caller can send the user to
        onboarding. A ``NetworkError`` keeps whatever state is already loaded.
        """
        try:
            profile = await self._gateway.fetch_user(username)
        except NetworkError as exc:
            logger.warning(
                "profile load failed",
                extra={"operation": "fetch_user", "resource": PROFILE_RESOURCE, "status_code": exc.status_code},
            )
            return None
        self._links = LinkCollection.from_links(profile.links)
        self._theme = normalize(profile.theme)
        self._profile = profile.model_copy(update={"links": [], "theme": None})
        return self._profile

    # --- background calls ----------------------------------------------------

    def _schedule(
        self,
        operation: str,
        resource: str,
        call: Callable[[], Awaitable[T]],
        on_success: Callable[[T], None] | None = None,
    ) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(self._run(operation, resource, call, on_success))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(
        self,
        operation: str,
        resource: str,
        call: Callable[[], Awaitable[T]],
        on_success: Callable[[T], None] | None,
    ) -> None:
        try:
            result = await call()
        except NetworkError as exc:
            logger.warning(
                "sync failed, local state kept",
                extra={"operation": operation, "resource": resource, "status_code": exc.status_code},
            )
            self._bus.emit(SYNC_FAILED, {"operation": operation, "resource": resource, "error": str(exc)})
            return
        if on_success is not None:
            on_success(result)
        logger.debug("sync completed", extra={"operation": operation, "resource": resource})
        self._bus.emit(SYNC_COMPLETED, {"operation": operation, "resource": resource})

    async def drain(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    # --- links ---------------------------------------------------------------

    def add_link(self, draft: LinkDraft) -> Link:
        profile = self._require_profile()
        self._links = self._links.add(
            Link(title=draft.title, url=draft.url, icon=draft.icon, layout=draft.layout)
        )
        pending = self._links[len(self._links) - 1]
        payload = {
            "user_id": profile.id,
            "title": pending.title,
            "url": pending.url,
            "icon": pending.icon,
            "layout": pending.layout,
            "position": pending.position,
        }

        def confirmed(created: Link) -> None:
            self._links = self._links.confirm_pending(created)

        self._schedule("create_link", LINKS_RESOURCE, lambda: self._gateway.create_link(payload), confirmed)
        return pending

    def edit_link(self, link_id: int, draft: LinkDraft) -> Optional[Link]:
        if self._links.get(link_id) is None:
            return None
        changes = {"title": draft.title, "url": draft.url, "icon": draft.icon, "layout": draft.layout}
        self._links = self._links.update(link_id, **changes)

        def confirmed(updated: Link) -> None:
            self._links = self._links.replace(updated)

        self._schedule(
            "update_link",
            link_resource(link_id),
            lambda: self._gateway.update_link(link_id, changes),
            confirmed,
        )
        return self._links.get(link_id)

    def delete_link(self, link_id: int) -> bool:
        """Remove a confirmed link locally and send a single DELETE.

        Survivors are renumbered locally only; the store renumbers its own
        copy on delete, so no reorder call follows.
        """
        link = self._links.get(link_id)
        if link is None:
            return False
        if self._confirm_delete is None or not self._confirm_delete(link):
            logger.info("delete not confirmed", extra={"operation": "delete_link", "resource": link_resource(link_id)})
            return False
        self._links = self._links.remove(link_id)
        self._schedule("delete_link", link_resource(link_id), lambda: self._gateway.delete_link(link_id))
        return True

    def _commit_order(self, reordered: LinkCollection) -> bool:
        if reordered is self._links:
            return False
        self._links = reordered
        items = reordered.positions_payload()
        self._schedule("reorder_links", ORDER_RESOURCE, lambda: self._gateway.reorder_links(items))
        return True

    def reorder(self, from_index: int, to_index: int) -> bool:
        try:
            reordered = self._links.reorder(from_index, to_index)
        except OutOfRangeError as exc:
            logger.warning("reorder ignored: %s", exc)
            return False
        return self._commit_order(reordered)

    def move_link(self, active_id: int, over_id: int) -> bool:
        return self._commit_order(self._links.move(active_id, over_id))

    # --- theme ---------------------------------------------------------------

    def set_theme(self, theme: Theme) -> Theme:
        profile = self._require_profile()
        self._theme = theme
        payload = to_persistence_payload(theme)
        self._schedule("save_theme", THEME_RESOURCE, lambda: self._gateway.save_theme(profile.id, payload))
        return theme

    def update_theme(self, **changes: Any) -> Theme:
        return self.set_theme(self._theme.model_copy(update=changes))

    def apply_preset(self, preset: Preset) -> Theme:
        return self.set_theme(apply_preset_to_theme(self._theme, preset))

    # --- profile -------------------------------------------------------------

    def update_profile(self, update: ProfileUpdate) -> UserProfile:
        profile = self._require_profile()
        payload = update.to_persistence_payload()
        self._profile = profile.model_copy(update=payload)

        def confirmed(stored: UserProfile) -> None:
            if self._profile is not None:
                self._profile = self._profile.model_copy(
                    update={key: getattr(stored, key) for key in ("name", "bio", "profile_image_url")}
                )

        self._schedule(
            "update_user",
            PROFILE_RESOURCE,
            lambda: self._gateway.update_user(profile.username, payload),
            confirmed,
        )
        return self._profile


class SequencedSyncCoordinator(OptimisticSyncCoordinator):
    """Same surface, but at most one call per resource is in flight.

    Later calls for the same resource wait for the earlier ones, so the last
    mutation made is also the last one the store sees.
    """

    def __init__(self, gateway: PersistenceGateway, **kwargs: Any) -> None:
        super().__init__(gateway, **kwargs)
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiting: dict[str, int] = {}

    async def _run(self, operation, resource, call, on_success) -> None:
        lock = self._locks.setdefault(resource, asyncio.Lock())
        self._waiting[resource] = self._waiting.get(resource, 0) + 1
        try:
            async with lock:
                await super()._run(operation, resource, call, on_success)
        finally:
            self._waiting[resource] -= 1
            if not self._waiting[resource]:
                del self._waiting[resource]
                del self._locks[resource]


_COORDINATORS = {
    "optimistic": OptimisticSyncCoordinator,
    "sequenced": SequencedSyncCoordinator,
}


def create_coordinator(gateway: PersistenceGateway, *, mode: str = SYNC_MODE, **kwargs: Any) -> SyncCoordinator:
    coordinator_cls = _COORDINATORS.get(mode, OptimisticSyncCoordinator)
    return coordinator_cls(gateway, **kwargs)
