from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Optional

from linkpage.core.errors import OutOfRangeError, ValidationError
from linkpage.schemas.link import Link

logger = logging.getLogger(__name__)

_FROZEN_FIELDS = {"id", "position"}


def _renumber(links: Iterable[Link]) -> tuple[Link, ...]:
    return tuple(
        link if link.position == index else link.model_copy(update={"position": index})
        for index, link in enumerate(links)
    )


class LinkCollection:
    """Ordered, immutable list of links.

    Positions are always ``0..n-1`` in sequence order. Every operation returns
    a new collection (or ``self`` when nothing changes), so a collection handed
    to the renderer never shifts underneath it.
    """

    __slots__ = ("_links",)

    def __init__(self, links: Iterable[Link] = ()) -> None:
        self._links = _renumber(links)

    @classmethod
    def from_links(cls, links: Iterable[Link]) -> "LinkCollection":
        ordered = sorted(links, key=lambda link: (link.position, link.id if link.id is not None else -1))
        return cls(ordered)

    @property
    def links(self) -> tuple[Link, ...]:
        return self._links

    def __len__(self) -> int:
        return len(self._links)

    def __iter__(self) -> Iterator[Link]:
        return iter(self._links)

    def __getitem__(self, index: int) -> Link:
        return self._links[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LinkCollection):
            return NotImplemented
        return self._links == other._links

    def __repr__(self) -> str:
        return f"LinkCollection({[link.id for link in self._links]!r})"

    def index_of(self, link_id: Optional[int]) -> Optional[int]:
        if link_id is None:
            return None
        for index, link in enumerate(self._links):
            if link.id == link_id:
                return index
        return None

    def get(self, link_id: Optional[int]) -> Optional[Link]:
        index = self.index_of(link_id)
        return None if index is None else self._links[index]

    def add(self, link: Link) -> "LinkCollection":
        errors = []
        if not link.title.strip():
            errors.append("title is required")
        if not link.url.strip():
            errors.append("url is required")
        if errors:
            raise ValidationError(errors)
        appended = link.model_copy(update={"position": len(self._links)})
        return LinkCollection(self._links + (appended,))

    def remove(self, link_id: Optional[int]) -> "LinkCollection":
        index = self.index_of(link_id)
        if index is None:
            return self
        return LinkCollection(self._links[:index] + self._links[index + 1 :])

    def reorder(self, from_index: int, to_index: int) -> "LinkCollection":
        size = len(self._links)
        for index in (from_index, to_index):
            if not 0 <= index < size:
                raise OutOfRangeError(index, size)
        if from_index == to_index:
            return self
        items = list(self._links)
        moved = items.pop(from_index)
        items.insert(to_index, moved)
        return LinkCollection(items)

    def move(self, active_id: Optional[int], over_id: Optional[int]) -> "LinkCollection":
        """Drag-end: move ``active_id`` into the slot currently held by ``over_id``."""
        from_index = self.index_of(active_id)
        to_index = self.index_of(over_id)
        if from_index is None or to_index is None:
            logger.debug("Ignoring move of %s over %s: not in collection", active_id, over_id)
            return self
        return self.reorder(from_index, to_index)

    def replace(self, link: Link) -> "LinkCollection":
        index = self.index_of(link.id)
        if index is None:
            return self
        items = list(self._links)
        items[index] = link
        return LinkCollection(items)

    def confirm_pending(self, link: Link) -> "LinkCollection":
        """Swap the first unconfirmed link with the same title and url for ``link``."""
        for index, candidate in enumerate(self._links):
            if not candidate.is_persisted and candidate.title == link.title and candidate.url == link.url:
                items = list(self._links)
                items[index] = link
                return LinkCollection(items)
        return self

    def update(self, link_id: Optional[int], **changes: Any) -> "LinkCollection":
        index = self.index_of(link_id)
        if index is None:
            return self
        blocked = _FROZEN_FIELDS & set(changes)
        if blocked:
            raise ValidationError([f"{name} cannot be changed with update()" for name in sorted(blocked)])
        items = list(self._links)
        items[index] = items[index].model_copy(update=changes)
        return LinkCollection(items)

    def positions_payload(self) -> list[dict[str, int]]:
        return [{"id": link.id, "position": link.position} for link in self._links if link.is_persisted]
