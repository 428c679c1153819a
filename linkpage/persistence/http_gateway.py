from __future__ import annotations

import logging
import time
from typing import Any, Callable, Mapping, TypeVar

import httpx
from pydantic import ValidationError as PydanticValidationError

from linkpage.core.config import PERSISTENCE_BASE_URL, PERSISTENCE_TIMEOUT_SECONDS
from linkpage.core.errors import NetworkError, ProfileNotFoundError
from linkpage.persistence.base import PersistenceGateway
from linkpage.schemas.link import Link, ReorderPayload
from linkpage.schemas.profile import UserProfile
from linkpage.schemas.theme import Theme
from linkpage.services.theme_model import normalize

logger = logging.getLogger(__name__)

T = TypeVar("T")


def profile_from_payload(data: Mapping[str, Any]) -> UserProfile:
    """Build a profile from a ``GET /users/{username}`` body.

    The stored theme may be partial or missing, so it goes through
    ``normalize`` instead of straight model validation.
    """
    payload = dict(data)
    raw_theme = payload.pop("theme", None)
    links = payload.pop("links", None) or []
    profile = UserProfile.model_validate(payload)
    return profile.model_copy(
        update={
            "links": [Link.model_validate(item) for item in links],
            "theme": normalize(raw_theme),
        }
    )


class HttpPersistenceGateway(PersistenceGateway):
    def __init__(
        self,
        base_url: str = PERSISTENCE_BASE_URL,
        *,
        timeout: float = PERSISTENCE_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._owns_client = client is None

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, operation: str, method: str, path: str, **kwargs: Any) -> httpx.Response:
        started = time.perf_counter()
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning(
                "persistence request failed",
                extra={
                    "operation": operation,
                    "method": method,
                    "endpoint": path,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
            raise NetworkError(f"{method} {path} failed: {exc}", operation=operation) from exc

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.debug(
            "persistence request completed",
            extra={
                "operation": operation,
                "method": method,
                "endpoint": path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response

    @staticmethod
    def _ensure_success(response: httpx.Response, operation: str) -> None:
        if 200 <= response.status_code < 300:
            return
        raise NetworkError(
            f"{operation} answered {response.status_code}: {response.text[:200]}",
            status_code=response.status_code,
            operation=operation,
        )

    @staticmethod
    def _decode(response: httpx.Response, operation: str, parse: Callable[[Any], T]) -> T:
        """Parse a 2xx body; an unreadable or mismatched body counts as a failed call."""
        try:
            return parse(response.json())
        except (ValueError, TypeError, PydanticValidationError) as exc:
            logger.warning(
                "persistence response unreadable",
                extra={"operation": operation, "status_code": response.status_code},
            )
            raise NetworkError(
                f"{operation} answered {response.status_code} with an unreadable body: {exc}",
                status_code=response.status_code,
                operation=operation,
            ) from exc

    async def fetch_user(self, username: str) -> UserProfile:
        response = await self._request("fetch_user", "GET", f"/users/{username}")
        if response.status_code == 404:
            raise ProfileNotFoundError(username)
        self._ensure_success(response, "fetch_user")
        return self._decode(response, "fetch_user", profile_from_payload)

    async def update_user(self, username: str, payload: dict[str, Any]) -> UserProfile:
        response = await self._request("update_user", "PUT", f"/users/{username}", json=payload)
        self._ensure_success(response, "update_user")
        return self._decode(response, "update_user", UserProfile.model_validate)

    async def create_link(self, payload: dict[str, Any]) -> Link:
        response = await self._request("create_link", "POST", "/links", json=payload)
        self._ensure_success(response, "create_link")
        return self._decode(response, "create_link", Link.model_validate)

    async def update_link(self, link_id: int, payload: dict[str, Any]) -> Link:
        response = await self._request("update_link", "PUT", f"/links/{link_id}", json=payload)
        self._ensure_success(response, "update_link")
        return self._decode(response, "update_link", Link.model_validate)

    async def delete_link(self, link_id: int) -> None:
        response = await self._request("delete_link", "DELETE", f"/links/{link_id}")
        self._ensure_success(response, "delete_link")

    async def reorder_links(self, items: list[dict[str, int]]) -> None:
        body = ReorderPayload.model_validate({"links": items}).model_dump()
        response = await self._request("reorder_links", "POST", "/links/reorder", json=body)
        self._ensure_success(response, "reorder_links")

    async def save_theme(self, user_id: int, payload: dict[str, Any]) -> Theme:
        response = await self._request("save_theme", "PUT", f"/themes/{user_id}", json=payload)
        self._ensure_success(response, "save_theme")
        if not response.content:
            return normalize(payload)
        body = self._decode(response, "save_theme", lambda data: data)
        return normalize(body if isinstance(body, dict) else payload)
