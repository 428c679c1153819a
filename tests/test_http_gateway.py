import asyncio
import json

import httpx
import pytest

from linkpage.core.errors import NetworkError, ProfileNotFoundError
from linkpage.persistence.http_gateway import HttpPersistenceGateway

USER_PAYLOAD = {
    "id": 1,
    "username": "alice",
    "name": "Alice",
    "bio": None,
    "profileImageUrl": None,
    "links": [
        {"id": 2, "title": "B", "url": "https://b.example", "icon": None, "layout": None, "position": 1, "clicks": 3, "isActive": True},
        {"id": 1, "title": "A", "url": "https://a.example", "icon": "Globe", "layout": "card", "position": 0, "clicks": 0, "isActive": False},
    ],
    "theme": {"backgroundColor": "#000000", "wallpaperStyle": "fill", "buttonCornerRadius": None},
}


def _gateway(handler) -> HttpPersistenceGateway:
    client = httpx.AsyncClient(base_url="https://persistence.test", transport=httpx.MockTransport(handler))
    return HttpPersistenceGateway(client=client)


def test_fetch_user_parses_client_shape_and_normalizes_theme():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path))
        return httpx.Response(200, json=USER_PAYLOAD)

    profile = asyncio.run(_gateway(handler).fetch_user("alice"))

    assert seen == [("GET", "/users/alice")]
    assert profile.id == 1
    assert profile.links[0].layout == "default"
    assert profile.links[0].clicks == 3
    assert profile.links[1].is_active is False
    assert profile.theme.background_color == "#000000"
    assert profile.theme.wallpaper_style == "solid"
    assert profile.theme.button_color == "#000000"
    assert profile.theme.title_font == "Link Sans"


def test_fetch_user_404_is_profile_not_found():
    gateway = _gateway(lambda request: httpx.Response(404, json={"detail": "not found"}))

    with pytest.raises(ProfileNotFoundError):
        asyncio.run(gateway.fetch_user("ghost"))


def test_non_2xx_is_network_error_with_status():
    gateway = _gateway(lambda request: httpx.Response(500, text="boom"))

    with pytest.raises(NetworkError) as exc_info:
        asyncio.run(gateway.delete_link(3))

    assert exc_info.value.status_code == 500
    assert exc_info.value.operation == "delete_link"


def test_transport_error_is_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError) as exc_info:
        asyncio.run(_gateway(handler).fetch_user("alice"))

    assert exc_info.value.status_code is None


def test_link_endpoints_and_payloads():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        requests.append((request.method, request.url.path, body))
        if request.url.path == "/links" and request.method == "POST":
            return httpx.Response(201, json={**body, "id": 9, "clicks": 0, "isActive": True})
        if request.method == "PUT":
            return httpx.Response(200, json={"id": 9, "position": 0, **body})
        return httpx.Response(204)

    gateway = _gateway(handler)

    async def scenario():
        created = await gateway.create_link(
            {"user_id": 1, "title": "A", "url": "https://a.example", "icon": None, "layout": "default", "position": 0}
        )
        updated = await gateway.update_link(9, {"title": "A2", "url": "https://a.example", "icon": "Star", "layout": "card"})
        await gateway.reorder_links([{"id": 9, "position": 0}])
        await gateway.delete_link(9)
        return created, updated

    created, updated = asyncio.run(scenario())

    assert created.id == 9
    assert updated.title == "A2"
    assert updated.layout == "card"
    assert [(method, path) for method, path, _ in requests] == [
        ("POST", "/links"),
        ("PUT", "/links/9"),
        ("POST", "/links/reorder"),
        ("DELETE", "/links/9"),
    ]
    assert requests[2][2] == {"links": [{"id": 9, "position": 0}]}


def test_save_theme_sends_snake_case_payload():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append((request.url.path, json.loads(request.content)))
        return httpx.Response(200)

    payload = {"background_color": "#101010", "button_style": "pill"}
    theme = asyncio.run(_gateway(handler).save_theme(1, payload))

    assert requests == [("/themes/1", payload)]
    assert theme.background_color == "#101010"
    assert theme.button_style == "pill"


def test_update_user_sends_profile_fields():
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        return httpx.Response(200, json={"id": 1, "username": "alice", **body})

    profile = asyncio.run(
        _gateway(handler).update_user("alice", {"name": "A", "bio": "b", "profile_image_url": ""})
    )

    assert profile.name == "A"
    assert profile.bio == "b"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(201, text="created"),
        httpx.Response(201, json=["not", "a", "link"]),
        httpx.Response(201, json={"id": 9, "title": "A"}),
    ],
)
def test_unreadable_success_body_is_network_error(response):
    gateway = _gateway(lambda request: response)

    with pytest.raises(NetworkError) as exc_info:
        asyncio.run(gateway.create_link({"user_id": 1, "title": "A", "url": "https://a.example", "position": 0}))

    assert exc_info.value.status_code == 201
    assert exc_info.value.operation == "create_link"


def test_fetch_user_with_malformed_profile_is_network_error():
    gateway = _gateway(lambda request: httpx.Response(200, json={"username": "alice"}))

    with pytest.raises(NetworkError):
        asyncio.run(gateway.fetch_user("alice"))
