import asyncio

import pytest

from linkpage.core.errors import NetworkError, ProfileNotFoundError
from linkpage.persistence.memory_gateway import InMemoryPersistenceGateway
from tests.fixtures_data import alice_profile


def test_delete_renumbers_remaining_links():
    gateway = InMemoryPersistenceGateway([alice_profile()])

    async def scenario():
        await gateway.delete_link(2)
        return await gateway.fetch_user("alice")

    stored = asyncio.run(scenario())

    assert [link.id for link in stored.links] == [1, 3, 4]
    assert [link.position for link in stored.links] == [0, 1, 2]


def test_create_assigns_next_id_and_reorder_applies_positions():
    gateway = InMemoryPersistenceGateway([alice_profile(links=[])])

    async def scenario():
        first = await gateway.create_link({"user_id": 1, "title": "A", "url": "https://a.example", "position": 0})
        second = await gateway.create_link({"user_id": 1, "title": "B", "url": "https://b.example", "position": 1})
        await gateway.reorder_links([{"id": second.id, "position": 0}, {"id": first.id, "position": 1}])
        return first, second, await gateway.fetch_user("alice")

    first, second, stored = asyncio.run(scenario())

    assert second.id == first.id + 1
    assert [link.title for link in stored.links] == ["B", "A"]


def test_unknown_user_and_simulated_failures():
    gateway = InMemoryPersistenceGateway([alice_profile()], fail_operations={"save_theme"})

    with pytest.raises(ProfileNotFoundError):
        asyncio.run(gateway.fetch_user("ghost"))
    with pytest.raises(NetworkError):
        asyncio.run(gateway.save_theme(1, {"background_color": "#000000"}))
    assert gateway.calls[-1] == ("save_theme", {"background_color": "#000000"})
