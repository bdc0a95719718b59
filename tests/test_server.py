"""Tool-level tests driving the FastMCP server in memory."""

from __future__ import annotations

import json

from fastmcp import Client

from graph_memory import __version__
from graph_memory.store import GraphStore


def _text(result) -> str:
    return result.content[0].text


async def test_tools_are_registered(server) -> None:
    async with Client(server) as client:
        tools = {tool.name for tool in await client.list_tools()}
    assert tools == {
        "create_entity",
        "create_relationship",
        "query_entities",
        "query_relationships",
        "delete_entity",
    }


async def test_example_session(server, store: GraphStore) -> None:
    async with Client(server) as client:
        created = await client.call_tool(
            "create_entity", {"name": "Alice", "entityType": "Person", "observations": ["likes tea"]}
        )
        alice = await store.find_entity_by_name("Alice")
        assert _text(created) == f"Created entity Alice with ID {alice.id}"

        await client.call_tool("create_entity", {"name": "Bob", "entityType": "Person", "observations": []})

        linked = await client.call_tool(
            "create_relationship",
            {"fromEntityName": "Alice", "toEntityName": "Bob", "relationType": "knows"},
        )
        assert _text(linked) == "Created relationship knows from Alice to Bob"

        people = json.loads(_text(await client.call_tool("query_entities", {"entityType": "Person"})))
        assert [p["name"] for p in people] == ["Alice", "Bob"]
        assert people[0] == {
            "id": alice.id,
            "name": "Alice",
            "type": "Person",
            "observations": ["likes tea"],
        }

        knows = json.loads(_text(await client.call_tool("query_relationships", {"relationType": "knows"})))
        assert len(knows) == 1
        assert knows[0]["fromEntity"] == "Alice"
        assert knows[0]["toEntity"] == "Bob"
        assert knows[0]["fromId"] == alice.id
        assert knows[0]["type"] == "knows"

        deleted = await client.call_tool("delete_entity", {"name": "Alice"})
        assert _text(deleted) == "Deleted entity Alice and its relationships"

        knows = json.loads(_text(await client.call_tool("query_relationships", {"relationType": "knows"})))
        assert knows == []

        again = await client.call_tool(
            "create_relationship",
            {"fromEntityName": "Alice", "toEntityName": "Bob", "relationType": "knows"},
            raise_on_error=False,
        )
        assert again.is_error
        assert "One or both entities not found" in _text(again)


async def test_observations_default_to_empty(server, store: GraphStore) -> None:
    async with Client(server) as client:
        await client.call_tool("create_entity", {"name": "Acme", "entityType": "Organization"})
    acme = await store.find_entity_by_name("Acme")
    assert acme.observations == []


async def test_delete_unknown_entity_reports_error(server, store: GraphStore) -> None:
    async with Client(server) as client:
        result = await client.call_tool("delete_entity", {"name": "Ghost"}, raise_on_error=False)
        assert result.is_error
        assert "Entity not found" in _text(result)

        # The server keeps serving after a reported error
        ok = await client.call_tool("create_entity", {"name": "Ghost", "entityType": "Spirit"})
        assert not ok.is_error
    assert len((await store.read_graph()).entities) == 1


async def test_missing_argument_is_rejected_without_mutation(server, store: GraphStore) -> None:
    async with Client(server) as client:
        result = await client.call_tool("create_entity", {"entityType": "Person"}, raise_on_error=False)
        nulled = await client.call_tool(
            "create_entity", {"name": None, "entityType": "Person"}, raise_on_error=False
        )
    assert result.is_error
    assert "Missing required field: name" in _text(result)
    assert nulled.is_error
    assert "Missing required field: name" in _text(nulled)
    assert (await store.read_graph()).entities == []


async def test_missing_argument_on_each_tool(server, store: GraphStore) -> None:
    await store.create_entity("Alice", "Person")
    before = await store.read_graph()

    async with Client(server) as client:
        for tool, arguments, field in [
            ("create_relationship", {"fromEntityName": "Alice", "toEntityName": "Alice"}, "relationType"),
            ("query_entities", {}, "entityType"),
            ("query_relationships", {}, "relationType"),
            ("delete_entity", {}, "name"),
        ]:
            result = await client.call_tool(tool, arguments, raise_on_error=False)
            assert result.is_error
            assert f"Missing required field: {field}" in _text(result)

    assert await store.read_graph() == before


def test_server_reports_version(server) -> None:
    assert server.name == "graph-memory"
    assert server._mcp_server.version == __version__


async def test_empty_query_returns_empty_list(server) -> None:
    async with Client(server) as client:
        result = await client.call_tool("query_entities", {"entityType": "Nothing"})
    assert not result.is_error
    assert json.loads(_text(result)) == []


async def test_dangling_endpoint_name_is_omitted(server, store: GraphStore) -> None:
    alice = await store.create_entity("Alice", "Person")
    await store.create_entity("Bob", "Person")
    await store.create_relationship("Alice", "Bob", "knows")
    del store._entities[alice.id]

    async with Client(server) as client:
        result = await client.call_tool("query_relationships", {"relationType": "knows"})
    view = json.loads(_text(result))[0]
    assert "fromEntity" not in view
    assert view["toEntity"] == "Bob"


async def test_servers_do_not_share_state() -> None:
    from graph_memory.server import create_server

    first_store, second_store = GraphStore(), GraphStore()
    async with Client(create_server(first_store)) as client:
        await client.call_tool("create_entity", {"name": "Alice", "entityType": "Person"})
    async with Client(create_server(second_store)) as client:
        result = await client.call_tool("query_entities", {"entityType": "Person"})
    assert json.loads(_text(result)) == []
    assert len(await first_store.query_entities("Person")) == 1
