"""
FastMCP server exposing the in-memory graph store.

This module implements the Model Context Protocol server that marshals tool
calls into graph store operations and renders their results as text.
"""

import argparse
import asyncio
import json
import os
import sys
import logging

from typing import List, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from . import __version__
from .errors import GraphMemoryError, validate_fields
from .store import GraphStore

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("graph-memory")

# .env path can be specified with environment variable
GRAPH_MEMORY_ENV_PATH = os.getenv("GRAPH_MEMORY_ENV_PATH", ".env")

# .env file support, loaded before any setting below is read
if not load_dotenv(GRAPH_MEMORY_ENV_PATH):
    logger.debug(f"No .env file found at {GRAPH_MEMORY_ENV_PATH}")

GRAPH_MEMORY_DEBUG = bool(os.getenv("GRAPH_MEMORY_DEBUG", "false").lower() == "true")
if GRAPH_MEMORY_DEBUG:
    logger.setLevel(logging.DEBUG)


SERVER_NAME = "graph-memory"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="In-memory graph MCP server"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (same as GRAPH_MEMORY_DEBUG=true)",
    )
    return parser.parse_args(argv)


def _fail(action: str, error: GraphMemoryError, **params) -> ToolError:
    logger.warning(f"[{action} Error] {error} {params}")
    return ToolError(str(error))


def create_server(store: Optional[GraphStore] = None) -> FastMCP:
    """
    Build a FastMCP server whose tools operate on the given store.

    Required tool arguments are declared optional in the tool signatures so
    that an absent or null field reaches ``validate_fields`` and is reported
    as "Missing required field: <field>" before the store is touched.

    Args:
        store: Graph store to serve; a fresh empty store when omitted

    Returns:
        The configured FastMCP server
    """
    store = store if store is not None else GraphStore()
    server = FastMCP(SERVER_NAME, version=__version__)

    @server.tool
    async def create_entity(
        name: Optional[str] = None,
        entityType: Optional[str] = None,
        observations: Optional[List[str]] = None,
    ) -> str:
        """Create a new entity in the graph.

        Args:
            name: Name of the entity (required)
            entityType: Type of the entity (required)
            observations: Initial observations about the entity
        """
        params = {"name": name, "entityType": entityType}
        try:
            validate_fields(params, ["name", "entityType"])
            entity = await store.create_entity(name, entityType, observations or [])
        except GraphMemoryError as e:
            raise _fail("create_entity", e, **params)
        return f"Created entity {entity.name} with ID {entity.id}"

    @server.tool
    async def create_relationship(
        fromEntityName: Optional[str] = None,
        toEntityName: Optional[str] = None,
        relationType: Optional[str] = None,
    ) -> str:
        """Create a relationship between two entities.

        Args:
            fromEntityName: Name of the source entity (required)
            toEntityName: Name of the target entity (required)
            relationType: Type of the relationship (required)
        """
        params = {"fromEntityName": fromEntityName, "toEntityName": toEntityName, "relationType": relationType}
        try:
            validate_fields(params, ["fromEntityName", "toEntityName", "relationType"])
            relationship = await store.create_relationship(fromEntityName, toEntityName, relationType)
        except GraphMemoryError as e:
            raise _fail("create_relationship", e, **params)
        return f"Created relationship {relationship.relation_type} from {fromEntityName} to {toEntityName}"

    @server.tool
    async def query_entities(entityType: Optional[str] = None) -> str:
        """Query entities by type.

        Args:
            entityType: Type of entities to query (required)
        """
        try:
            validate_fields({"entityType": entityType}, ["entityType"])
        except GraphMemoryError as e:
            raise _fail("query_entities", e, entityType=entityType)
        entities = await store.query_entities(entityType)
        logger.debug(f"[query_entities] {entityType}: {len(entities)} match(es)")
        return json.dumps([e.model_dump(by_alias=True) for e in entities], indent=2)

    @server.tool
    async def query_relationships(relationType: Optional[str] = None) -> str:
        """Query relationships by type.

        Args:
            relationType: Type of relationships to query (required)
        """
        try:
            validate_fields({"relationType": relationType}, ["relationType"])
        except GraphMemoryError as e:
            raise _fail("query_relationships", e, relationType=relationType)
        relationships = await store.query_relationships(relationType)
        logger.debug(f"[query_relationships] {relationType}: {len(relationships)} match(es)")
        # Unresolved endpoint names are left out, not rendered as null
        return json.dumps(
            [r.model_dump(by_alias=True, exclude_none=True) for r in relationships], indent=2
        )

    @server.tool
    async def delete_entity(name: Optional[str] = None) -> str:
        """Delete an entity and its relationships.

        Args:
            name: Name of the entity to delete (required)
        """
        try:
            validate_fields({"name": name}, ["name"])
            await store.delete_entity(name)
        except GraphMemoryError as e:
            raise _fail("delete_entity", e, name=name)
        return f"Deleted entity {name} and its relationships"

    return server


# Default server for the running process
mcp = create_server()


async def main():
    """Common entry point for the MCP server."""
    try:
        logger.info("🧠 Starting graph-memory server")
        await mcp.run_async(transport="stdio")
    except Exception as e:
        print(f"Server error: {e}", file=sys.stderr)
        sys.exit(1)


def run_sync(argv: Optional[List[str]] = None):
    """Synchronous entry point for the server."""
    args = parse_args(argv)
    if args.debug:
        logger.setLevel(logging.DEBUG)
    logger.debug("Running graph-memory from server.py")
    asyncio.run(main())


if __name__ == "__main__":
    run_sync()
