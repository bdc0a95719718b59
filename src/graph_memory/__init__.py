"""
MCP server for short-lived graph memory.

This package provides an in-memory, directed, labeled graph of entities and
relationships that an LLM agent can build up and query during a session.
"""

__version__ = "1.0.0"

from .models import (
    Entity,
    Relationship,
    RelationshipView,
    DeleteEntityResult,
    GraphSnapshot,
)
from .errors import (
    GraphMemoryError,
    EntityNotFoundError,
    MissingFieldError,
    validate_fields,
)
from .store import GraphStore
from .server import create_server, mcp

__all__ = [
    "Entity",
    "Relationship",
    "RelationshipView",
    "DeleteEntityResult",
    "GraphSnapshot",
    "GraphMemoryError",
    "EntityNotFoundError",
    "MissingFieldError",
    "validate_fields",
    "GraphStore",
    "create_server",
    "mcp",
]
