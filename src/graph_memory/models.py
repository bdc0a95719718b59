"""
Data models for the in-memory graph memory store.

This module defines the records held by the graph store (entities and the
directed relationships between them) and the views returned to callers.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


class Entity(BaseModel):
    """
    Nodes in the memory graph.

    Names are free text and are not required to be unique; the id is the
    only identity an entity has.
    """

    id: str = Field(..., description="Opaque identifier issued by the store")
    name: str = Field(..., description="Free-text label used for lookups")
    entity_type: str = Field(..., description="Category label used as the query filter", alias="type")
    observations: List[str] = Field(default_factory=list, description="Facts attached at creation")

    class Config:
        populate_by_name = True


class Relationship(BaseModel):
    """
    Directed, typed edges between two entities, referenced by entity id.
    """

    id: str = Field(..., description="Opaque identifier issued by the store")
    from_id: str = Field(..., description="Id of the source entity", alias="fromId")
    to_id: str = Field(..., description="Id of the target entity", alias="toId")
    relation_type: str = Field(..., description="Relationship label", alias="type")

    class Config:
        populate_by_name = True


class RelationshipView(Relationship):
    """A relationship annotated with its endpoint names, resolved at query time."""

    from_entity: Optional[str] = Field(default=None, description="Name of the source entity", alias="fromEntity")
    to_entity: Optional[str] = Field(default=None, description="Name of the target entity", alias="toEntity")


class DeleteEntityResult(BaseModel):
    """Result of deleting an entity together with its incident relationships."""

    entity: Entity = Field(..., description="The entity that was removed")
    relationships_removed: int = Field(..., description="Number of relationships removed with it")


class GraphSnapshot(BaseModel):
    """Copy of the full store contents in insertion order."""

    entities: List[Entity] = Field(default_factory=list)
    relationships: List[Relationship] = Field(default_factory=list)
