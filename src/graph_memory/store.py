"""
In-memory graph store.

This module contains the core logic of the graph memory: creating entities and
relationships, filtering them by type, and deleting entities together with
every relationship that touches them. Nothing is persisted; a store lives as
long as the process that owns it.
"""

import logging
import threading
import uuid
from typing import Dict, List, Optional, Set

from .errors import EntityNotFoundError
from .models import (
    Entity,
    Relationship,
    RelationshipView,
    DeleteEntityResult,
    GraphSnapshot,
)

logger = logging.getLogger("graph-memory")


class GraphStore:
    """
    Owner of all entities and relationships in the memory graph.

    Entities and relationships are kept in insertion-ordered dicts keyed by id.
    Names are resolved through an index mapping each name to the ids carrying
    it, oldest first, so the first match is always the earliest surviving
    entity with that name.

    All operations take the store lock for their whole duration. Under the
    asyncio server they never await, so they already run to completion one at
    a time; the lock keeps that true when called from worker threads.
    """

    def __init__(self):
        self._entities: Dict[str, Entity] = {}
        self._relationships: Dict[str, Relationship] = {}
        self._name_index: Dict[str, List[str]] = {}
        # Every id ever handed out, including deleted ones
        self._issued_ids: Set[str] = set()
        self._lock = threading.RLock()

    def _generate_id(self, prefix: str) -> str:
        """
        Allocate an id that has never been issued by this store.

        Args:
            prefix: Short tag identifying the record kind ("ent" or "rel")

        Returns:
            A fresh id such as ``ent_3f9a0c1b2d4e``
        """
        while True:
            candidate = f"{prefix}_{uuid.uuid4().hex[:12]}"
            if candidate not in self._issued_ids:
                self._issued_ids.add(candidate)
                return candidate

    def _resolve_name(self, name: str) -> Optional[Entity]:
        ids = self._name_index.get(name)
        if not ids:
            return None
        return self._entities[ids[0]]

    def _view(self, relationship: Relationship) -> RelationshipView:
        from_entity = self._entities.get(relationship.from_id)
        to_entity = self._entities.get(relationship.to_id)
        return RelationshipView(
            **relationship.model_dump(),
            from_entity=from_entity.name if from_entity else None,
            to_entity=to_entity.name if to_entity else None,
        )

    async def create_entity(
        self, name: str, entity_type: str, observations: Optional[List[str]] = None
    ) -> Entity:
        """
        Create a new entity.

        Duplicate names are allowed; the new entity never replaces or merges
        with an existing one.

        Args:
            name: Free-text label of the entity
            entity_type: Category label
            observations: Initial observations, empty when omitted

        Returns:
            A copy of the created entity
        """
        with self._lock:
            entity = Entity(
                id=self._generate_id("ent"),
                name=name,
                entity_type=entity_type,
                observations=list(observations or []),
            )
            self._entities[entity.id] = entity
            self._name_index.setdefault(name, []).append(entity.id)
            logger.debug(f"[create_entity] {entity.model_dump(by_alias=True)}")
            return entity.model_copy(deep=True)

    async def find_entity_by_name(self, name: str) -> Optional[Entity]:
        """
        Find the first entity carrying the given name.

        Args:
            name: Exact name to look up

        Returns:
            A copy of the earliest surviving entity with that name, or None
        """
        with self._lock:
            entity = self._resolve_name(name)
            return entity.model_copy(deep=True) if entity else None

    async def create_relationship(
        self, from_entity_name: str, to_entity_name: str, relation_type: str
    ) -> Relationship:
        """
        Create a directed relationship between two entities resolved by name.

        Self-loops and duplicate relationships are allowed.

        Args:
            from_entity_name: Name of the source entity
            to_entity_name: Name of the target entity
            relation_type: Relationship label

        Returns:
            A copy of the created relationship

        Raises:
            EntityNotFoundError: If either name does not resolve; nothing is created
        """
        with self._lock:
            from_entity = self._resolve_name(from_entity_name)
            to_entity = self._resolve_name(to_entity_name)
            if from_entity is None or to_entity is None:
                missing = [
                    name
                    for name, entity in ((from_entity_name, from_entity), (to_entity_name, to_entity))
                    if entity is None
                ]
                raise EntityNotFoundError("One or both entities not found", missing)

            relationship = Relationship(
                id=self._generate_id("rel"),
                from_id=from_entity.id,
                to_id=to_entity.id,
                relation_type=relation_type,
            )
            self._relationships[relationship.id] = relationship
            logger.debug(f"[create_relationship] {relationship.model_dump(by_alias=True)}")
            return relationship.model_copy()

    async def query_entities(self, entity_type: str) -> List[Entity]:
        """
        Get every entity whose type exactly matches.

        Args:
            entity_type: Type label to match, case-sensitive

        Returns:
            Matching entities in creation order; empty when none match
        """
        with self._lock:
            return [
                entity.model_copy(deep=True)
                for entity in self._entities.values()
                if entity.entity_type == entity_type
            ]

    async def query_relationships(self, relation_type: str) -> List[RelationshipView]:
        """
        Get every relationship whose type exactly matches, with endpoint names.

        Endpoint names are looked up when the query runs. An endpoint that no
        longer exists is reported as None instead of raising.

        Args:
            relation_type: Relationship label to match, case-sensitive

        Returns:
            Matching relationships in creation order; empty when none match
        """
        with self._lock:
            return [
                self._view(relationship)
                for relationship in self._relationships.values()
                if relationship.relation_type == relation_type
            ]

    async def delete_entity(self, name: str) -> DeleteEntityResult:
        """
        Delete the first entity with the given name and all its relationships.

        Args:
            name: Name of the entity to delete

        Returns:
            The removed entity and how many relationships went with it

        Raises:
            EntityNotFoundError: If the name does not resolve; nothing is changed
        """
        with self._lock:
            entity = self._resolve_name(name)
            if entity is None:
                raise EntityNotFoundError("Entity not found", [name])

            incident = [
                rel_id
                for rel_id, rel in self._relationships.items()
                if rel.from_id == entity.id or rel.to_id == entity.id
            ]
            for rel_id in incident:
                del self._relationships[rel_id]

            del self._entities[entity.id]
            ids = self._name_index[name]
            ids.remove(entity.id)
            if not ids:
                del self._name_index[name]

            logger.debug(f"[delete_entity] {entity.id} ({name}), {len(incident)} relationships removed")
            return DeleteEntityResult(entity=entity, relationships_removed=len(incident))

    async def read_graph(self) -> GraphSnapshot:
        """
        Read the entire graph.

        Returns:
            A copy of all entities and relationships in creation order
        """
        with self._lock:
            return GraphSnapshot(
                entities=[e.model_copy(deep=True) for e in self._entities.values()],
                relationships=[r.model_copy() for r in self._relationships.values()],
            )
