"""Read interface between the grouping core and the knowledge graph.

The grouping functions never reach into a store directly; they receive a
``GraphAccessor`` so tests and other hosts can substitute their own graph.
Every lookup returns None (or an empty list) on missing data instead of raising.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from note_junction.graph.entity import Entity
from note_junction.graph.store import GraphStore


class GraphAccessor(Protocol):
    """Operations the grouping core needs from a knowledge graph."""

    def identity(self, entity: Entity) -> str: ...

    def text(self, entity: Entity) -> str: ...

    def is_page_like(self, entity: Entity) -> bool: ...

    def linked_entities(self, entity: Entity, include_inherited: bool = False) -> Sequence[Entity]: ...

    def ancestors(self, entity: Entity) -> Sequence[Entity]: ...

    def containing_page(self, entity: Entity) -> Optional[Entity]: ...

    def resolve_page_by_exact_name(self, name: str) -> Optional[Entity]: ...

    def first_child_defining_attribute(self, entity: Entity, attribute_name: str) -> Optional[Entity]: ...

    def resolve_by_identity(self, key: str) -> Optional[Entity]: ...


class StoreGraphAccessor:
    """GraphAccessor backed by an in-memory GraphStore."""

    def __init__(self, store: GraphStore) -> None:
        self.store = store

    def identity(self, entity: Entity) -> str:
        return entity.uid

    def text(self, entity: Entity) -> str:
        return entity.text

    def is_page_like(self, entity: Entity) -> bool:
        return entity.is_page

    def linked_entities(self, entity: Entity, include_inherited: bool = False) -> list[Entity]:
        return entity.get_linked_entities(include_inherited)

    def ancestors(self, entity: Entity) -> list[Entity]:
        return entity.parents

    def containing_page(self, entity: Entity) -> Optional[Entity]:
        return entity.page

    def resolve_page_by_exact_name(self, name: str) -> Optional[Entity]:
        return self.store.page_by_title(name)

    def first_child_defining_attribute(self, entity: Entity, attribute_name: str) -> Optional[Entity]:
        return entity.first_attribute_block(attribute_name)

    def resolve_by_identity(self, key: str) -> Optional[Entity]:
        return self.store.entity(key)
