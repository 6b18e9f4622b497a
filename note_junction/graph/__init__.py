"""Read-only knowledge graph model: entities, store, accessor and snapshots."""

from .accessor import GraphAccessor, StoreGraphAccessor
from .attributes import attribute_value_counts, attribute_values, blocks_with_value
from .entity import Block, Entity, Page
from .snapshot import SnapshotError, load_snapshot, store_from_nodes
from .store import EntityRecord, GraphStore

__all__ = [
    "Block",
    "Entity",
    "EntityRecord",
    "GraphAccessor",
    "GraphStore",
    "Page",
    "SnapshotError",
    "StoreGraphAccessor",
    "attribute_value_counts",
    "attribute_values",
    "blocks_with_value",
    "load_snapshot",
    "store_from_nodes",
]
