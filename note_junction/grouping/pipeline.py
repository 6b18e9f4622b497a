"""Entry points: group entities by their most common references."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from note_junction.graph.accessor import GraphAccessor
from note_junction.graph.entity import Entity
from note_junction.grouping.builder import build_reference_groups
from note_junction.grouping.priority import classify_groups
from note_junction.grouping.resolver import resolve_groups
from note_junction.grouping.types import GroupingConfig, GroupingResult

logger = logging.getLogger(__name__)


def group_entities(
    entities: Iterable[Entity],
    accessor: GraphAccessor,
    fallback_key: str,
    config: Optional[GroupingConfig] = None,
) -> GroupingResult:
    """Partition ``entities`` into disjoint groups named after shared references.

    Args:
        entities: Entities to group, already materialized from the graph
        accessor: Graph read interface
        fallback_key: Key of the group collecting entities with no usable reference
        config: Grouping configuration (defaults when None)

    Returns:
        GroupingResult in extraction order: high, default, low, then cleanup,
        largest-first within each pass

    """
    config = config or GroupingConfig()
    entities = list(entities)
    logger.info(f"Grouping {len(entities)} entities (fallback key {fallback_key!r})")

    groups = build_reference_groups(entities, accessor, config, fallback_key)
    tiers = classify_groups(groups.keys(), accessor, config)
    resolved = resolve_groups(groups, tiers, config.default_min_size)
    return GroupingResult(groups=resolved)


def group_by_most_common_references(
    entities: Iterable[Entity],
    accessor: GraphAccessor,
    fallback_key: str,
    config: Optional[GroupingConfig] = None,
) -> dict[str, list[Entity]]:
    """Ordered key -> members mapping; see group_entities."""
    return group_entities(entities, accessor, fallback_key, config).as_mapping()
