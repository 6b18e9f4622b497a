"""Fold the expanded references of all entities into key -> member groups."""

from __future__ import annotations

import logging
from typing import Iterable

from note_junction.graph.accessor import GraphAccessor
from note_junction.graph.entity import Entity
from note_junction.grouping.references import expand_references
from note_junction.grouping.types import GroupingConfig

logger = logging.getLogger(__name__)

ReferenceGroups = dict[str, dict[str, Entity]]


def add_to_group(groups: ReferenceGroups, key: str, member_uid: str, member: Entity) -> None:
    groups.setdefault(key, {})[member_uid] = member


def build_reference_groups(
    entities: Iterable[Entity],
    accessor: GraphAccessor,
    config: GroupingConfig,
    fallback_key: str,
) -> ReferenceGroups:
    """Build the bipartite key -> members map.

    Args:
        entities: Entities to group
        accessor: Graph read interface
        config: Reference expansion configuration
        fallback_key: Key collecting entities without any candidate reference

    Returns:
        Insertion-ordered map from reference key to members keyed by member uid;
        no group is empty

    """
    groups: ReferenceGroups = {}
    fallback_count = 0

    for entity in entities:
        member_uid = accessor.identity(entity)
        candidates = expand_references(entity, accessor, config)
        if not candidates:
            add_to_group(groups, fallback_key, member_uid, entity)
            fallback_count += 1
            continue

        for candidate in candidates:
            add_to_group(groups, accessor.identity(candidate), member_uid, entity)

    logger.info(f"Built {len(groups)} reference groups ({fallback_count} entities sent to fallback {fallback_key!r})")
    return groups
