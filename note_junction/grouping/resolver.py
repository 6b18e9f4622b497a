"""Greedy largest-first resolution of overlapping groups into disjoint ones.

Passes run in tier order (high, default, low) and end with a cleanup pass over
everything left. Within a pass the currently largest eligible group is
extracted, its members are removed from every other group, and the sizes are
re-evaluated before the next pick. The default pass only extracts groups
with at least ``default_min_size`` members; smaller ones wait for cleanup.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from note_junction.graph.entity import Entity
from note_junction.grouping.types import ResolvedGroup, Tier
from note_junction.grouping.working_set import GroupArena

logger = logging.getLogger(__name__)


def _drain(
    arena: GroupArena[Entity], keys: Optional[Sequence[str]], tier: Tier, min_size: int
) -> list[ResolvedGroup]:
    resolved = []
    while True:
        extracted = arena.extract_max_in_subset(keys, min_size)
        if extracted is None:
            break
        key, members = extracted
        logger.debug(f"{tier.value}: extracted {key!r} with {len(members)} members")
        resolved.append(ResolvedGroup(key=key, members=members, tier=tier))
    return resolved


def resolve_groups(
    groups: Mapping[str, Mapping[str, Entity]],
    tiers: Mapping[Tier, Sequence[str]],
    default_min_size: int = 2,
) -> list[ResolvedGroup]:
    """Resolve overlapping reference groups into an ordered, disjoint list.

    Args:
        groups: Key -> members (keyed by member uid), as built by the group builder
        tiers: Keys per tier, as returned by classify_groups
        default_min_size: Minimum current size for extraction in the default pass

    Returns:
        Groups in extraction order; every member of the input appears exactly once

    """
    arena: GroupArena[Entity] = GroupArena(groups)

    resolved: list[ResolvedGroup] = []
    for tier, min_size in ((Tier.HIGH, 1), (Tier.DEFAULT, default_min_size), (Tier.LOW, 1)):
        resolved.extend(_drain(arena, tiers.get(tier, ()), tier, min_size))

    # Keys deferred by the default threshold or never classified
    resolved.extend(_drain(arena, None, Tier.CLEANUP, 1))

    dropped = arena.drop_empty()
    logger.info(f"Resolved {len(resolved)} groups from {len(groups)} candidates ({len(dropped)} emptied by overlap)")
    return resolved
