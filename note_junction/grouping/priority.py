"""Priority classification of group keys into high, default and low tiers."""

from __future__ import annotations

import logging
from typing import Iterable

from note_junction.graph.accessor import GraphAccessor
from note_junction.grouping.types import GroupingConfig, Tier, matches_any

logger = logging.getLogger(__name__)

CLASSIFIED_TIERS = (Tier.HIGH, Tier.DEFAULT, Tier.LOW)


def classify_priority(key: str, accessor: GraphAccessor, config: GroupingConfig) -> Tier:
    """Tier of a single key.

    The key is resolved back to its entity; keys that no longer resolve (or
    the caller's fallback key) are DEFAULT. High patterns are checked first.
    """
    entity = accessor.resolve_by_identity(key)
    if entity is None:
        return Tier.DEFAULT

    text = accessor.text(entity)
    if matches_any(config.high_priority, text):
        return Tier.HIGH
    if matches_any(config.low_priority, text):
        return Tier.LOW
    return Tier.DEFAULT


def classify_groups(keys: Iterable[str], accessor: GraphAccessor, config: GroupingConfig) -> dict[Tier, list[str]]:
    """Partition ``keys`` into tiers, preserving key order within each tier."""
    tiers: dict[Tier, list[str]] = {tier: [] for tier in CLASSIFIED_TIERS}
    for key in keys:
        tiers[classify_priority(key, accessor, config)].append(key)

    logger.debug(", ".join(f"{tier.value}={len(members)}" for tier, members in tiers.items()))
    return tiers
