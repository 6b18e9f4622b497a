"""Reference grouping for knowledge-base entities.

This package provides the grouping pipeline stages:
- Reference expansion (links, page, hierarchy root, attribute links)
- Group building and priority classification
- Largest-first resolution into disjoint groups
- Small group merging and reference filters
"""

from .filters import ReferenceFilter, matches_filter
from .merge import merge_small_groups, pattern_guard
from .pipeline import group_by_most_common_references, group_entities
from .types import GroupingConfig, GroupingResult, ResolvedGroup, Tier

__all__ = [
    "GroupingConfig",
    "GroupingResult",
    "ReferenceFilter",
    "ResolvedGroup",
    "Tier",
    "group_by_most_common_references",
    "group_entities",
    "matches_filter",
    "merge_small_groups",
    "pattern_guard",
]
