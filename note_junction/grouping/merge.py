"""Post-processing: fold small groups into a single catch-all group."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Mapping, Sequence, TypeVar

from note_junction.graph.accessor import GraphAccessor
from note_junction.grouping.types import PatternLike, compile_patterns, matches_any

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _never(_key: str) -> bool:
    return False


def merge_small_groups(
    groups: Mapping[str, Sequence[T]],
    target_key: str,
    min_size: int,
    never_merge: Callable[[str], bool] = _never,
) -> dict[str, list[T]]:
    """Concatenate every small group into ``target_key``.

    A group is small when its key is ``target_key``, or when it has fewer than
    ``min_size`` members and ``never_merge(key)`` is false. Large groups keep
    their order and members; the merged target group follows them. No target
    group is created when there is nothing to merge.

    Args:
        groups: Ordered key -> members mapping (e.g. a grouping result)
        target_key: Key receiving the merged members
        min_size: Groups below this size are merged
        never_merge: Predicate protecting keys from being merged

    Returns:
        New ordered mapping

    """
    large: dict[str, list[T]] = {}
    merged: list[T] = []
    merged_keys = []

    for key, members in groups.items():
        if key == target_key or (len(members) < min_size and not never_merge(key)):
            merged.extend(members)
            merged_keys.append(key)
        else:
            large[key] = list(members)

    if merged:
        large[target_key] = merged
    logger.debug(f"Merged {len(merged_keys)} groups ({len(merged)} members) into {target_key!r}")
    return large


def pattern_guard(patterns: Iterable[PatternLike], accessor: GraphAccessor) -> Callable[[str], bool]:
    """never_merge predicate protecting keys whose entity text matches any pattern."""
    compiled = compile_patterns(patterns, "never_merge")

    def guard(key: str) -> bool:
        entity = accessor.resolve_by_identity(key)
        return entity is not None and matches_any(compiled, accessor.text(entity))

    return guard
