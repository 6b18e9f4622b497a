"""Shared types for reference grouping: tiers, configuration and results."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from note_junction.graph.entity import Entity
from note_junction.utils.io_utils import DEFAULTS

PatternLike = Union[str, re.Pattern]

_DEFAULT_GROUPING = DEFAULTS["grouping"]


class Tier(str, Enum):
    """Extraction priority of a group key.

    CLEANUP is not assigned by classification; it labels groups drained by
    the resolver's final pass.
    """

    HIGH = "high"
    DEFAULT = "default"
    LOW = "low"
    CLEANUP = "cleanup"

    @property
    def rank(self) -> int:
        return _TIER_RANKS[self]


_TIER_RANKS = {Tier.HIGH: 3, Tier.DEFAULT: 2, Tier.LOW: 1, Tier.CLEANUP: 0}


def compile_patterns(patterns: Optional[Iterable[PatternLike]], label: str = "patterns") -> tuple[re.Pattern[str], ...]:
    """Compile an ordered list of regexes, keeping precompiled ones as is.

    None (an empty settings entry) compiles to no patterns.

    Raises:
        ValueError: If ``patterns`` is a bare string or an entry is not a valid regex
    """
    if patterns is None:
        return ()
    if isinstance(patterns, (str, bytes)):
        raise ValueError(f"{label} must be a list of patterns, got a single string")

    compiled = []
    for pattern in patterns:
        if isinstance(pattern, re.Pattern):
            compiled.append(pattern)
            continue
        try:
            compiled.append(re.compile(pattern))
        except (re.error, TypeError) as e:
            raise ValueError(f"Invalid regex in {label}: {pattern!r} ({e})") from e
    return tuple(compiled)


def matches_any(patterns: Sequence[re.Pattern[str]], text: str) -> bool:
    return any(pattern.search(text) for pattern in patterns)


@dataclass(frozen=True)
class GroupingConfig:
    """Configuration consumed by the grouping core.

    Attributes:
        exclusions: Entities whose text matches any of these are never group keys
        low_priority: Keys matching these are extracted after the default tier
        high_priority: Keys matching these are extracted first (checked before low)
        attribute_names: Attributes whose first defining child contributes its links
        include_parent_references: Fold ancestors' links into a block's references
        default_min_size: Smallest group the default tier extracts
    """

    exclusions: tuple[re.Pattern[str], ...] = field(default_factory=lambda: _DEFAULT_GROUPING["exclusions"])
    low_priority: tuple[re.Pattern[str], ...] = field(default_factory=lambda: _DEFAULT_GROUPING["low_priority"])
    high_priority: tuple[re.Pattern[str], ...] = field(default_factory=lambda: _DEFAULT_GROUPING["high_priority"])
    attribute_names: tuple[str, ...] = field(default_factory=lambda: tuple(_DEFAULT_GROUPING["attribute_names"]))
    include_parent_references: bool = _DEFAULT_GROUPING["include_parent_references"]
    default_min_size: int = _DEFAULT_GROUPING["default_min_size"]

    def __post_init__(self):
        """Compile patterns and validate values after initialization."""
        for name in ("exclusions", "low_priority", "high_priority"):
            object.__setattr__(self, name, compile_patterns(getattr(self, name), name))

        if isinstance(self.attribute_names, str):
            raise ValueError("attribute_names must be a list of names, got a single string")
        object.__setattr__(self, "attribute_names", tuple(self.attribute_names or ()))
        if not all(isinstance(name, str) and name for name in self.attribute_names):
            raise ValueError(f"attribute_names must be non-empty strings, got {self.attribute_names!r}")

        if not isinstance(self.include_parent_references, bool):
            raise ValueError(
                f"include_parent_references must be a bool, got {self.include_parent_references!r}"
            )

        if isinstance(self.default_min_size, bool) or not isinstance(self.default_min_size, int):
            raise ValueError(f"default_min_size must be an int, got {self.default_min_size!r}")
        if self.default_min_size < 1:
            raise ValueError(f"default_min_size must be >= 1, got {self.default_min_size}")

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> GroupingConfig:
        """Build a config from the ``grouping`` section of loaded settings."""
        section = {**_DEFAULT_GROUPING, **(settings.get("grouping") or {})}
        return cls(
            exclusions=section["exclusions"],
            low_priority=section["low_priority"],
            high_priority=section["high_priority"],
            attribute_names=section["attribute_names"],
            include_parent_references=section["include_parent_references"],
            default_min_size=section["default_min_size"],
        )

    def is_excluded(self, text: str) -> bool:
        return matches_any(self.exclusions, text)


@dataclass(frozen=True)
class ResolvedGroup:
    """A group extracted by the resolver.

    Attributes:
        key: Reference key (uid of the grouping entity, or the fallback key)
        members: Member entities, disjoint from every other resolved group
        tier: Pass that extracted the group
    """

    key: str
    members: list[Entity]
    tier: Tier

    @property
    def size(self) -> int:
        return len(self.members)


@dataclass(frozen=True)
class GroupingResult:
    """Ordered, disjoint groups covering every input entity."""

    groups: list[ResolvedGroup]

    def as_mapping(self) -> dict[str, list[Entity]]:
        return {group.key: list(group.members) for group in self.groups}

    @property
    def keys(self) -> list[str]:
        return [group.key for group in self.groups]

    @property
    def member_count(self) -> int:
        return sum(group.size for group in self.groups)

    def __len__(self) -> int:
        return len(self.groups)

    def __iter__(self):
        return iter(self.groups)
