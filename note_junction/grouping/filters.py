"""Reference filters: include/remove sets of linked entity texts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from note_junction.graph.accessor import GraphAccessor
from note_junction.graph.entity import Entity


@dataclass(frozen=True)
class ReferenceFilter:
    """Required (``includes``) and forbidden (``removes``) reference texts."""

    includes: tuple[str, ...] = ()
    removes: tuple[str, ...] = ()

    def __post_init__(self):
        for name in ("includes", "removes"):
            value = getattr(self, name)
            if isinstance(value, str):
                raise ValueError(f"{name} must be a list of reference texts, got a single string")
            object.__setattr__(self, name, tuple(value))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ReferenceFilter:
        """Build from the host's ``{"includes": [...], "removes": [...]}`` shape."""
        return cls(includes=tuple(data.get("includes") or ()), removes=tuple(data.get("removes") or ()))

    @property
    def is_empty(self) -> bool:
        return not self.includes and not self.removes


def matches_filter(entity: Entity, reference_filter: ReferenceFilter, accessor: GraphAccessor) -> bool:
    """True iff all included texts and none of the removed texts are among the entity's references.

    References include those inherited from the entity's ancestors.
    """
    texts = {accessor.text(ref) for ref in accessor.linked_entities(entity, True)}
    return all(text in texts for text in reference_filter.includes) and not any(
        text in texts for text in reference_filter.removes
    )
