"""Reference expansion: the candidate group keys of a single entity.

Candidates are the entity's links (optionally inherited from its ancestors)
plus its containing page. Each surviving candidate also contributes the root
of its page hierarchy (``root/child`` -> ``root``, one level only) and the links
of its first child block defining one of the configured attributes
(``isa::``, ``group with::``).
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from note_junction.graph.accessor import GraphAccessor
from note_junction.graph.entity import Entity
from note_junction.grouping.types import GroupingConfig

logger = logging.getLogger(__name__)

HIERARCHY_SEPARATOR = "/"


def hierarchy_root_name(text: str) -> Optional[str]:
    """Name of the hierarchy root of a page title, or None if it has no separator."""
    if HIERARCHY_SEPARATOR not in text:
        return None
    return text.split(HIERARCHY_SEPARATOR, 1)[0]


def _hierarchy_references(ref: Entity, accessor: GraphAccessor, config: GroupingConfig) -> Iterator[Entity]:
    if not accessor.is_page_like(ref):
        return
    root_name = hierarchy_root_name(accessor.text(ref))
    if not root_name:
        return

    # Nested hierarchies (a/b/c) only resolve their first level
    root = accessor.resolve_page_by_exact_name(root_name)
    if root is not None and not config.is_excluded(accessor.text(root)):
        yield root


def _attribute_references(ref: Entity, accessor: GraphAccessor, config: GroupingConfig) -> Iterator[Entity]:
    for attribute_name in config.attribute_names:
        attribute_block = accessor.first_child_defining_attribute(ref, attribute_name)
        if attribute_block is None:
            continue

        for linked in accessor.linked_entities(attribute_block, False):
            text = accessor.text(linked)
            if text == attribute_name or config.is_excluded(text):
                continue
            yield linked


def expand_references(entity: Entity, accessor: GraphAccessor, config: GroupingConfig) -> list[Entity]:
    """Candidate grouping keys for ``entity``, in order, duplicates included.

    Args:
        entity: Entity to expand
        accessor: Graph read interface
        config: Exclusions, attribute names and parent-reference switch

    Returns:
        Candidate key entities; empty when every reference is excluded

    """
    candidates = list(accessor.linked_entities(entity, config.include_parent_references))
    page = accessor.containing_page(entity)
    if page is not None:
        candidates.append(page)

    references = [ref for ref in candidates if not config.is_excluded(accessor.text(ref))]

    expanded: list[Entity] = []
    for ref in references:
        expanded.append(ref)
        expanded.extend(_hierarchy_references(ref, accessor, config))
        expanded.extend(_attribute_references(ref, accessor, config))

    logger.debug(
        f"{accessor.identity(entity)}: {len(candidates)} references, "
        f"{len(references)} after exclusions, {len(expanded)} candidate keys"
    )
    return expanded
