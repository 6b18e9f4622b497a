"""Attribute statistics across the whole graph."""

import logging

import pandas as pd

from note_junction.graph.entity import Block
from note_junction.graph.store import GraphStore

logger = logging.getLogger(__name__)


def _attribute_blocks(store: GraphStore, attribute_name: str) -> list[Block]:
    page = store.page_by_title(attribute_name)
    if page is None:
        return []
    return [
        entity
        for entity in page.backlinks
        if isinstance(entity, Block) and entity.attribute_name == attribute_name
    ]


def attribute_values(store: GraphStore, attribute_name: str) -> list[str]:
    """Every value of ``attribute_name`` across the graph, repeats included."""
    return [value for block in _attribute_blocks(store, attribute_name) for value in block.list_attribute_values()]


def attribute_value_counts(store: GraphStore, attribute_name: str) -> pd.Series:
    """Count each attribute value, most common first.

    Returns:
        Series indexed by value with the number of occurrences

    """
    values = attribute_values(store, attribute_name)
    counts = pd.Series(values, dtype="object").value_counts(sort=True, ascending=False)
    logger.debug(f"Attribute {attribute_name!r} has {len(counts)} distinct values")
    return counts


def blocks_with_value(store: GraphStore, attribute_name: str, value: str) -> list[Block]:
    """Attribute blocks that link both to the attribute page and to ``value``'s page."""
    value_page = store.page_by_title(value)
    if value_page is None:
        return []
    return [block for block in _attribute_blocks(store, attribute_name) if value_page.uid in block.record.refs]
