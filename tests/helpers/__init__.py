"""Test helper utilities package.

This package provides utilities for building in-memory graphs and
reading grouping results in tests.
"""

from .graphs import block, build_graph, entities, keys_by_title, page

__all__ = [
    "block",
    "build_graph",
    "entities",
    "keys_by_title",
    "page",
]
