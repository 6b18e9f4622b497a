"""Tests for graph-wide attribute statistics."""

import pytest

from note_junction.graph import attribute_value_counts, attribute_values, blocks_with_value
from tests.helpers import block, build_graph, page


@pytest.fixture
def store():
    store, _ = build_graph(
        page("Alice", block("isa:: [[person]]", uid="alice-isa"), uid="alice"),
        page("Bob", block("isa:: [[person]]", uid="bob-isa"), uid="bob"),
        page("Rex", block("isa:: [[dog]]", uid="rex-isa"), uid="rex"),
        page("Carol", block("isa:: [[person]] [[friend]]", uid="carol-isa"), uid="carol"),
        page("Notes", block("mentions [[isa]] in passing", uid="mention"), uid="notes"),
    )
    return store


class TestAttributeValues:
    """Test attribute value listing and counting."""

    def test_values(self, store):
        """Test that every block defining the attribute is returned."""
        assert attribute_values(store, "isa") == [
            "[[person]]",
            "[[person]]",
            "[[dog]]",
            "[[person]]",
            "[[friend]]",
        ]

    def test_counts_most_common_first(self, store):
        """Test that value counts are ordered most common first."""
        counts = attribute_value_counts(store, "isa")
        assert counts.index[0] == "[[person]]"
        assert counts["[[person]]"] == 3
        assert counts["[[dog]]"] == 1

    def test_unknown_attribute(self, store):
        """Test that an attribute without a page yields nothing."""
        assert attribute_values(store, "status") == []
        assert attribute_value_counts(store, "status").empty

    def test_blocks_with_value(self, store):
        """Test selecting the blocks that carry one attribute value."""
        assert [b.uid for b in blocks_with_value(store, "isa", "person")] == ["alice-isa", "bob-isa", "carol-isa"]
        assert blocks_with_value(store, "isa", "cat") == []
