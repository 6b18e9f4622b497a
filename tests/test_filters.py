"""Tests for reference filter matching."""

import pytest

from note_junction.grouping.filters import ReferenceFilter, matches_filter
from tests.helpers import block, build_graph, page


@pytest.fixture
def graph():
    return build_graph(
        page(
            "Home",
            block("[[Alpha]]", block("[[Beta]] details", uid="child"), uid="parent"),
            uid="home",
        )
    )


class TestReferenceFilter:
    """Test filter construction."""

    def test_from_mapping(self):
        """Test building a filter from an includes/removes mapping."""
        reference_filter = ReferenceFilter.from_mapping({"includes": ["a"], "removes": ["b"]})
        assert reference_filter == ReferenceFilter(includes=("a",), removes=("b",))

    def test_from_mapping_missing_keys(self):
        """Test that missing keys give an empty filter."""
        assert ReferenceFilter.from_mapping({}).is_empty

    def test_single_string_rejected(self):
        """Test that a bare string is rejected."""
        with pytest.raises(ValueError, match="includes must be a list"):
            ReferenceFilter(includes="Alpha")


class TestMatchesFilter:
    """Test include/remove matching against resolved references."""

    def test_includes_inherited_references(self, graph):
        """Test that included references may come from ancestors."""
        store, accessor = graph
        child = store.entity("child")
        assert matches_filter(child, ReferenceFilter(includes=["Alpha", "Beta"]), accessor)

    def test_missing_include(self, graph):
        """Test that a missing included reference fails the match."""
        store, accessor = graph
        assert not matches_filter(store.entity("child"), ReferenceFilter(includes=["Gamma"]), accessor)

    def test_removed_reference(self, graph):
        """Test that a removed reference fails the match."""
        store, accessor = graph
        assert not matches_filter(store.entity("child"), ReferenceFilter(removes=["Alpha"]), accessor)

    def test_removed_reference_absent(self, graph):
        """Test that an absent removed reference still matches."""
        store, accessor = graph
        reference_filter = ReferenceFilter(includes=["Beta"], removes=["Gamma"])
        assert matches_filter(store.entity("child"), reference_filter, accessor)

    def test_empty_filter_matches(self, graph):
        """Test that an empty filter matches every entity."""
        store, accessor = graph
        assert matches_filter(store.entity("parent"), ReferenceFilter(), accessor)
