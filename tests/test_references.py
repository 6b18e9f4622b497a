"""Tests for reference expansion."""

import pytest

from note_junction.grouping.references import expand_references, hierarchy_root_name
from note_junction.grouping.types import GroupingConfig
from tests.helpers import block, build_graph, page


@pytest.fixture
def graph():
    return build_graph(
        page(
            "Home",
            block("[[Topic/Sub]] note", uid="n1"),
            block("[[Plain]]", block("child", uid="n3"), uid="n2"),
            block("[[TODO]] [[Alpha]]", uid="n4"),
            block("[[Nested/Deep/Leaf]]", uid="n5"),
            block("[[Ghost/Child]]", uid="n6"),
            block("((n8))", uid="n7"),
            block("Topic/x", uid="n8"),
            uid="home",
        ),
        page("Topic", uid="topic"),
        page("Topic/Sub", uid="topicsub"),
        page("Nested", uid="nested"),
        page("Nested/Deep", uid="nesteddeep"),
        page(
            "Alpha",
            block("isa:: [[project]]"),
            block("group with:: [[Beta]] [[TODO]]"),
            uid="alpha",
        ),
    )


def texts(entities):
    return [e.text for e in entities]


class TestHierarchyRootName:
    """Test hierarchy root extraction."""

    def test_first_level_only(self):
        """Test that only the first hierarchy level is returned."""
        assert hierarchy_root_name("a/b/c") == "a"

    def test_no_separator(self):
        """Test that a flat title has no hierarchy root."""
        assert hierarchy_root_name("plain") is None


class TestExpandReferences:
    """Test candidate keys produced for one entity."""

    def test_links_hierarchy_and_page(self, graph, bare_config):
        """Test expansion into links, hierarchy roots and the containing page."""
        store, accessor = graph
        result = expand_references(store.entity("n1"), accessor, bare_config)
        assert texts(result) == ["Topic/Sub", "Topic", "Home"]

    def test_inherits_parent_links(self, graph, bare_config):
        """Test that ancestor links are included by default."""
        store, accessor = graph
        assert texts(expand_references(store.entity("n3"), accessor, bare_config)) == ["Plain", "Home"]

    def test_parent_links_can_be_disabled(self, graph):
        """Test turning off inherited links."""
        store, accessor = graph
        config = GroupingConfig(
            exclusions=(), low_priority=(), high_priority=(), attribute_names=(), include_parent_references=False
        )
        assert texts(expand_references(store.entity("n3"), accessor, config)) == ["Home"]

    def test_exclusions_and_attributes(self, graph):
        """Test that exclusions apply and attribute links are added."""
        store, accessor = graph
        result = expand_references(store.entity("n4"), accessor, GroupingConfig())
        assert texts(result) == ["Alpha", "project", "Beta", "Home"]

    def test_attribute_page_itself_not_emitted(self, graph):
        """Test that the attribute page is not a candidate."""
        store, accessor = graph
        config = GroupingConfig(exclusions=(), low_priority=(), high_priority=(), attribute_names=("isa",))
        result = expand_references(store.entity("n4"), accessor, config)
        assert texts(result) == ["TODO", "Alpha", "project", "Home"]

    def test_excluded_hierarchy_root(self, graph):
        """Test that an excluded hierarchy root is skipped."""
        store, accessor = graph
        config = GroupingConfig(exclusions=[r"^Topic$"], low_priority=(), high_priority=(), attribute_names=())
        assert texts(expand_references(store.entity("n1"), accessor, config)) == ["Topic/Sub", "Home"]

    def test_single_level_hierarchy(self, graph, bare_config):
        """Test that nested hierarchies resolve their first level only."""
        store, accessor = graph
        result = expand_references(store.entity("n5"), accessor, bare_config)
        assert texts(result) == ["Nested/Deep/Leaf", "Nested", "Home"]

    def test_missing_hierarchy_root_skipped(self, graph, bare_config):
        """Test that a hierarchy root without a page is skipped."""
        store, accessor = graph
        assert texts(expand_references(store.entity("n6"), accessor, bare_config)) == ["Ghost/Child", "Home"]

    def test_blocks_have_no_hierarchy(self, graph, bare_config):
        """Test that block references contribute no hierarchy root."""
        store, accessor = graph
        assert texts(expand_references(store.entity("n7"), accessor, bare_config)) == ["Topic/x", "Home"]

    def test_everything_excluded(self, graph):
        """Test that excluding every reference gives no candidates."""
        store, accessor = graph
        config = GroupingConfig(exclusions=[r".*"])
        assert expand_references(store.entity("n4"), accessor, config) == []

    def test_page_is_its_own_page_reference(self, graph, bare_config):
        """Test that a page expands to include itself."""
        store, accessor = graph
        assert texts(expand_references(store.entity("topic"), accessor, bare_config)) == ["Topic"]
