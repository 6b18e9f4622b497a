"""Page and block entities over an in-memory graph store.

Entities are thin, read-only views over ``EntityRecord``s. Children are
reached through explicit methods (``child_at``, ``child_by_text``,
``children_matching``) rather than attribute access on the entity.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional, Sequence, Union

if TYPE_CHECKING:
    from note_junction.graph.store import EntityRecord, GraphStore

ATTRIBUTE_SEPARATOR = "::"

# Splits in-place attribute values between adjacent links: "[[a]] [[b]]"
DEFAULT_VALUE_SPLIT = re.compile(r"(?<=\])\s?(?=\[)")


def attribute_pattern(name: str) -> re.Pattern[str]:
    """Regex matching the text of a block that defines attribute ``name``."""
    return re.compile(f"^{re.escape(name)}{ATTRIBUTE_SEPARATOR}")


class Entity(ABC):
    """A node of the knowledge graph: a page or a nested block."""

    def __init__(self, record: EntityRecord, store: GraphStore) -> None:
        self.record = record
        self.store = store

    @property
    def uid(self) -> str:
        return self.record.uid

    @property
    def text(self) -> str:
        return self.record.text

    @property
    def is_page(self) -> bool:
        return self.record.is_page

    @property
    @abstractmethod
    def parent(self) -> Optional[Entity]:
        """Nearest ancestor, or None for pages."""

    @property
    @abstractmethod
    def parents(self) -> list[Entity]:
        """Ancestors ordered from the outermost (the page) to the direct parent."""

    @property
    @abstractmethod
    def page(self) -> Optional[Page]:
        """The page this entity lives on (a page is its own page)."""

    # ------------------------------------------------------------------
    # Children
    # ------------------------------------------------------------------
    @property
    def children(self) -> list[Block]:
        records = [self.store.pull(uid) for uid in self.record.children]
        present = [r for r in records if r is not None]
        # Stored child order is not guaranteed, sort by the explicit position
        present.sort(key=lambda r: r.order)
        return [Block(r, self.store) for r in present]

    def child_at(self, index: int) -> Optional[Block]:
        """Child block at position ``index`` (0 is the first child)."""
        children = self.children
        if -len(children) <= index < len(children):
            return children[index]
        return None

    def child_by_text(self, text: str) -> Optional[Block]:
        """First child whose text equals ``text`` exactly."""
        return next((child for child in self.children if child.text == text), None)

    def children_matching(self, pattern: Union[str, re.Pattern[str]]) -> list[Block]:
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        return [child for child in self.children if regex.search(child.text)]

    def child_at_path(self, path: Sequence[Union[int, str]]) -> Optional[Entity]:
        """Walk down ``path``; each part is a child index or an exact child text.

        Args:
            path: Sequence of indexes and/or texts, outermost first

        Returns:
            The entity at the end of the path, or None if any part is missing

        """
        node: Optional[Entity] = self
        for part in path:
            if node is None:
                return None
            node = node.child_at(part) if isinstance(part, int) else node.child_by_text(part)
        return node

    def attribute_blocks(self, name: str) -> list[Block]:
        return self.children_matching(attribute_pattern(name))

    def first_attribute_block(self, name: str) -> Optional[Block]:
        blocks = self.attribute_blocks(name)
        return blocks[0] if blocks else None

    # ------------------------------------------------------------------
    # References
    # ------------------------------------------------------------------
    @property
    def linked_entities(self) -> list[Entity]:
        return self.get_linked_entities()

    def get_linked_entities(self, include_refs_from_parents: bool = False) -> list[Entity]:
        """Entities this one links to, optionally followed by its ancestors' links.

        References that no longer resolve in the store are skipped.
        """
        local = [e for e in (self.store.entity(uid) for uid in self.record.refs) if e is not None]
        if not include_refs_from_parents:
            return local

        from_parents = [ref for parent in self.parents for ref in parent.get_linked_entities()]
        return local + from_parents

    @property
    def backlinks(self) -> list[Entity]:
        """Entities that link to this one."""
        entities = (self.store.entity(uid) for uid in self.store.backlink_uids(self.uid))
        return [e for e in entities if e is not None]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return self.uid == other.uid

    def __hash__(self) -> int:
        return hash(self.uid)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(uid={self.uid!r}, text={self.text!r})"


class Page(Entity):
    """Top-level entity; its title may carry a ``/`` hierarchy separator."""

    @property
    def title(self) -> str:
        return self.text

    @property
    def parent(self) -> Optional[Entity]:
        return None

    @property
    def parents(self) -> list[Entity]:
        return []

    @property
    def page(self) -> Page:
        return self


class Block(Entity):
    """Nested entity living on a page."""

    @property
    def parent(self) -> Optional[Entity]:
        if not self.record.parents:
            return None
        return self.store.entity(self.record.parents[-1])

    @property
    def parents(self) -> list[Entity]:
        entities = (self.store.entity(uid) for uid in self.record.parents)
        return [e for e in entities if e is not None]

    @property
    def page(self) -> Optional[Page]:
        if self.record.page is None:
            return None
        entity = self.store.entity(self.record.page)
        return entity if isinstance(entity, Page) else None

    @property
    def defines_attribute(self) -> bool:
        return ATTRIBUTE_SEPARATOR in self.text

    @property
    def attribute_name(self) -> Optional[str]:
        if not self.defines_attribute:
            return None
        return self.text.split(ATTRIBUTE_SEPARATOR, 1)[0].strip()

    @property
    def attribute_value(self) -> Optional[str]:
        """Same-line attribute value; values can also live in child blocks."""
        if not self.defines_attribute:
            return None
        return self.text.split(ATTRIBUTE_SEPARATOR, 1)[1].strip()

    def list_in_place_attribute_values(
        self, split_pattern: Union[str, re.Pattern[str]] = DEFAULT_VALUE_SPLIT
    ) -> list[str]:
        value = self.attribute_value
        if not value:
            return []
        return [part.strip() for part in re.split(split_pattern, value) if part.strip()]

    def list_attribute_values(
        self, split_pattern: Optional[Union[str, re.Pattern[str]]] = None
    ) -> list[str]:
        """All values of the attribute this block defines.

        Values are the same-line value split into parts, followed by the texts
        of the child blocks.
        """
        if not self.defines_attribute:
            return []

        in_place = self.list_in_place_attribute_values(split_pattern or DEFAULT_VALUE_SPLIT)
        return in_place + [child.text for child in self.children]


def entity_from_record(record: EntityRecord, store: GraphStore) -> Entity:
    if record.is_page:
        return Page(record, store)
    return Block(record, store)
