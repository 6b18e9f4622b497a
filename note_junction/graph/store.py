"""In-memory graph store holding a materialized snapshot of the knowledge base."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from note_junction.graph.entity import Entity, Page, entity_from_record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityRecord:
    """Raw data of one page or block.

    Attributes:
        uid: Stable identity
        text: Page title or block string
        is_page: True for pages, False for blocks
        refs: Uids of directly linked entities, in order of appearance
        parents: Ancestor uids, outermost (the page) first, direct parent last
        page: Uid of the containing page (a page's own uid for pages)
        children: Uids of child blocks
        order: Position among the parent's children
    """

    uid: str
    text: str
    is_page: bool = False
    refs: tuple[str, ...] = ()
    parents: tuple[str, ...] = ()
    page: Optional[str] = None
    children: tuple[str, ...] = ()
    order: int = 0

    def __post_init__(self):
        """Validate record data after initialization."""
        if not self.uid:
            raise ValueError("Entity uid must be a non-empty string")
        if self.is_page and self.parents:
            raise ValueError(f"Page {self.uid!r} cannot have parents")


class GraphStore:
    """Uid-indexed records with a page title index and a reverse reference index."""

    def __init__(self, records: Iterable[EntityRecord] = ()) -> None:
        self._records: dict[str, EntityRecord] = {}
        self._titles: dict[str, str] = {}
        self._backlinks: dict[str, list[str]] = defaultdict(list)
        for record in records:
            self.add(record)

    def add(self, record: EntityRecord) -> None:
        """Add a record to the store.

        Raises:
            ValueError: If the uid, or a page title, is already present
        """
        if record.uid in self._records:
            raise ValueError(f"Duplicate entity uid: {record.uid!r}")
        if record.is_page:
            if record.text in self._titles:
                raise ValueError(f"Duplicate page title: {record.text!r}")
            self._titles[record.text] = record.uid

        self._records[record.uid] = record
        for ref in dict.fromkeys(record.refs):
            self._backlinks[ref].append(record.uid)

    def pull(self, uid: str) -> Optional[EntityRecord]:
        return self._records.get(uid)

    def page_uid_by_title(self, title: str) -> Optional[str]:
        return self._titles.get(title)

    def backlink_uids(self, uid: str) -> list[str]:
        return list(self._backlinks.get(uid, []))

    def pages(self) -> list[EntityRecord]:
        return [r for r in self._records.values() if r.is_page]

    def entity(self, uid: str) -> Optional[Entity]:
        record = self.pull(uid)
        if record is None:
            return None
        return entity_from_record(record, self)

    def page_by_title(self, title: str) -> Optional[Page]:
        uid = self.page_uid_by_title(title)
        if uid is None:
            return None
        return Page(self._records[uid], self)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, uid: object) -> bool:
        return uid in self._records

    def __iter__(self) -> Iterator[EntityRecord]:
        return iter(self._records.values())
