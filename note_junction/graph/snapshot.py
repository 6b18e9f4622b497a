"""Build a GraphStore from a nested page/block export.

A snapshot is a list of pages (or a mapping with a ``pages`` list). Pages carry
``title``, blocks carry ``string``; both may carry ``uid``, ``children``,
``order`` and an explicit ``refs`` list of uids. Without
``refs``, references are parsed from the text, and linked titles that have no
page yet get an empty page, the way the host graph creates them on link.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from note_junction.graph.parsing import parse_references
from note_junction.graph.store import EntityRecord, GraphStore
from note_junction.utils.io_utils import read_structured_file

logger = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """Raised when a snapshot document is malformed."""


def generated_uid(*parts: str) -> str:
    """Deterministic 9-character uid for nodes exported without one."""
    digest = hashlib.sha256("\x1f".join(parts).encode("utf-8")).hexdigest()
    return digest[:9]


@dataclass
class _PendingNode:
    uid: str
    text: str
    is_page: bool
    parents: tuple[str, ...]
    page: str
    order: int
    explicit_refs: Optional[list[str]]
    children: list[str] = field(default_factory=list)


class _SnapshotReader:
    def __init__(self) -> None:
        self.nodes: dict[str, _PendingNode] = {}

    def _register(self, node: _PendingNode, where: str) -> None:
        if node.uid in self.nodes:
            raise SnapshotError(f"Duplicate uid {node.uid!r} at {where}")
        self.nodes[node.uid] = node

    def read_page(self, raw: Any, index: int) -> None:
        where = f"pages[{index}]"
        if not isinstance(raw, Mapping):
            raise SnapshotError(f"{where} must be a mapping, got {type(raw).__name__}")
        title = raw.get("title")
        if not isinstance(title, str) or not title:
            raise SnapshotError(f"{where} is missing a page title")

        uid = str(raw.get("uid") or generated_uid("page", title))
        page = _PendingNode(
            uid=uid,
            text=title,
            is_page=True,
            parents=(),
            page=uid,
            order=index,
            explicit_refs=_explicit_refs(raw, where),
        )
        self._register(page, where)
        self._read_children(raw, page, where)

    def _read_children(self, raw: Mapping[str, Any], parent: _PendingNode, where: str) -> None:
        children = raw.get("children") or []
        if not isinstance(children, list):
            raise SnapshotError(f"{where}.children must be a list")

        for position, child in enumerate(children):
            child_where = f"{where}.children[{position}]"
            if not isinstance(child, Mapping):
                raise SnapshotError(f"{child_where} must be a mapping, got {type(child).__name__}")
            text = child.get("string")
            if not isinstance(text, str):
                raise SnapshotError(f"{child_where} is missing a block string")

            block = _PendingNode(
                uid=str(child.get("uid") or generated_uid("block", parent.uid, str(position))),
                text=text,
                is_page=False,
                parents=parent.parents + (parent.uid,),
                page=parent.page,
                order=int(child.get("order", position)),
                explicit_refs=_explicit_refs(child, child_where),
            )
            self._register(block, child_where)
            parent.children.append(block.uid)
            self._read_children(child, block, child_where)

    def build(self) -> GraphStore:
        titles = {node.text: node.uid for node in self.nodes.values() if node.is_page}
        created: dict[str, EntityRecord] = {}

        def page_uid(title: str) -> str:
            if title in titles:
                return titles[title]
            uid = generated_uid("page", title)
            titles[title] = uid
            created[uid] = EntityRecord(uid=uid, text=title, is_page=True, page=uid)
            return uid

        records = []
        for node in self.nodes.values():
            if node.explicit_refs is not None:
                refs = node.explicit_refs
            else:
                parsed = parse_references(node.text)
                refs = [page_uid(title) for title in parsed.page_titles]
                for block_uid in parsed.block_uids:
                    if block_uid in self.nodes:
                        refs.append(block_uid)
                    else:
                        logger.debug(f"Dropping unresolved block reference (({block_uid})) in {node.uid}")

            records.append(
                EntityRecord(
                    uid=node.uid,
                    text=node.text,
                    is_page=node.is_page,
                    refs=tuple(dict.fromkeys(refs)),
                    parents=node.parents,
                    page=node.page,
                    children=tuple(node.children),
                    order=node.order,
                )
            )

        try:
            store = GraphStore(records + list(created.values()))
        except ValueError as e:
            raise SnapshotError(str(e)) from e

        logger.info(f"Loaded snapshot with {len(store)} entities ({len(created)} pages created from links)")
        return store


def _explicit_refs(raw: Mapping[str, Any], where: str) -> Optional[list[str]]:
    refs = raw.get("refs")
    if refs is None:
        return None
    if not isinstance(refs, list) or not all(isinstance(r, str) for r in refs):
        raise SnapshotError(f"{where}.refs must be a list of uids")
    return list(refs)


def store_from_nodes(document: Any) -> GraphStore:
    """Build a GraphStore from a parsed snapshot document.

    Args:
        document: List of page mappings, or a mapping with a ``pages`` list

    Returns:
        GraphStore holding every page and block of the snapshot

    Raises:
        SnapshotError: If the document is malformed

    """
    pages = document.get("pages") if isinstance(document, Mapping) else document
    if not isinstance(pages, list):
        raise SnapshotError("Snapshot must be a list of pages or a mapping with a 'pages' list")

    reader = _SnapshotReader()
    for index, raw in enumerate(pages):
        reader.read_page(raw, index)
    return reader.build()


def load_snapshot(path: str) -> GraphStore:
    """Load a JSON or YAML snapshot file into a GraphStore."""
    logger.info(f"Reading graph snapshot from {path}")
    return store_from_nodes(read_structured_file(path))
