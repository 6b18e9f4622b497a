"""Reference parsing for page and block text.

Recognised forms, in order of appearance in the text:
    [[Page]] and #[[Page]]   page links
    #tag                     page tag
    attribute:: value        the attribute name links to its page
    ((block-uid))            block reference
"""

import re
from dataclasses import dataclass, field

PAGE_LINK = re.compile(r"\[\[([^\[\]]+)\]\]")
TAG = re.compile(r"(?<![\w#])#([\w\-/]+(?:\.[\w\-/]+)*)")
ATTRIBUTE = re.compile(r"^([^:\n`\[\]]+?)::")
BLOCK_REF = re.compile(r"\(\(([\w\-]+)\)\)")


@dataclass
class ParsedReferences:
    page_titles: list[str] = field(default_factory=list)
    block_uids: list[str] = field(default_factory=list)


def parse_references(text: str) -> ParsedReferences:
    """Extract referenced page titles and block uids from ``text``.

    Each title and uid is reported once, at its first appearance.
    """
    titles: list[tuple[int, str]] = []
    attribute = ATTRIBUTE.match(text)
    if attribute:
        titles.append((attribute.start(1), attribute.group(1).strip()))
    titles.extend((m.start(1), m.group(1).strip()) for m in PAGE_LINK.finditer(text))
    titles.extend((m.start(1), m.group(1)) for m in TAG.finditer(text))
    titles.sort(key=lambda item: item[0])

    block_uids = [m.group(1) for m in BLOCK_REF.finditer(text)]
    return ParsedReferences(
        page_titles=list(dict.fromkeys(title for _, title in titles if title)),
        block_uids=list(dict.fromkeys(block_uids)),
    )
