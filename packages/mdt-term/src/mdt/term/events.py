"""Document event model consumed by the renderer.

A document is a flat, single-pass sequence of events. Block and inline
constructs are bracketed by ``Start(tag)`` / ``End(tag)`` pairs; content
arrives as ``Text`` runs in between.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

Alignment = Literal["left", "center", "right"] | None

# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Paragraph:
    pass


@dataclass(frozen=True)
class Rule:
    pass


@dataclass(frozen=True)
class Header:
    level: int


@dataclass(frozen=True)
class Table:
    alignments: tuple[Alignment, ...]


@dataclass(frozen=True)
class TableHead:
    pass


@dataclass(frozen=True)
class TableRow:
    pass


@dataclass(frozen=True)
class TableCell:
    pass


@dataclass(frozen=True)
class BlockQuote:
    pass


@dataclass(frozen=True)
class CodeBlock:
    info: str = ""


@dataclass(frozen=True)
class List:
    """A list block. ``start`` is ``None`` for bullet lists."""

    start: int | None = None


@dataclass(frozen=True)
class Item:
    pass


@dataclass(frozen=True)
class Emphasis:
    pass


@dataclass(frozen=True)
class Strong:
    pass


@dataclass(frozen=True)
class Strikethrough:
    pass


@dataclass(frozen=True)
class Code:
    """Inline code span."""


@dataclass(frozen=True)
class Link:
    dest: str
    title: str = ""


@dataclass(frozen=True)
class Image:
    dest: str
    title: str = ""


@dataclass(frozen=True)
class FootnoteDefinition:
    name: str


Tag = Union[
    Paragraph,
    Rule,
    Header,
    Table,
    TableHead,
    TableRow,
    TableCell,
    BlockQuote,
    CodeBlock,
    List,
    Item,
    Emphasis,
    Strong,
    Strikethrough,
    Code,
    Link,
    Image,
    FootnoteDefinition,
]

# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Start:
    tag: Tag


@dataclass(frozen=True)
class End:
    tag: Tag


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class SoftBreak:
    pass


@dataclass(frozen=True)
class HardBreak:
    pass


@dataclass(frozen=True)
class FootnoteRef:
    name: str


Event = Union[Start, End, Text, SoftBreak, HardBreak, FootnoteRef]
