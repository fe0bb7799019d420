"""Terminal text utilities: ANSI stripping, width measurement, alignment."""

from __future__ import annotations

import re
import unicodedata
from typing import Protocol

import grapheme
import wcwidth as _wcwidth

from mdt.term.events import Alignment


class Writer(Protocol):
    """Anything with a text ``write`` method, such as ``sys.stdout``."""

    def write(self, data: str) -> object: ...


# CSI sequences plus OSC 8 hyperlinks
_STRIP_RE = re.compile(
    r"\x1b\[[0-9;]*[mGKHJ]"
    r"|\x1b\]8;;[^\x07]*\x07"
)


def strip_ansi(text: str) -> str:
    return _STRIP_RE.sub("", text)


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------


def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Zero-width characters count 0, emoji sequences count 2, everything else
    is delegated to wcwidth on the first codepoint.
    """
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):  # VS16, ZWJ
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first_cp = ord(g[0])
    if first_cp >= 0x1F000 or 0x2600 <= first_cp <= 0x27BF:
        return 2

    cat = unicodedata.category(g[0])
    if cat.startswith("M") or cat == "Cf":
        return 0

    return max(_wcwidth.wcwidth(g[0]), 0)


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*.

    ANSI escape sequences are ignored and tabs count as 3 columns.
    """
    if not text:
        return 0

    stripped = strip_ansi(text).replace("\t", "   ")
    if stripped.isascii() and stripped.isprintable():
        return len(stripped)

    return sum(_grapheme_width(g) for g in grapheme.graphemes(stripped))


def align_to_width(text: str, width: int, alignment: Alignment = None) -> str:
    """Pad *text* with spaces to *width* visible columns.

    Text already at or beyond *width* is returned unchanged.
    """
    gap = width - visible_width(text)
    if gap <= 0:
        return text
    if alignment == "right":
        return " " * gap + text
    if alignment == "center":
        left = gap // 2
        return " " * left + text + " " * (gap - left)
    return text + " " * gap
