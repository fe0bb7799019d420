"""Code block highlighting backed by Pygments.

Text of a fenced code block is buffered while the block is open. When it
closes, a lexer is resolved (declared language, then a sniff of the first
line, then plain text), the block is tokenized once, and each line's spans go
through the :class:`~mdt.term.colors.ColorAdapter`.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.lexers.special import TextLexer
from pygments.style import StyleMeta
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from mdt.term.colors import (
    QUANTIZED_THEME,
    RESET,
    ColorAdapter,
    Span,
    SpanStyle,
    parse_hex_color,
)
from mdt.term.utils import Writer

logger = logging.getLogger(__name__)

_LEXER_OPTIONS = {"stripnl": False}

_SHEBANG_RE = re.compile(r"^#!\s*(\S+)(?:\s+(\S+))?")

# Interpreters whose name is not itself a Pygments alias
_INTERPRETER_ALIASES = {
    "node": "javascript",
    "nodejs": "javascript",
    "deno": "typescript",
    "zsh": "bash",
    "dash": "bash",
}

_FIRST_LINE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"^<\?xml\b"), "xml"),
    (re.compile(r"^<\?php\b"), "php"),
    (re.compile(r"^\s*(<!DOCTYPE\s+html|<html\b)", re.IGNORECASE), "html"),
]


# ---------------------------------------------------------------------------
# Lexer resolution
# ---------------------------------------------------------------------------


def _lexer_by_name(name: str) -> Lexer | None:
    try:
        return get_lexer_by_name(name, **_LEXER_OPTIONS)
    except ClassNotFound:
        return None


def sniff_lexer(first_line: str) -> Lexer | None:
    """Guess a lexer from a shebang or a well-known document prologue."""
    match = _SHEBANG_RE.match(first_line)
    if match:
        interpreter = match.group(1).rsplit("/", 1)[-1]
        if interpreter == "env" and match.group(2):
            interpreter = match.group(2).rsplit("/", 1)[-1]
        for name in (interpreter, interpreter.rstrip("0123456789.")):
            lexer = _lexer_by_name(_INTERPRETER_ALIASES.get(name, name))
            if lexer is not None:
                return lexer
        return None

    for pattern, name in _FIRST_LINE_PATTERNS:
        if pattern.match(first_line):
            return _lexer_by_name(name)
    return None


def resolve_lexer(language: str | None, first_line: str | None) -> Lexer:
    if language:
        lexer = _lexer_by_name(language)
        if lexer is not None:
            return lexer
        logger.debug("No lexer for language %r; sniffing first line", language)
    if first_line:
        lexer = sniff_lexer(first_line)
        if lexer is not None:
            return lexer
    return TextLexer(**_LEXER_OPTIONS)


# ---------------------------------------------------------------------------
# Spans
# ---------------------------------------------------------------------------


def span_style(style: StyleMeta, ttype: Any) -> SpanStyle:
    """Look up *ttype* in *style*, falling back to its nearest styled parent.

    Lexers emit sub-types (``Token.Punctuation.Indicator`` and the like) that
    styles do not list.
    """
    while ttype.parent is not None and not style.styles_token(ttype):
        ttype = ttype.parent
    info = style.style_for_token(ttype)
    return SpanStyle(
        foreground=parse_hex_color(info["color"]),
        background=parse_hex_color(info["bgcolor"]),
        bold=bool(info["bold"]),
        italic=bool(info["italic"]),
        underline=bool(info["underline"]),
    )


def highlight_lines(code: str, lexer: Lexer, style: StyleMeta) -> list[list[Span]]:
    """Tokenize *code* in one pass and split the spans into lines.

    Plain text yields a single unstyled span per line.
    """
    if not code:
        return []
    if isinstance(lexer, TextLexer):
        return [[Span(SpanStyle(), line)] if line else [] for line in code.splitlines()]

    lines: list[list[Span]] = [[]]
    for ttype, value in lexer.get_tokens(code):
        for index, part in enumerate(value.split("\n")):
            if index:
                lines.append([])
            if part:
                lines[-1].append(Span(span_style(style, ttype), part))
    # the lexer guarantees a trailing newline, which opens one empty line too many
    if not lines[-1]:
        lines.pop()
    return lines


# ---------------------------------------------------------------------------
# CodeBlockHighlighter
# ---------------------------------------------------------------------------


class CodeBlockHighlighter:
    """Buffers one code block and writes it highlighted on :meth:`flush`."""

    def __init__(
        self,
        adapter: ColorAdapter,
        *,
        language: str | None = None,
        theme: str = "monokai",
        indent: int = 2,
    ) -> None:
        self.adapter = adapter
        self.language = language
        self.theme = theme if adapter.truecolor else QUANTIZED_THEME
        self.indent = indent
        self._buffer: list[str] = []

    def push(self, text: str) -> None:
        self._buffer.append(text)

    @property
    def code(self) -> str:
        return "".join(self._buffer)

    def flush(self, output: Writer) -> None:
        code = self.code
        self._buffer.clear()

        first_line = code.split("\n", 1)[0] if code else None
        lexer = resolve_lexer(self.language, first_line)
        style = get_style_by_name(self.theme)
        logger.debug("Highlighting code block with %s (%s)", lexer.name, self.theme)

        prefix = " " * self.indent
        for spans in highlight_lines(code, lexer, style):
            output.write(prefix + self.adapter.render_line(spans) + "\n")
        output.write(RESET)
