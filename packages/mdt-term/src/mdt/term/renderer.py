"""Render engine: turns a document event stream into escaped terminal text.

The engine pulls events one at a time and writes to the output as it goes.
It tracks a single, flat block state (nothing, a list, a table or a code
block). Tables and code blocks are buffered by their sub-engines and written
in one piece when the block closes. After the last event a reference list of
every link is appended.

Opening a list, table or code block while another one is open replaces it,
and closing any of them returns to the plain state. Nested lists therefore
lose the outer list's numbering once the inner list ends.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Iterable

from mdt.term import events as ev
from mdt.term.colors import (
    BOLD,
    BOLD_OFF,
    GREEN,
    ITALIC,
    ITALIC_OFF,
    RED,
    RESET_COLOR,
    STRIKETHROUGH,
    STRIKETHROUGH_OFF,
    UNDERLINE,
    UNDERLINE_OFF,
    YELLOW,
    ColorAdapter,
)
from mdt.term.config import RenderConfig
from mdt.term.errors import RenderIOError
from mdt.term.escape import image_placeholder
from mdt.term.highlight import CodeBlockHighlighter
from mdt.term.table import ASCII_BORDERS, UNICODE_BORDERS, TableLayout
from mdt.term.utils import Writer

logger = logging.getLogger(__name__)

QUOTE_INDENT = "   "

# ---------------------------------------------------------------------------
# Block states
# ---------------------------------------------------------------------------


@dataclass
class NilState:
    pass


@dataclass
class ListState:
    """``next_ordinal`` is ``None`` for bullet lists."""

    next_ordinal: int | None = None


@dataclass
class TableState:
    layout: TableLayout


@dataclass
class CodeState:
    highlighter: CodeBlockHighlighter


RenderState = NilState | ListState | TableState | CodeState


# ---------------------------------------------------------------------------
# Output sink
# ---------------------------------------------------------------------------


class _Sink:
    """Forwards writes to the real output, turning ``OSError`` into ``RenderIOError``."""

    def __init__(self, output: Writer) -> None:
        self._output = output

    def write(self, data: str) -> None:
        if not data:
            return
        try:
            self._output.write(data)
        except OSError as e:
            raise RenderIOError(f"Failed to write output: {e}", e) from e

    def flush(self) -> None:
        flush = getattr(self._output, "flush", None)
        if flush is None:
            return
        try:
            flush()
        except OSError as e:
            raise RenderIOError(f"Failed to flush output: {e}", e) from e


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------


class Renderer:
    """Renders one event stream per :meth:`render` call."""

    def __init__(self, config: RenderConfig | None = None) -> None:
        self.config = config or RenderConfig()
        self.adapter = ColorAdapter(self.config.truecolor, background=self.config.code_background)
        self.borders = ASCII_BORDERS if self.config.ascii_tables else UNICODE_BORDERS
        self._reset()

    def _reset(self) -> None:
        self.state: RenderState = NilState()
        self.links: list[tuple[str, str]] = []
        self.footnotes: dict[str, int] = {}
        self.indent_level = 0
        self._suppress_newline = False
        self._out = _Sink(io.StringIO())

    # -- public API ---------------------------------------------------------

    def render(self, events: Iterable[ev.Event], output: Writer) -> None:
        """Consume *events* and write the rendered document to *output*.

        The output is flushed at the end when it has a ``flush`` method.
        Raises :class:`RenderIOError` on the first failed write or flush;
        nothing else is written after it.
        """
        self._reset()
        self._out = _Sink(output)
        for event in events:
            self._handle(event)
        self._write_references()
        self._out.flush()

    def render_to_string(self, events: Iterable[ev.Event]) -> str:
        buf = io.StringIO()
        self.render(events, buf)
        return buf.getvalue()

    def footnote_number(self, name: str) -> int:
        """Return the number for footnote *name*, assigning the next one if unseen."""
        number = self.footnotes.get(name)
        if number is None:
            number = len(self.footnotes) + 1
            self.footnotes[name] = number
        return number

    # -- dispatch -----------------------------------------------------------

    def _handle(self, event: ev.Event) -> None:
        if isinstance(event, ev.Start):
            self.indent_level += 1
            self._start(event.tag)
        elif isinstance(event, ev.End):
            self.indent_level -= 1
            self._end(event.tag)
        elif isinstance(event, ev.Text):
            self._text(event.text)
        elif isinstance(event, ev.FootnoteRef):
            self._text(event.name)
        elif isinstance(event, ev.HardBreak):
            if self.config.hard_breaks:
                self._inline("\n")
        elif isinstance(event, ev.SoftBreak):
            if self.config.hard_breaks:
                self._inline(" ")

    def _start(self, tag: ev.Tag) -> None:
        state = self.state

        if isinstance(tag, ev.Paragraph):
            if not self._suppress_newline:
                self._write("\n")
            self._suppress_newline = False
        elif isinstance(tag, ev.Rule):
            self._write("\n" + "-" * self.config.width)
        elif isinstance(tag, ev.Header):
            self._write(f"\n{YELLOW}{'#' * tag.level} {RED}")
        elif isinstance(tag, ev.Table):
            self._write("\n")
            self._enter(TableState(TableLayout(tag.alignments, self.borders)))
        elif isinstance(tag, ev.TableHead):
            if isinstance(state, TableState):
                state.layout.phase = "head"
                state.layout.start_row()
        elif isinstance(tag, ev.TableRow):
            if isinstance(state, TableState):
                state.layout.start_row()
        elif isinstance(tag, ev.BlockQuote):
            self._write(f"\n{GREEN}{QUOTE_INDENT * self.indent_level}> ")
            self._suppress_newline = True
        elif isinstance(tag, ev.CodeBlock):
            self._write("\n")
            words = tag.info.split()
            highlighter = CodeBlockHighlighter(
                self.adapter,
                language=words[0] if words else None,
                theme=self.config.theme,
                indent=self.config.code_indent,
            )
            self._enter(CodeState(highlighter))
        elif isinstance(tag, ev.List):
            self._write("\n")
            self._enter(ListState(tag.start))
        elif isinstance(tag, ev.Item):
            self._write("\n")
            if isinstance(state, ListState) and state.next_ordinal is not None:
                self._write(f"{state.next_ordinal}. ")
                state.next_ordinal += 1
            else:
                self._write(f"{RED}* {RESET_COLOR}")
        elif isinstance(tag, ev.Emphasis):
            self._inline(ITALIC)
        elif isinstance(tag, ev.Strong):
            self._inline(BOLD)
        elif isinstance(tag, ev.Strikethrough):
            self._inline(STRIKETHROUGH)
        elif isinstance(tag, ev.Code):
            self._inline("`" + ITALIC)
        elif isinstance(tag, ev.Link):
            self._inline(UNDERLINE)
            self.links.append((tag.dest, tag.title))
        elif isinstance(tag, ev.Image):
            self._inline(image_placeholder(tag.dest, tag.title))
        elif isinstance(tag, ev.FootnoteDefinition):
            self._write(f"\n[^{self.footnote_number(tag.name)}] ")
            self._suppress_newline = True

    def _end(self, tag: ev.Tag) -> None:
        state = self.state

        if isinstance(tag, ev.Paragraph):
            self._write("\n")
        elif isinstance(tag, ev.Header):
            self._write(RESET_COLOR + "\n")
        elif isinstance(tag, ev.Table):
            if isinstance(state, TableState):
                state.layout.draw(self._out)
                self._enter(NilState())
        elif isinstance(tag, ev.TableHead):
            if isinstance(state, TableState):
                state.layout.phase = "body"
        elif isinstance(tag, ev.TableCell):
            if isinstance(state, TableState):
                state.layout.end_cell()
        elif isinstance(tag, ev.BlockQuote):
            self._write(RESET_COLOR)
        elif isinstance(tag, ev.CodeBlock):
            if isinstance(state, CodeState):
                state.highlighter.flush(self._out)
                self._enter(NilState())
            self._write("\n")
        elif isinstance(tag, ev.List):
            self._write("\n")
            self._enter(NilState())
        elif isinstance(tag, ev.Emphasis):
            self._inline(ITALIC_OFF)
        elif isinstance(tag, ev.Strong):
            self._inline(BOLD_OFF)
        elif isinstance(tag, ev.Strikethrough):
            self._inline(STRIKETHROUGH_OFF)
        elif isinstance(tag, ev.Code):
            self._inline("`" + ITALIC_OFF)
        elif isinstance(tag, ev.Link):
            self._inline(f"{UNDERLINE_OFF}[{len(self.links)}]")
        elif isinstance(tag, ev.FootnoteDefinition):
            self._write("\n")

    # -- output -------------------------------------------------------------

    def _enter(self, state: RenderState) -> None:
        if not isinstance(self.state, NilState) and not isinstance(state, NilState):
            logger.debug("%s replaces open %s", type(state).__name__, type(self.state).__name__)
        self.state = state

    def _write(self, data: str) -> None:
        self._out.write(data)

    def _inline(self, data: str) -> None:
        """Write inline output, or add it to the current cell inside a table."""
        if isinstance(self.state, TableState):
            self.state.layout.push(data)
        else:
            self._write(data)

    def _text(self, text: str) -> None:
        if isinstance(self.state, CodeState):
            self.state.highlighter.push(text)
        else:
            self._inline(text)

    def _write_references(self) -> None:
        for index, (dest, title) in enumerate(self.links, start=1):
            if title:
                self._write(f"[{index}] {title}: {dest}\n")
            else:
                self._write(f"[{index}] {dest}\n")
