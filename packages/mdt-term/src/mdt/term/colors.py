"""Color Adapter: turns highlighted spans into SGR escape sequences.

Two modes, fixed at construction:

* truecolor -- every span gets ``ESC[38;2;R;G;Bm`` (and optionally
  ``ESC[48;2;R;G;Bm``) straight from its RGB triple.
* quantized -- the foreground is looked up in :data:`PALETTE`, a fixed
  solarized-to-ANSI table, and bold/italic/underline are switched on or off
  explicitly for every span.

The adapter keeps no state between calls.
"""

from __future__ import annotations

from dataclasses import dataclass

from mdt.term.errors import UnmappedColorError

RGB = tuple[int, int, int]

# ---------------------------------------------------------------------------
# SGR constants
# ---------------------------------------------------------------------------

RESET = "\x1b[0m"
RESET_COLOR = "\x1b[39m"

RED = "\x1b[31m"
GREEN = "\x1b[32m"
YELLOW = "\x1b[33m"

BOLD = "\x1b[1m"
BOLD_OFF = "\x1b[22m"
ITALIC = "\x1b[3m"
ITALIC_OFF = "\x1b[23m"
UNDERLINE = "\x1b[4m"
UNDERLINE_OFF = "\x1b[24m"
STRIKETHROUGH = "\x1b[9m"
STRIKETHROUGH_OFF = "\x1b[29m"

# ---------------------------------------------------------------------------
# Quantized palette (solarized -> 16-color ANSI)
# ---------------------------------------------------------------------------

PALETTE: dict[RGB, str] = {
    (0x00, 0x2B, 0x36): "\x1b[90m",  # base03  -> bright black
    (0x07, 0x36, 0x42): "\x1b[30m",  # base02  -> black
    (0x58, 0x6E, 0x75): "\x1b[92m",  # base01  -> bright green
    (0x65, 0x7B, 0x83): "\x1b[93m",  # base00  -> bright yellow
    (0x83, 0x94, 0x96): "\x1b[94m",  # base0   -> bright blue
    (0x93, 0xA1, 0xA1): "\x1b[96m",  # base1   -> bright cyan
    (0xEE, 0xE8, 0xD5): "\x1b[37m",  # base2   -> white
    (0xFD, 0xF6, 0xE3): "\x1b[97m",  # base3   -> bright white
    (0xB5, 0x89, 0x00): "\x1b[33m",  # yellow
    (0xCB, 0x4B, 0x16): "\x1b[91m",  # orange  -> bright red
    (0xDC, 0x32, 0x2F): "\x1b[31m",  # red
    (0xD3, 0x36, 0x82): "\x1b[35m",  # magenta
    (0x6C, 0x71, 0xC4): "\x1b[95m",  # violet  -> bright magenta
    (0x26, 0x8B, 0xD2): "\x1b[34m",  # blue
    (0x2A, 0xA1, 0x98): "\x1b[36m",  # cyan
    (0x85, 0x99, 0x00): "\x1b[32m",  # green
}

# Pygments style whose colors are all covered by PALETTE
QUANTIZED_THEME = "solarized-dark"


# ---------------------------------------------------------------------------
# Spans
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SpanStyle:
    """Highlight style of one span, as reported by the highlighter."""

    foreground: RGB | None = None
    background: RGB | None = None
    bold: bool = False
    italic: bool = False
    underline: bool = False


@dataclass(frozen=True)
class Span:
    style: SpanStyle
    text: str


def parse_hex_color(value: str | None) -> RGB | None:
    """Parse ``"dc322f"`` or ``"#dc322f"`` into an RGB triple."""
    if not value:
        return None
    value = value.lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    try:
        return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# ColorAdapter
# ---------------------------------------------------------------------------


class ColorAdapter:
    """Maps spans to escaped text in truecolor or quantized mode."""

    def __init__(self, truecolor: bool, *, background: bool = False) -> None:
        self.truecolor = truecolor
        self.background = background

    def render_span(self, span: Span) -> str:
        if self.truecolor:
            return self._truecolor(span)
        return self._quantized(span)

    def render_line(self, spans: list[Span]) -> str:
        """Render one line of spans, ending with a full reset."""
        return "".join(self.render_span(span) for span in spans) + RESET

    def _truecolor(self, span: Span) -> str:
        parts: list[str] = []
        style = span.style
        if self.background and style.background is not None:
            r, g, b = style.background
            parts.append(f"\x1b[48;2;{r};{g};{b}m")
        if style.foreground is not None:
            r, g, b = style.foreground
            parts.append(f"\x1b[38;2;{r};{g};{b}m")
        parts.append(span.text)
        return "".join(parts)

    def _quantized(self, span: Span) -> str:
        style = span.style
        if style.foreground is None:
            color = RESET_COLOR
        else:
            color = PALETTE.get(style.foreground)
            if color is None:
                raise UnmappedColorError(style.foreground)
        return "".join(
            (
                color,
                BOLD if style.bold else BOLD_OFF,
                ITALIC if style.italic else ITALIC_OFF,
                UNDERLINE if style.underline else UNDERLINE_OFF,
                span.text,
            )
        )
