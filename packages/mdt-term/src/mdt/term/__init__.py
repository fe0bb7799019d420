"""mdt-term: render markdown to the terminal with colors, tables and highlighting."""

from mdt.term.colors import ColorAdapter, Span, SpanStyle
from mdt.term.config import RenderConfig, load_config
from mdt.term.errors import ConfigError, MdtError, RenderIOError, UnmappedColorError
from mdt.term.highlight import CodeBlockHighlighter
from mdt.term.parser import parse
from mdt.term.renderer import Renderer
from mdt.term.table import ASCII_BORDERS, UNICODE_BORDERS, BorderStyle, TableLayout
from mdt.term.terminal import detect_capabilities, terminal_size

__all__ = [
    "ASCII_BORDERS",
    "BorderStyle",
    "CodeBlockHighlighter",
    "ColorAdapter",
    "ConfigError",
    "MdtError",
    "RenderConfig",
    "RenderIOError",
    "Renderer",
    "Span",
    "SpanStyle",
    "TableLayout",
    "UNICODE_BORDERS",
    "UnmappedColorError",
    "detect_capabilities",
    "load_config",
    "parse",
    "terminal_size",
]
