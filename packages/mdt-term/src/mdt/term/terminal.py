"""Display geometry and color capability detection."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

DEFAULT_COLUMNS = 80
DEFAULT_ROWS = 24


@dataclass(frozen=True)
class TerminalCapabilities:
    true_color: bool


def terminal_size() -> tuple[int, int]:
    """Return ``(columns, rows)`` of the terminal attached to stdout.

    Falls back to 80x24 when stdout is not a terminal (pipes, tests).
    """
    try:
        size = os.get_terminal_size(sys.stdout.fileno())
    except (ValueError, OSError):
        return DEFAULT_COLUMNS, DEFAULT_ROWS
    return size.columns or DEFAULT_COLUMNS, size.lines or DEFAULT_ROWS


# Variables set only by terminals known to render 24-bit color
_TRUECOLOR_MARKERS = ("KITTY_WINDOW_ID", "GHOSTTY_RESOURCES_DIR", "WEZTERM_PANE", "ITERM_SESSION_ID")
_TRUECOLOR_PROGRAMS = {"kitty", "ghostty", "wezterm", "iterm.app", "vscode", "alacritty"}
_TRUECOLOR_COLORTERMS = {"truecolor", "24bit"}


def detect_capabilities() -> TerminalCapabilities:
    env = os.environ
    true_color = (
        any(env.get(name) for name in _TRUECOLOR_MARKERS)
        or env.get("TERM_PROGRAM", "").lower() in _TRUECOLOR_PROGRAMS
        or "ghostty" in env.get("TERM", "").lower()
        or env.get("COLORTERM", "").lower() in _TRUECOLOR_COLORTERMS
    )
    return TerminalCapabilities(true_color=bool(true_color))
