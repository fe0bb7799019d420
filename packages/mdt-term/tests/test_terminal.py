"""Tests for display geometry and capability detection."""

from __future__ import annotations

import os
from types import SimpleNamespace

import pytest

from mdt.term import terminal
from mdt.term.terminal import DEFAULT_COLUMNS, DEFAULT_ROWS, detect_capabilities, terminal_size

_ENV = (
    "COLORTERM",
    "TERM_PROGRAM",
    "KITTY_WINDOW_ID",
    "GHOSTTY_RESOURCES_DIR",
    "WEZTERM_PANE",
    "ITERM_SESSION_ID",
)


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.setenv("TERM", "xterm-256color")
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestDetectCapabilities:
    def test_plain_terminal(self, clean_env) -> None:
        assert detect_capabilities().true_color is False

    @pytest.mark.parametrize("value", ["truecolor", "24bit", "TrueColor"])
    def test_colorterm(self, clean_env, value) -> None:
        clean_env.setenv("COLORTERM", value)
        assert detect_capabilities().true_color is True

    def test_known_terminal_program(self, clean_env) -> None:
        clean_env.setenv("TERM_PROGRAM", "vscode")
        assert detect_capabilities().true_color is True

    def test_kitty_window(self, clean_env) -> None:
        clean_env.setenv("KITTY_WINDOW_ID", "1")
        assert detect_capabilities().true_color is True

    def test_ghostty_term(self, clean_env) -> None:
        clean_env.setenv("TERM", "xterm-ghostty")
        assert detect_capabilities().true_color is True

    def test_iterm_session(self, clean_env) -> None:
        clean_env.setenv("ITERM_SESSION_ID", "w0t0p0")
        assert detect_capabilities().true_color is True

    def test_empty_marker_is_ignored(self, clean_env) -> None:
        clean_env.setenv("WEZTERM_PANE", "")
        assert detect_capabilities().true_color is False


class TestTerminalSize:
    def test_reported_size(self, monkeypatch) -> None:
        monkeypatch.setattr(terminal.os, "get_terminal_size", lambda fd: os.terminal_size((120, 40)))
        monkeypatch.setattr(terminal, "sys", SimpleNamespace(stdout=SimpleNamespace(fileno=lambda: 1)))
        assert terminal_size() == (120, 40)

    def test_fallback_when_not_a_terminal(self, monkeypatch) -> None:
        def not_a_tty(fd):
            raise OSError("not a terminal")

        monkeypatch.setattr(terminal.os, "get_terminal_size", not_a_tty)
        assert terminal_size() == (DEFAULT_COLUMNS, DEFAULT_ROWS)

    def test_zero_size_falls_back(self, monkeypatch) -> None:
        monkeypatch.setattr(terminal.os, "get_terminal_size", lambda fd: os.terminal_size((0, 0)))
        monkeypatch.setattr(terminal, "sys", SimpleNamespace(stdout=SimpleNamespace(fileno=lambda: 1)))
        assert terminal_size() == (DEFAULT_COLUMNS, DEFAULT_ROWS)
