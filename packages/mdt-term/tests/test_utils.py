"""Tests for width measurement and alignment helpers."""

from __future__ import annotations

from mdt.term.utils import align_to_width, strip_ansi, visible_width


class TestVisibleWidth:
    def test_empty(self) -> None:
        assert visible_width("") == 0

    def test_ascii(self) -> None:
        assert visible_width("hello") == 5

    def test_escape_codes_ignored(self) -> None:
        assert visible_width("\x1b[31mred\x1b[39m") == 3

    def test_osc8_hyperlink_ignored(self) -> None:
        assert visible_width("\x1b]8;;http://a\x07x\x1b]8;;\x07") == 1

    def test_wide_characters(self) -> None:
        assert visible_width("日本") == 4

    def test_combining_mark(self) -> None:
        assert visible_width("é") == 1

    def test_emoji(self) -> None:
        assert visible_width("👍") == 2

    def test_tab_counts_three(self) -> None:
        assert visible_width("\t") == 3


class TestStripAnsi:
    def test_removes_sgr(self) -> None:
        assert strip_ansi("\x1b[1mbold\x1b[22m") == "bold"

    def test_leaves_plain_text(self) -> None:
        assert strip_ansi("plain") == "plain"


class TestAlignToWidth:
    def test_left_default(self) -> None:
        assert align_to_width("ab", 4) == "ab  "

    def test_right(self) -> None:
        assert align_to_width("ab", 4, "right") == "  ab"

    def test_center_extra_space_goes_right(self) -> None:
        assert align_to_width("a", 4, "center") == " a  "

    def test_no_padding_when_full(self) -> None:
        assert align_to_width("abcd", 2) == "abcd"

    def test_pads_by_visible_width(self) -> None:
        assert align_to_width("\x1b[3mab\x1b[23m", 3) == "\x1b[3mab\x1b[23m "
