"""Tests for markdown -> event conversion."""

from __future__ import annotations

import inspect

from mdt.term import events as ev
from mdt.term.parser import parse


def _events(source: str) -> list:
    return list(parse(source))


def _starts(source: str) -> list:
    return [e.tag for e in parse(source) if isinstance(e, ev.Start)]


class TestBlocks:
    def test_heading(self) -> None:
        assert _events("# H\n") == [ev.Start(ev.Header(1)), ev.Text("H"), ev.End(ev.Header(1))]

    def test_heading_level(self) -> None:
        assert _starts("### H\n") == [ev.Header(3)]

    def test_paragraph_with_emphasis(self) -> None:
        assert _events("Some *text*.\n") == [
            ev.Start(ev.Paragraph()),
            ev.Text("Some "),
            ev.Start(ev.Emphasis()),
            ev.Text("text"),
            ev.End(ev.Emphasis()),
            ev.Text("."),
            ev.End(ev.Paragraph()),
        ]

    def test_thematic_break(self) -> None:
        assert _events("---\n") == [ev.Start(ev.Rule()), ev.End(ev.Rule())]

    def test_block_quote(self) -> None:
        assert _starts("> q\n") == [ev.BlockQuote(), ev.Paragraph()]

    def test_html_block_folded_into_text(self) -> None:
        assert _events("<div>\nhi\n</div>\n") == [ev.Text("<div>\nhi\n</div>\n")]

    def test_parse_is_lazy(self) -> None:
        assert inspect.isgenerator(parse("x"))

    def test_empty_document(self) -> None:
        assert _events("") == []


class TestLists:
    def test_tight_bullet_list_has_no_paragraphs(self) -> None:
        assert _events("- a\n- b\n") == [
            ev.Start(ev.List(None)),
            ev.Start(ev.Item()),
            ev.Text("a"),
            ev.End(ev.Item()),
            ev.Start(ev.Item()),
            ev.Text("b"),
            ev.End(ev.Item()),
            ev.End(ev.List(None)),
        ]

    def test_loose_list_has_paragraphs(self) -> None:
        assert ev.Paragraph() in _starts("- a\n\n- b\n")

    def test_ordered_list_default_start(self) -> None:
        assert _starts("1. a\n")[0] == ev.List(1)

    def test_ordered_list_custom_start(self) -> None:
        assert _starts("3. a\n")[0] == ev.List(3)


class TestCode:
    def test_fence_keeps_info_string(self) -> None:
        tag = ev.CodeBlock("python linenos")
        assert _events("```python linenos\nx\n```\n") == [ev.Start(tag), ev.Text("x\n"), ev.End(tag)]

    def test_indented_code(self) -> None:
        tag = ev.CodeBlock("")
        assert _events("    x\n") == [ev.Start(tag), ev.Text("x\n"), ev.End(tag)]

    def test_inline_code(self) -> None:
        events = _events("`x`\n")
        assert events[1:4] == [ev.Start(ev.Code()), ev.Text("x"), ev.End(ev.Code())]


class TestTables:
    def test_header_cells_sit_directly_in_head(self) -> None:
        table = ev.Table((None, "right"))
        assert _events("| a | b |\n|---|--:|\n| c | d |\n") == [
            ev.Start(table),
            ev.Start(ev.TableHead()),
            ev.Start(ev.TableCell()),
            ev.Text("a"),
            ev.End(ev.TableCell()),
            ev.Start(ev.TableCell()),
            ev.Text("b"),
            ev.End(ev.TableCell()),
            ev.End(ev.TableHead()),
            ev.Start(ev.TableRow()),
            ev.Start(ev.TableCell()),
            ev.Text("c"),
            ev.End(ev.TableCell()),
            ev.Start(ev.TableCell()),
            ev.Text("d"),
            ev.End(ev.TableCell()),
            ev.End(ev.TableRow()),
            ev.End(table),
        ]

    def test_alignments(self) -> None:
        tag = _starts("|a|b|c|\n|:-|:-:|-:|\n|1|2|3|\n")[0]
        assert tag == ev.Table(("left", "center", "right"))


class TestInline:
    def test_soft_break(self) -> None:
        assert ev.SoftBreak() in _events("a\nb\n")

    def test_hard_break(self) -> None:
        assert ev.HardBreak() in _events("a  \nb\n")

    def test_strong_and_strikethrough(self) -> None:
        assert _starts("**a** ~~b~~\n")[1:] == [ev.Strong(), ev.Strikethrough()]

    def test_link_with_title(self) -> None:
        assert _starts('[x](http://a "T")\n')[1] == ev.Link("http://a", "T")

    def test_image_alt_text_follows_start(self) -> None:
        events = _events("![alt](a.png)\n")
        assert events[1:4] == [ev.Start(ev.Image("a.png")), ev.Text("alt"), ev.End(ev.Image("a.png"))]

    def test_inline_html_folded_into_text(self) -> None:
        assert ev.Text("<b>") in _events("a <b>x</b>\n")


class TestFootnotes:
    def test_reference_and_definition(self) -> None:
        events = _events("Text[^n].\n\n[^n]: Note.\n")
        assert ev.FootnoteRef("n") in events
        assert ev.Start(ev.FootnoteDefinition("n")) in events
        assert ev.Text("Note.") in events
