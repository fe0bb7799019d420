"""Markdown source -> document events, using ``markdown-it-py``.

markdown-it-py produces a flat token list with ``*_open`` / ``*_close`` pairs
and inline content in ``token.children`` of ``inline`` tokens. This module
walks that list lazily and yields :mod:`mdt.term.events` values in the shape
the renderer expects:

- Tight-list paragraphs (``hidden`` tokens) produce no events.
- Header cells sit directly inside ``TableHead``; only body rows get
  ``TableRow`` events.
- Fences, indented code and inline code carry their content as ``Text``.
- Raw HTML is folded into ``Text``.
"""

from __future__ import annotations

import logging
from typing import Iterator, Sequence

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.footnote import footnote_plugin

from mdt.term import events as ev

logger = logging.getLogger(__name__)

# CommonMark plus GFM tables, strikethrough and footnotes. Linkify is left off
# so linkify-it-py is not needed.
_md_parser = MarkdownIt("commonmark").enable(["table", "strikethrough"]).use(footnote_plugin)

_ALIGNMENTS: dict[str, ev.Alignment] = {
    "text-align:left": "left",
    "text-align:center": "center",
    "text-align:right": "right",
}

# Block tokens that carry no rendering of their own
_SKIPPED = {"tbody_open", "tbody_close", "footnote_block_open", "footnote_block_close", "footnote_anchor"}


def parse(source: str) -> Iterator[ev.Event]:
    """Yield the events of *source* in document order."""
    tokens = _md_parser.parse(source)
    yield from _block_events(tokens)


# ---------------------------------------------------------------------------
# Block tokens
# ---------------------------------------------------------------------------


def _table_alignments(tokens: Sequence[Token], start: int) -> tuple[ev.Alignment, ...]:
    """Collect column alignments from the header cells following ``table_open``."""
    alignments: list[ev.Alignment] = []
    for tok in tokens[start + 1 :]:
        if tok.type == "th_open":
            style = tok.attrGet("style")
            alignments.append(_ALIGNMENTS.get(str(style)) if style else None)
        elif tok.type == "thead_close":
            break
    return tuple(alignments)


def _open_tag(tokens: Sequence[Token], index: int) -> ev.Tag | None:
    tok = tokens[index]
    t = tok.type

    if t == "paragraph_open":
        return ev.Paragraph()
    if t == "heading_open":
        return ev.Header(int(tok.tag[1]))
    if t == "blockquote_open":
        return ev.BlockQuote()
    if t == "bullet_list_open":
        return ev.List(None)
    if t == "ordered_list_open":
        start = tok.attrGet("start")
        return ev.List(int(start) if start is not None else 1)
    if t == "list_item_open":
        return ev.Item()
    if t == "table_open":
        return ev.Table(_table_alignments(tokens, index))
    if t == "thead_open":
        return ev.TableHead()
    if t == "tr_open":
        return ev.TableRow()
    if t in ("th_open", "td_open"):
        return ev.TableCell()
    if t == "footnote_open":
        meta = tok.meta or {}
        return ev.FootnoteDefinition(_footnote_name(meta))
    return None


def _block_events(tokens: Sequence[Token]) -> Iterator[ev.Event]:
    stack: list[ev.Tag] = []
    in_head = False

    for index, tok in enumerate(tokens):
        t = tok.type

        if tok.hidden or t in _SKIPPED:
            continue

        if t == "inline":
            yield from _inline_events(tok.children or [])
        elif t in ("fence", "code_block"):
            tag = ev.CodeBlock(tok.info.strip() if t == "fence" else "")
            yield ev.Start(tag)
            yield ev.Text(tok.content)
            yield ev.End(tag)
        elif t == "hr":
            yield ev.Start(ev.Rule())
            yield ev.End(ev.Rule())
        elif t == "html_block":
            yield ev.Text(tok.content)
        elif t in ("tr_open", "tr_close") and in_head:
            continue
        elif tok.nesting == 1:
            tag = _open_tag(tokens, index)
            if tag is None:
                logger.debug("Ignoring unsupported block token %s", t)
                continue
            in_head = in_head or t == "thead_open"
            stack.append(tag)
            yield ev.Start(tag)
        elif tok.nesting == -1 and stack:
            in_head = in_head and t != "thead_close"
            yield ev.End(stack.pop())


# ---------------------------------------------------------------------------
# Inline tokens
# ---------------------------------------------------------------------------


def _footnote_name(meta: dict) -> str:
    label = meta.get("label")
    if label:
        return str(label)
    return str(meta.get("id", 0) + 1)


def _inline_events(children: Sequence[Token]) -> Iterator[ev.Event]:
    stack: list[ev.Tag] = []

    for tok in children:
        t = tok.type

        if t == "text":
            if tok.content:
                yield ev.Text(tok.content)
        elif t == "softbreak":
            yield ev.SoftBreak()
        elif t == "hardbreak":
            yield ev.HardBreak()
        elif t == "code_inline":
            yield ev.Start(ev.Code())
            yield ev.Text(tok.content)
            yield ev.End(ev.Code())
        elif t == "html_inline":
            yield ev.Text(tok.content)
        elif t == "footnote_ref":
            yield ev.FootnoteRef(_footnote_name(tok.meta or {}))
        elif t == "image":
            tag = ev.Image(str(tok.attrGet("src") or ""), str(tok.attrGet("title") or ""))
            yield ev.Start(tag)
            yield from _inline_events(tok.children or [])
            yield ev.End(tag)
        elif t in ("em_open", "strong_open", "s_open", "link_open"):
            if t == "em_open":
                tag = ev.Emphasis()
            elif t == "strong_open":
                tag = ev.Strong()
            elif t == "s_open":
                tag = ev.Strikethrough()
            else:
                tag = ev.Link(str(tok.attrGet("href") or ""), str(tok.attrGet("title") or ""))
            stack.append(tag)
            yield ev.Start(tag)
        elif t in ("em_close", "strong_close", "s_close", "link_close"):
            if stack:
                yield ev.End(stack.pop())
        elif tok.content:
            yield ev.Text(tok.content)
