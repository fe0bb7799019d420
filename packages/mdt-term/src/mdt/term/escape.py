"""Escaping for the ``<img>`` placeholder written in place of images."""

from __future__ import annotations

import html
from urllib.parse import quote

# Characters left untouched in an href: URL syntax plus already-encoded escapes
_HREF_SAFE = "-_.!~*'();/?:@&=+$,%#"


def escape_href(dest: str) -> str:
    return html.escape(quote(dest, safe=_HREF_SAFE), quote=True)


def escape_attr(value: str) -> str:
    return html.escape(value, quote=True)


def image_placeholder(dest: str, title: str = "") -> str:
    parts = [f'<img src="{escape_href(dest)}" alt=""']
    if title:
        parts.append(f' title="{escape_attr(title)}"')
    parts.append("/>")
    return "".join(parts)
