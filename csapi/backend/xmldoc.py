"""XML documentation comments from documentation nodes.

Prose is wrapped to a maximum column width. A `[...]` span is one atomic
token: it is never split across lines, even when it contains spaces, because
it is a link that the link renderer replaces as a whole.
"""

from __future__ import annotations

import re
from typing import Callable

from ..ir import DocNode
from .util import escape_xml

PREFIX = "/// "

LinkRenderer = Callable[[str], "str | None"]

_TOKEN = re.compile(r"(?:\[[^\]]*\]|\S)+")
_LINK = re.compile(r"\[([^\]]+)\]")

_LIST_TYPES = {"bullet": "bullet", "ordinal": "number"}


def tokenize(text: str) -> list[str]:
    """Split prose on whitespace, keeping bracketed spans whole."""
    return _TOKEN.findall(text)


def render_token(token: str, link_renderer: LinkRenderer | None) -> str:
    """Escape a token and substitute its links."""
    parts: list[str] = []
    pos = 0
    for m in _LINK.finditer(token):
        parts.append(escape_xml(token[pos : m.start()]))
        rendered = link_renderer(m.group(1)) if link_renderer is not None else None
        if rendered is None:
            rendered = escape_xml(m.group(0))
        parts.append(rendered)
        pos = m.end()
    parts.append(escape_xml(token[pos:]))
    return "".join(parts)


def wrap(text: str, max_width: int, link_renderer: LinkRenderer | None = None) -> list[str]:
    """Wrap prose into comment lines no wider than max_width where possible.

    A single token wider than the limit gets a line of its own.
    """
    lines: list[str] = []
    current = ""
    for token in tokenize(text):
        word = render_token(token, link_renderer)
        if current == "":
            current = PREFIX + word
        elif len(current) + 1 + len(word) <= max_width:
            current += " " + word
        else:
            lines.append(current)
            current = PREFIX + word
    if current:
        lines.append(current)
    return lines


class _DocWriter:
    """Accumulates comment lines and tracks the open list block."""

    def __init__(self, max_width: int, link_renderer: LinkRenderer | None) -> None:
        self.max_width = max_width
        self.link_renderer = link_renderer
        self.lines: list[str] = []
        self.open_list: str | None = None

    def tag(self, text: str) -> None:
        self.lines.append(PREFIX + text)

    def prose(self, text: str) -> None:
        self.lines.extend(wrap(text, self.max_width, self.link_renderer))

    def close_list(self) -> None:
        if self.open_list is not None:
            self.tag("</list>")
            self.open_list = None

    def list_item(self, node: DocNode) -> None:
        list_type = _LIST_TYPES.get(node.li_type, "bullet")
        if self.open_list != list_type:
            self.close_list()
            self.tag('<list type="' + list_type + '">')
            self.open_list = list_type
        self.tag("<item><description>")
        self.prose(node.text)
        self.tag("</description></item>")

    def code(self, node: DocNode) -> None:
        self.tag("<code>")
        for text in node.lines:
            self.lines.append((PREFIX + escape_xml(text)).rstrip())
        self.tag("</code>")


def render_xml_doc(
    nodes: tuple[DocNode, ...] | list[DocNode],
    max_width: int,
    link_renderer: LinkRenderer | None = None,
) -> list[str]:
    """Render documentation nodes as `///` comment lines.

    Text, list and code nodes form the <summary>; notes follow it as
    <remarks>. Returns no lines when there is nothing to document.
    """
    body = [n for n in nodes if n.kind != "note"]
    notes = [n for n in nodes if n.kind == "note"]
    out = _DocWriter(max_width, link_renderer)
    paragraphs = sum(1 for n in body if n.kind == "text")
    if body:
        out.tag("<summary>")
        for node in body:
            if node.kind == "li":
                out.list_item(node)
                continue
            out.close_list()
            if node.kind == "code":
                out.code(node)
            elif paragraphs > 1:
                out.tag("<para>")
                out.prose(node.text)
                out.tag("</para>")
            else:
                out.prose(node.text)
        out.close_list()
        out.tag("</summary>")
    if notes:
        out.tag("<remarks>")
        for node in notes:
            out.prose(node.text)
        out.tag("</remarks>")
    return out.lines
