"""
Recover approximate source positions for parsed nodes.

Parsing discards text offsets, so positions are re-derived by searching the
raw markup for the node's opening tag. When several elements share the same
identifying attribute value the first occurrence in the text wins, which may
not be the element being reported.
"""

from __future__ import annotations

import re

from .models import Locator
from .tree import Node

LOCATOR_ATTRIBUTES = ("id", "name", "property", "rel", "href", "src")
SNIPPET_BEFORE = 120
SNIPPET_AFTER = 240
QUERY_SNIPPET_PADDING = 120

LINE_BREAK = re.compile(r"\r\n|\r|\n")


def opening_tag_pattern(node: Node) -> str:
    tag = re.escape(node.tag.lower())
    for name in LOCATOR_ATTRIBUTES:
        value = node.get(name)
        if value and value.strip():
            return rf"<\s*{tag}[^>]*\b{name}\s*=\s*[\"']{re.escape(value)}[\"'][^>]*>"
    return rf"<\s*{tag}\b[^>]*>"


def position_of(html: str, index: int, snippet_end: int) -> Locator:
    before = html[:index]
    line = len(LINE_BREAK.split(before))
    line_start = max(before.rfind("\n"), before.rfind("\r"))
    column = index - line_start
    snippet = html[max(0, index - SNIPPET_BEFORE) : min(len(html), snippet_end)]
    return Locator(line=line, column=column, snippet=snippet.strip())


def locate_element(node: Node, html: str) -> Locator:
    try:
        pattern = re.compile(opening_tag_pattern(node), re.IGNORECASE)
    except re.error:
        return Locator()
    match = pattern.search(html)
    if match is None:
        return Locator()
    return position_of(html, match.start(), match.start() + SNIPPET_AFTER)


def locate_query(html: str, query: str) -> Locator:
    index = html.find(query)
    if index < 0:
        return Locator()
    return position_of(html, index, index + len(query) + QUERY_SNIPPET_PADDING)
