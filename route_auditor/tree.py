"""
Index-based document tree built from BeautifulSoup output.

BeautifulSoup objects hold parent/sibling references in both directions. The
audit only needs attribute lookups, document-order scans and text content, so
the parsed soup is flattened once into a list of ``Node`` records whose
relationships are plain list indices. List order is document order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Mapping

from bs4 import BeautifulSoup, FeatureNotFound
from bs4.element import NavigableString, PreformattedString, Tag

TEXT = "#text"


def soup_of(html: str) -> BeautifulSoup:
    try:
        return BeautifulSoup(html, "lxml")
    except FeatureNotFound:
        return BeautifulSoup(html, "html.parser")


def attr_text(value: object) -> str:
    # bs4 splits multi-valued attributes such as class and rel into lists.
    if isinstance(value, list):
        return " ".join(str(part) for part in value)
    return str(value)


@dataclass(slots=True)
class Node:
    index: int
    tag: str
    parent: int | None = None
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[int] = field(default_factory=list)
    text: str = ""
    synthetic: bool = False

    @property
    def is_element(self) -> bool:
        return self.tag != TEXT

    def get(self, name: str) -> str | None:
        return self.attrs.get(name.lower())


class DocumentTree:
    """Flat arena of element and text nodes for one parsed document.

    The arena always has an ``html`` root at index 0 with ``head`` and
    ``body`` elements below it. Elements the markup left out are synthesised
    and flagged with ``synthetic=True``; they have no source text.
    """

    def __init__(self) -> None:
        self.nodes: list[Node] = []

    # ------------------------------------------------------------------
    @classmethod
    def parse(cls, html: str) -> "DocumentTree":
        soup = soup_of(html)
        tree = cls()

        top_level = list(soup.contents)
        html_tag = next(
            (item for item in top_level if isinstance(item, Tag) and item.name.lower() == "html"),
            None,
        )
        if html_tag is not None:
            position = top_level.index(html_tag)
            root = tree._add("html", None, attrs=_attrs_of(html_tag))
            contents = top_level[:position] + list(html_tag.contents) + top_level[position + 1 :]
        else:
            root = tree._add("html", None, synthetic=True)
            contents = top_level

        if soup.find("head") is None:
            tree._add("head", root.index, synthetic=True)

        stack: list[tuple[object, int]] = [(item, root.index) for item in reversed(contents)]
        while stack:
            item, parent_index = stack.pop()
            if isinstance(item, Tag):
                node = tree._add(item.name.lower(), parent_index, attrs=_attrs_of(item))
                # Template contents are inert and invisible to document queries.
                if node.tag == "template":
                    continue
                stack.extend((child, node.index) for child in reversed(item.contents))
            elif isinstance(item, NavigableString) and not isinstance(item, PreformattedString):
                tree._add(TEXT, parent_index, text=str(item))

        if soup.find("body") is None:
            tree._add("body", root.index, synthetic=True)

        return tree

    def _add(
        self,
        tag: str,
        parent: int | None,
        *,
        attrs: dict[str, str] | None = None,
        text: str = "",
        synthetic: bool = False,
    ) -> Node:
        node = Node(
            index=len(self.nodes),
            tag=tag,
            parent=parent,
            attrs=attrs or {},
            text=text,
            synthetic=synthetic,
        )
        self.nodes.append(node)
        if parent is not None:
            self.nodes[parent].children.append(node.index)
        return node

    # ------------------------------------------------------------------
    @property
    def root(self) -> Node:
        return self.nodes[0]

    @property
    def head(self) -> Node:
        found = self.first("head")
        assert found is not None
        return found

    @property
    def body(self) -> Node:
        found = self.first("body")
        assert found is not None
        return found

    def elements(self, *tags: str) -> Iterator[Node]:
        """Yield elements in document order, optionally limited to ``tags``."""

        wanted = {tag.lower() for tag in tags}
        for node in self.nodes:
            if not node.is_element:
                continue
            if wanted and node.tag not in wanted:
                continue
            yield node

    def first(self, tag: str, attrs: Mapping[str, str] | None = None) -> Node | None:
        """Return the first ``tag`` element whose attributes equal ``attrs``."""

        for node in self.elements(tag):
            if attrs and any(node.get(name) != value for name, value in attrs.items()):
                continue
            return node
        return None

    def with_attribute(self, name: str) -> Iterator[Node]:
        key = name.lower()
        for node in self.elements():
            if key in node.attrs:
                yield node

    def parent_of(self, node: Node) -> Node | None:
        if node.parent is None:
            return None
        return self.nodes[node.parent]

    def children_of(self, node: Node) -> list[Node]:
        return [self.nodes[index] for index in node.children]

    def text_content(self, node: Node) -> str:
        if not node.is_element:
            return node.text
        parts: list[str] = []
        stack = list(reversed(node.children))
        while stack:
            child = self.nodes[stack.pop()]
            if child.is_element:
                stack.extend(reversed(child.children))
            else:
                parts.append(child.text)
        return "".join(parts)


def _attrs_of(tag: Tag) -> dict[str, str]:
    return {str(name).lower(): attr_text(value) for name, value in tag.attrs.items()}


def parse_document(html: str) -> DocumentTree:
    return DocumentTree.parse(html)
