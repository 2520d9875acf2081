from __future__ import annotations

from .tree import Node


def css_selector(node: Node) -> str:
    """Short display label for a node: ``tag#id``, ``tag.class`` or ``tag``.

    Values are not escaped, so the result is not meant to be fed back into a
    selector engine.
    """

    name = node.tag.lower()
    element_id = node.get("id")
    if element_id:
        return f"{name}#{element_id}"
    classes = (node.get("class") or "").split()
    return f"{name}.{classes[0]}" if classes else name
