from __future__ import annotations

from route_auditor.tree import DocumentTree, parse_document


def test_parse_builds_root_head_and_body() -> None:
    tree = parse_document(
        '<html lang="en"><head><title>T</title></head><body><p class="a  b">x</p></body></html>'
    )

    assert tree.root.index == 0
    assert tree.root.tag == "html"
    assert tree.root.get("lang") == "en"
    assert not tree.root.synthetic
    assert tree.head.tag == "head"
    assert tree.body.tag == "body"
    assert not tree.head.synthetic
    assert not tree.body.synthetic


def test_multi_valued_attributes_are_joined() -> None:
    tree = parse_document('<p class="a  b">x</p><a rel="noopener  noreferrer" href="/x">y</a>')

    paragraph = tree.first("p")
    anchor = tree.first("a")
    assert paragraph is not None and anchor is not None
    assert paragraph.get("class") == "a b"
    assert anchor.get("rel") == "noopener noreferrer"


def test_attribute_lookup_is_case_insensitive_on_names() -> None:
    tree = parse_document('<html><body><div ID="main" Data-Role="x"></div></body></html>')

    div = tree.first("div")
    assert div is not None
    assert div.get("id") == "main"
    assert div.get("DATA-ROLE") == "x"


def test_missing_head_is_synthesised() -> None:
    tree = parse_document("<h1>A</h1><h3>B</h3>")

    assert tree.root.tag == "html"
    assert tree.head.synthetic
    assert tree.head.parent == tree.root.index
    assert [node.tag for node in tree.elements("h1", "h2", "h3")] == ["h1", "h3"]


def test_empty_document_still_has_structure() -> None:
    tree = DocumentTree.parse("")

    assert tree.root.synthetic
    assert tree.head.synthetic
    assert tree.body.synthetic
    assert [node.tag for node in tree.children_of(tree.root)] == ["head", "body"]


def test_elements_follow_document_order() -> None:
    tree = parse_document(
        "<html><body><div><h2>one</h2><section><h1>two</h1></section></div><h3>three</h3></body></html>"
    )

    headings = list(tree.elements("h1", "h2", "h3"))
    assert [node.tag for node in headings] == ["h2", "h1", "h3"]
    assert [node.index for node in headings] == sorted(node.index for node in headings)


def test_parent_and_children_are_indices() -> None:
    tree = parse_document("<html><head><title>T</title></head><body></body></html>")

    title = tree.first("title")
    assert title is not None
    parent = tree.parent_of(title)
    assert parent is not None and parent.tag == "head"
    assert title.index in parent.children
    assert tree.parent_of(tree.root) is None


def test_first_matches_attribute_values() -> None:
    tree = parse_document(
        '<html><head><meta name="keywords" content="a"><meta name="description" content="b"></head></html>'
    )

    node = tree.first("meta", {"name": "description"})
    assert node is not None
    assert node.get("content") == "b"
    assert tree.first("meta", {"name": "robots"}) is None


def test_with_attribute_includes_empty_values() -> None:
    tree = parse_document('<html><body><div id="a"></div><span id=""></span><p></p></body></html>')

    assert [node.tag for node in tree.with_attribute("id")] == ["div", "span"]


def test_text_content_skips_comments_and_descends() -> None:
    tree = parse_document('<html><body><a href="/x"><!-- note --><span>Go</span> home</a></body></html>')

    anchor = tree.first("a")
    assert anchor is not None
    assert tree.text_content(anchor) == "Go home"


def test_template_contents_are_not_flattened() -> None:
    tree = parse_document(
        '<html><body><template id="row"><a href="/x"></a><img src="a.png"><h3>T</h3></template>'
        "<p>after</p></body></html>"
    )

    template = tree.first("template")
    assert template is not None
    assert template.children == []
    assert tree.first("a") is None
    assert tree.first("img") is None
    assert tree.first("p") is not None
