"""
Fixed battery of SEO and accessibility checks for a single HTML page.

Each check reads the parsed tree and the raw markup and appends zero or more
findings through ``emit``. Checks run in ``CHECKS`` order and never read each
other's results, so the output order is the check order.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Callable

from .emitter import emit
from .models import Finding, Severity
from .tree import DocumentTree, Node, parse_document

TITLE_MIN, TITLE_MAX = 10, 60
DESCRIPTION_MIN, DESCRIPTION_MAX = 50, 160
HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
OG_PROPERTIES = ("og:title", "og:description", "og:image")

Check = Callable[[DocumentTree, str, list[Finding]], None]


def check_lang(tree: DocumentTree, html: str, findings: list[Finding]) -> None:
    lang = (tree.root.get("lang") or "").strip()
    if not lang:
        emit(
            findings,
            html,
            Severity.ERROR,
            "lang-missing",
            "Missing <html lang>.",
            tree.root,
            'Set the <html lang> attribute, e.g., <html lang="en">.',
        )
    else:
        emit(findings, html, Severity.SUCCESS, "lang-ok", f"HTML lang present ({lang}).", tree.root)


def check_title(tree: DocumentTree, html: str, findings: list[Finding]) -> None:
    title_node = tree.first("title")
    title = tree.text_content(title_node).strip() if title_node else ""
    if not title:
        emit(
            findings,
            html,
            Severity.ERROR,
            "title-missing",
            "Missing <title>.",
            title_node or tree.head,
            f"Add a descriptive, unique <title> ({TITLE_MIN}-{TITLE_MAX} chars).",
            query="<title>",
        )
    elif not TITLE_MIN <= len(title) <= TITLE_MAX:
        emit(
            findings,
            html,
            Severity.WARNING,
            "title-length",
            f"Title length {len(title)} (aim {TITLE_MIN}-{TITLE_MAX}).",
            title_node,
            "Rewrite title to recommended length.",
        )
    else:
        emit(findings, html, Severity.SUCCESS, "title-ok", f"Title present and well sized ({len(title)}).", title_node)


def check_meta_description(tree: DocumentTree, html: str, findings: list[Finding]) -> None:
    node = tree.first("meta", {"name": "description"})
    description = ((node.get("content") if node else None) or "").strip()
    if not description:
        emit(
            findings,
            html,
            Severity.WARNING,
            "meta-desc-missing",
            "Missing meta description.",
            tree.head,
            f'Add <meta name="description" content="..."> ({DESCRIPTION_MIN}-{DESCRIPTION_MAX} chars).',
            query='meta name="description"',
        )
    elif not DESCRIPTION_MIN <= len(description) <= DESCRIPTION_MAX:
        emit(
            findings,
            html,
            Severity.WARNING,
            "meta-desc-length",
            f"Meta description length {len(description)} (aim {DESCRIPTION_MIN}-{DESCRIPTION_MAX}).",
            node,
            "Rewrite description to recommended length.",
        )
    else:
        emit(findings, html, Severity.SUCCESS, "meta-desc-ok", "Meta description present and well sized.", node)


def check_canonical(tree: DocumentTree, html: str, findings: list[Finding]) -> None:
    node = tree.first("link", {"rel": "canonical"})
    if node is None or not (node.get("href") or "").strip():
        emit(
            findings,
            html,
            Severity.WARNING,
            "canonical-missing",
            "Canonical URL missing.",
            tree.head,
            'Add <link rel="canonical" href="...">.',
            query='link rel="canonical"',
        )
    else:
        emit(findings, html, Severity.SUCCESS, "canonical-ok", "Canonical URL present.", node)


def check_single_h1(tree: DocumentTree, html: str, findings: list[Finding]) -> None:
    h1s = list(tree.elements("h1"))
    if len(h1s) != 1:
        emit(
            findings,
            html,
            Severity.WARNING,
            "h1-count",
            f"Expected exactly 1 <h1>, found {len(h1s)}.",
            h1s[0] if h1s else tree.body,
            "Use a single H1 and demote others to H2/H3 as needed.",
        )
    else:
        emit(findings, html, Severity.SUCCESS, "h1-ok", "Exactly one H1 present.", h1s[0])


def check_heading_order(tree: DocumentTree, html: str, findings: list[Finding]) -> None:
    headings = list(tree.elements(*HEADING_TAGS))
    previous = 0
    jumps = 0
    for index, heading in enumerate(headings):
        level = int(heading.tag[1])
        if previous and level - previous > 1:
            jumps += 1
            emit(
                findings,
                html,
                Severity.WARNING,
                f"heading-order-{index}",
                f"Heading jumps from H{previous} to H{level}.",
                heading,
                "Adjust heading levels to avoid skipping levels.",
            )
        previous = level
    if jumps == 0 and headings:
        emit(findings, html, Severity.SUCCESS, "heading-order-ok", "Heading hierarchy is consistent.", headings[0])


def check_open_graph(tree: DocumentTree, html: str, findings: list[Finding]) -> None:
    tags = [tree.first("meta", {"property": prop}) for prop in OG_PROPERTIES]
    if all(tags):
        emit(findings, html, Severity.SUCCESS, "og-ok", "Open Graph tags present (title/description/image).", tags[0])
    else:
        emit(
            findings,
            html,
            Severity.WARNING,
            "og-missing",
            "Missing one or more OG tags (title/description/image).",
            tree.head,
            "Add og:title, og:description, and og:image meta tags.",
        )


def check_twitter_card(tree: DocumentTree, html: str, findings: list[Finding]) -> None:
    node = tree.first("meta", {"name": "twitter:card"})
    if node is not None:
        emit(findings, html, Severity.SUCCESS, "twitter-card-ok", "Twitter Card present.", node)
    else:
        emit(
            findings,
            html,
            Severity.WARNING,
            "twitter-card-missing",
            "Twitter Card missing.",
            tree.head,
            'Add <meta name="twitter:card" content="summary_large_image">.',
        )


def check_image_alt(tree: DocumentTree, html: str, findings: list[Finding]) -> None:
    images = list(tree.elements("img"))
    missing = [img for img in images if not (img.get("alt") or "").strip()]
    if missing:
        emit(
            findings,
            html,
            Severity.ERROR,
            "img-alt-missing",
            f"{len(missing)} image(s) missing alt.",
            missing[0],
            "Add concise, meaningful alt text for non-decorative images.",
        )
    elif images:
        emit(findings, html, Severity.SUCCESS, "img-alt-ok", "All images have alt text.", images[0])


def accessible_name(tree: DocumentTree, anchor: Node) -> str:
    text = re.sub(r"\s+", " ", tree.text_content(anchor)).strip()
    return text or (anchor.get("aria-label") or "").strip()


def check_link_names(tree: DocumentTree, html: str, findings: list[Finding]) -> None:
    anchors = list(tree.elements("a"))
    nameless = [anchor for anchor in anchors if not accessible_name(tree, anchor)]
    if nameless:
        emit(
            findings,
            html,
            Severity.ERROR,
            "link-name-missing",
            f"{len(nameless)} link(s) lack accessible names.",
            nameless[0],
            "Provide link text or aria-label that describes the destination.",
        )
    elif anchors:
        emit(findings, html, Severity.SUCCESS, "link-name-ok", "All links have accessible names.", anchors[0])


def check_link_rel(tree: DocumentTree, html: str, findings: list[Finding]) -> None:
    anchors = list(tree.elements("a"))
    new_tab = [anchor for anchor in anchors if anchor.get("target") == "_blank"]
    unsafe = [anchor for anchor in new_tab if not re.search(r"noopener|noreferrer", (anchor.get("rel") or "").lower())]
    if unsafe:
        emit(
            findings,
            html,
            Severity.WARNING,
            "link-rel-missing",
            f"{len(unsafe)} link(s) use target=_blank without rel=noopener.",
            new_tab[0],
            'Add rel="noopener" (or rel="noopener noreferrer") to external links opening in new tab.',
        )
    elif anchors:
        emit(
            findings,
            html,
            Severity.SUCCESS,
            "link-rel-ok",
            "All external links use rel=noopener when target=_blank.",
            anchors[0],
        )


def check_duplicate_ids(tree: DocumentTree, html: str, findings: list[Finding]) -> None:
    counts = Counter(node.attrs["id"] for node in tree.with_attribute("id"))
    duplicated = [value for value, count in counts.items() if count > 1]
    if duplicated:
        emit(
            findings,
            html,
            Severity.WARNING,
            "dup-ids",
            f"{len(duplicated)} duplicate id(s) detected.",
            _first_with_id(tree, duplicated[0]),
            "Ensure IDs are unique per element.",
        )
    else:
        emit(findings, html, Severity.SUCCESS, "dup-ids-ok", "No duplicate ids found.", tree.root)


def _first_with_id(tree: DocumentTree, value: str) -> Node | None:
    return next((node for node in tree.with_attribute("id") if node.attrs["id"] == value), None)


CHECKS: tuple[Check, ...] = (
    check_lang,
    check_title,
    check_meta_description,
    check_canonical,
    check_single_h1,
    check_heading_order,
    check_open_graph,
    check_twitter_card,
    check_image_alt,
    check_link_names,
    check_link_rel,
    check_duplicate_ids,
)


def run_seo_a11y_audit(html: str) -> list[Finding]:
    """Audit one HTML document and return findings in check order."""

    tree = parse_document(html)
    findings: list[Finding] = []
    for check in CHECKS:
        check(tree, html, findings)
    return findings
