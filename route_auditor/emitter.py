from __future__ import annotations

from .locator import locate_element, locate_query
from .models import Finding, Locator, Severity
from .selector import css_selector
from .tree import Node


def emit(
    findings: list[Finding],
    html: str,
    severity: Severity,
    finding_id: str,
    message: str,
    node: Node | None = None,
    recommendation: str | None = None,
    query: str | None = None,
) -> Finding:
    """Build a finding, append it to ``findings`` and return it.

    A node takes precedence over ``query``: the node's opening tag is searched
    for in ``html``. The literal query is only used when no node is given.
    """

    locator = Locator()
    if node is not None:
        locator = locate_element(node, html)
    elif query:
        locator = locate_query(html, query)

    finding = Finding(
        id=finding_id,
        severity=severity,
        message=message,
        selector=css_selector(node) if node is not None else None,
        line=locator.line,
        column=locator.column,
        snippet=locator.snippet,
        recommendation=recommendation,
    )
    findings.append(finding)
    return finding
