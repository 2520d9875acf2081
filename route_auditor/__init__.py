"""SEO and accessibility auditing for a single rendered HTML page."""

from .emitter import emit
from .locator import locate_element, locate_query
from .models import Finding, Locator, Severity
from .rules import CHECKS, run_seo_a11y_audit
from .selector import css_selector
from .tree import DocumentTree, Node, parse_document

__all__ = [
    "CHECKS",
    "DocumentTree",
    "Finding",
    "Locator",
    "Node",
    "Severity",
    "css_selector",
    "emit",
    "locate_element",
    "locate_query",
    "parse_document",
    "run_seo_a11y_audit",
]
