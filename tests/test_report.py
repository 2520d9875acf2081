from __future__ import annotations

from route_auditor.models import Finding, Severity
from route_auditor.report import (
    build_summary,
    counts_by_severity,
    group_by_severity,
    render_markdown,
    render_text,
)
from route_auditor.rules import run_seo_a11y_audit


def _findings() -> list[Finding]:
    return [
        Finding(id="lang-ok", severity=Severity.SUCCESS, message="HTML lang present (en).", selector="html", line=1, column=1),
        Finding(
            id="title-missing",
            severity=Severity.ERROR,
            message="Missing <title>.",
            selector="head",
            recommendation="Add a descriptive, unique <title> (10-60 chars).",
        ),
        Finding(
            id="og-missing",
            severity=Severity.WARNING,
            message="Missing one or more OG tags (title/description/image).",
            selector="head",
            line=3,
            column=1,
            snippet="<head>\n<title></title>",
        ),
        Finding(id="img-alt-missing", severity=Severity.ERROR, message="1 image(s) missing alt."),
    ]


def test_group_by_severity_keeps_emission_order() -> None:
    groups = group_by_severity(_findings())

    assert list(groups) == [Severity.ERROR, Severity.WARNING, Severity.SUCCESS]
    assert [finding.id for finding in groups[Severity.ERROR]] == ["title-missing", "img-alt-missing"]


def test_counts_by_severity() -> None:
    assert counts_by_severity(_findings()) == {"error": 2, "warning": 1, "success": 1}
    assert counts_by_severity([]) == {"error": 0, "warning": 0, "success": 0}


def test_render_text_includes_detail() -> None:
    output = render_text(_findings())

    assert output.startswith("Findings (4)")
    assert "Error (2)" in output
    assert "Pass (1)" in output
    assert "Selector: head" in output
    assert "Location: line 3, col 1" in output
    assert "Suggested fix: Add a descriptive" in output


def test_render_text_empty() -> None:
    assert render_text([]) == "No findings."


def test_render_markdown_sections() -> None:
    report = render_markdown(_findings(), "https://example.com/")

    assert "# SEO & A11y Route Audit" in report
    assert "- URL: `https://example.com/`" in report
    assert "## Error" in report
    assert "## Warning" in report
    assert "## Pass" in report
    assert "```html" in report
    assert "(`img-alt-missing`)" in report


def test_render_markdown_empty_group() -> None:
    report = render_markdown([_findings()[0]])

    assert "## Error\n- None" in report


def test_build_summary() -> None:
    summary = build_summary(_findings(), "https://example.com/", {"status_code": 200, "error": None})

    assert summary["url"] == "https://example.com/"
    assert summary["counts"]["error"] == 2
    assert summary["findings"][0] == {
        "id": "lang-ok",
        "severity": "success",
        "message": "HTML lang present (en).",
        "selector": "html",
        "line": 1,
        "column": 1,
    }
    assert summary["fetch"]["status_code"] == 200
    assert "fetch" not in build_summary([])


def test_render_text_shows_snippet_rows() -> None:
    output = render_text(_findings())

    assert "      Snippet:\n        <head>\n        <title></title>" in output


def test_render_text_snippet_from_audit() -> None:
    output = render_text(run_seo_a11y_audit('<html lang="en"><title>Home</title></html>'))

    assert "<title>Home</title>" in output
