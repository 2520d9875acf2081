"""
Presentation helpers: group findings by severity and render them.
"""

from __future__ import annotations

from typing import Any, Sequence

from .models import SEVERITY_LABELS, Finding, Severity

GROUP_ORDER = (Severity.ERROR, Severity.WARNING, Severity.SUCCESS)
SEVERITY_ICONS = {
    Severity.SUCCESS: "[ok]",
    Severity.WARNING: "[!]",
    Severity.ERROR: "[x]",
}


def group_by_severity(findings: Sequence[Finding]) -> dict[Severity, list[Finding]]:
    groups: dict[Severity, list[Finding]] = {severity: [] for severity in GROUP_ORDER}
    for finding in findings:
        groups[finding.severity].append(finding)
    return groups


def counts_by_severity(findings: Sequence[Finding]) -> dict[str, int]:
    return {severity.value: len(items) for severity, items in group_by_severity(findings).items()}


def location_label(finding: Finding) -> str:
    parts = []
    if finding.line:
        parts.append(f"line {finding.line}")
    if finding.column:
        parts.append(f"col {finding.column}")
    return ", ".join(parts)


def render_text(findings: Sequence[Finding]) -> str:
    if not findings:
        return "No findings."
    lines = [f"Findings ({len(findings)})"]
    for severity, items in group_by_severity(findings).items():
        if not items:
            continue
        lines.append("")
        lines.append(f"{SEVERITY_LABELS[severity]} ({len(items)})")
        for finding in items:
            lines.append(f"  {SEVERITY_ICONS[severity]} {finding.message}")
            if finding.selector:
                lines.append(f"      Selector: {finding.selector}")
            location = location_label(finding)
            if location:
                lines.append(f"      Location: {location}")
            if finding.snippet:
                lines.append("      Snippet:")
                lines.extend(f"        {row}" for row in finding.snippet.splitlines())
            if finding.recommendation:
                lines.append(f"      Suggested fix: {finding.recommendation}")
    return "\n".join(lines)


def _markdown_finding(finding: Finding) -> str:
    lines = [f"- **{finding.message}** (`{finding.id}`)"]
    if finding.selector:
        lines.append(f"  - Selector: `{finding.selector}`")
    location = location_label(finding)
    if location:
        lines.append(f"  - Location: {location}")
    if finding.recommendation:
        lines.append(f"  - Suggested fix: {finding.recommendation}")
    if finding.snippet:
        lines.append("")
        lines.append("  ```html")
        lines.extend(f"  {row}" for row in finding.snippet.splitlines())
        lines.append("  ```")
    return "\n".join(lines)


def render_markdown(findings: Sequence[Finding], audited_url: str | None = None) -> str:
    groups = group_by_severity(findings)
    counts = counts_by_severity(findings)
    sections = []
    for severity, items in groups.items():
        body = "\n".join(_markdown_finding(finding) for finding in items) or "- None"
        sections.append(f"## {SEVERITY_LABELS[severity]}\n{body}")
    return f"""# SEO & A11y Route Audit

## Summary
- URL: `{audited_url or "n/a"}`
- Findings: {len(findings)}
- Errors: {counts["error"]}
- Warnings: {counts["warning"]}
- Passed: {counts["success"]}

{chr(10).join(sections)}
"""


def build_summary(
    findings: Sequence[Finding],
    audited_url: str | None = None,
    fetched: dict[str, Any] | None = None,
) -> dict[str, Any]:
    summary: dict[str, Any] = {
        "url": audited_url,
        "counts": counts_by_severity(findings),
        "findings": [finding.to_dict() for finding in findings],
    }
    if fetched is not None:
        summary["fetch"] = {
            "status_code": fetched.get("status_code"),
            "final_url": fetched.get("final_url"),
            "content_type": fetched.get("content_type"),
            "response_ms": fetched.get("response_ms"),
            "redirect_hops": fetched.get("redirect_hops"),
            "error": fetched.get("error"),
        }
    return summary
