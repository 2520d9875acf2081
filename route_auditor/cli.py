"""
Single-route SEO & accessibility auditor.

Usage:
    route-auditor --html-file page.html
    route-auditor --url https://example.com/about
    route-auditor --base-url https://example.com --route /about --output-dir audit-output
"""

from __future__ import annotations

import argparse
import json
import os
from pathlib import Path
from typing import Any, Sequence

from .fetch import absolute_url_from_route, audit_url, is_bare_origin, normalize_url
from .models import SEVERITY_RANK, Finding, Severity
from .report import build_summary, counts_by_severity, render_markdown, render_text
from .rules import run_seo_a11y_audit

DEFAULT_TIMEOUT = 30


def _env_origins() -> list[str]:
    raw = os.getenv("ROUTE_AUDITOR_ALLOWED_ORIGINS", "")
    return [item.strip() for item in raw.split(",") if item.strip()]


def _env_timeout() -> int:
    raw = os.getenv("ROUTE_AUDITOR_TIMEOUT", "").strip()
    return int(raw) if raw.isdigit() else DEFAULT_TIMEOUT


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="route-auditor",
        description="Audit one page for SEO and accessibility issues.",
    )
    parser.add_argument("--html-file", default="", help="Local HTML file to audit")
    parser.add_argument("--url", default="", help="Absolute page URL to fetch and audit")
    parser.add_argument(
        "--base-url",
        default=os.getenv("ROUTE_AUDITOR_BASE_URL", ""),
        help="Site origin such as https://example.com (or set ROUTE_AUDITOR_BASE_URL).",
    )
    parser.add_argument("--route", default="/", help="Route appended to --base-url")
    parser.add_argument("--timeout", type=int, default=_env_timeout(), help="HTTP timeout in seconds")
    parser.add_argument(
        "--allow-origin",
        dest="allowed_origins",
        action="append",
        default=None,
        help="Origin or URL prefix that may be fetched; repeatable (or set ROUTE_AUDITOR_ALLOWED_ORIGINS).",
    )
    parser.add_argument("--format", choices=["text", "json"], default="text", help="Terminal output format")
    parser.add_argument("--output-dir", default="", help="Write ROUTE-AUDIT-REPORT.md and FINDINGS.json here")
    parser.add_argument(
        "--fail-on",
        choices=[Severity.WARNING.value, Severity.ERROR.value],
        default=Severity.ERROR.value,
        help="Exit with status 1 when findings at or above this severity exist.",
    )
    return parser


def resolve_target(args: argparse.Namespace) -> str:
    if args.html_file and args.url:
        raise ValueError("Provide only one of --html-file or --url.")
    if args.url:
        return normalize_url(args.url)
    base_url = (args.base_url or "").strip()
    if not base_url:
        raise ValueError("Provide one of --html-file, --url or --base-url.")
    if not is_bare_origin(base_url):
        raise ValueError(
            "Enter a valid site base URL (e.g., https://example.com) without any path or query."
        )
    return absolute_url_from_route(base_url, args.route or "/")


def should_fail(findings: Sequence[Finding], fail_on: Severity) -> bool:
    return any(SEVERITY_RANK[finding.severity] >= SEVERITY_RANK[fail_on] for finding in findings)


def write_outputs(
    output_dir: Path,
    findings: Sequence[Finding],
    audited: str,
    fetched: dict[str, Any] | None,
) -> tuple[Path, Path]:
    output_dir.mkdir(parents=True, exist_ok=True)
    report = output_dir / "ROUTE-AUDIT-REPORT.md"
    summary = output_dir / "FINDINGS.json"
    report.write_text(render_markdown(findings, audited), encoding="utf-8")
    summary.write_text(json.dumps(build_summary(findings, audited, fetched), indent=2), encoding="utf-8")
    return report, summary


def run_audit(args: argparse.Namespace) -> int:
    fetched: dict[str, Any] | None = None
    if args.html_file and not args.url:
        path = Path(args.html_file).resolve()
        if not path.exists():
            print(f"Error: HTML file not found: {path}")
            return 2
        audited = str(path)
        if args.format == "text":
            print(f"Audit target: {audited}")
        findings = run_seo_a11y_audit(path.read_text(encoding="utf-8", errors="replace"))
    else:
        try:
            audited = resolve_target(args)
        except ValueError as exc:
            print(f"Error: {exc}")
            return 2
        allowed = args.allowed_origins if args.allowed_origins is not None else _env_origins()
        if args.format == "text":
            print(f"Audit target: {audited}")
        fetched, findings = audit_url(audited, args.timeout, allowed)
        if fetched.get("error") and args.format == "text":
            print(f"Fetch error: {fetched['error']}")
        elif fetched.get("status_code") and args.format == "text":
            print(f"HTTP status: {fetched['status_code']}")

    if args.format == "json":
        print(json.dumps(build_summary(findings, audited, fetched), indent=2))
    else:
        print(render_text(findings))
        counts = counts_by_severity(findings)
        print(f"Errors: {counts['error']}  Warnings: {counts['warning']}  Passed: {counts['success']}")

    if args.output_dir:
        report, summary = write_outputs(Path(args.output_dir).resolve(), findings, audited, fetched)
        if args.format == "text":
            print(f"Report: {report}")
            print(f"Summary: {summary}")

    return 1 if should_fail(findings, Severity(args.fail_on)) else 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return run_audit(args)


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
