"""
Page retrieval for the route auditor.

Fetches the rendered HTML of a site route with ``requests``. Redirects are
followed by hand so every hop is checked again: against the origin allowlist
when one is given, otherwise against the public-host guard.
"""

from __future__ import annotations

import ipaddress
import socket
import time
from typing import Any, Sequence
from urllib.parse import urljoin, urlparse, urlunparse

import requests

from .models import Finding, Severity
from .rules import run_seo_a11y_audit

HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; RouteAuditor/1.0)",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.8",
}
MAX_REDIRECT_HOPS = 10
DEFAULT_CONTENT_TYPE = "text/html; charset=utf-8"
FETCH_FAILED_MESSAGE = "Could not fetch page HTML. Verify base URL and proxy allowlist."


def normalize_url(raw: str) -> str:
    value = raw.strip()
    parsed = urlparse(value)
    if not parsed.scheme:
        value = f"https://{value}"
        parsed = urlparse(value)
    if parsed.scheme not in ("http", "https"):
        raise ValueError(f"Unsupported URL scheme: {parsed.scheme}")
    netloc = parsed.netloc or (parsed.hostname or "")
    path = parsed.path or "/"
    return urlunparse((parsed.scheme, netloc, path, "", parsed.query, ""))


def is_public_target(url: str) -> bool:
    host = urlparse(url).hostname
    if not host:
        return False
    try:
        info = socket.getaddrinfo(host, None)
    except socket.gaierror:
        return False
    for _, _, _, _, sockaddr in info:
        ip_text = sockaddr[0]
        try:
            ip = ipaddress.ip_address(ip_text)
        except ValueError:
            continue
        if ip.is_private or ip.is_loopback or ip.is_reserved or ip.is_link_local or ip.is_multicast:
            continue
        return True
    return False


def is_bare_origin(url: str) -> bool:
    """True for ``http(s)://host[:port]`` with at most a ``/`` path."""

    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return False
    if (parsed.path and parsed.path != "/") or parsed.query or parsed.fragment:
        return False
    return True


def absolute_url_from_route(base_origin: str, route: str) -> str:
    base = base_origin[:-1] if base_origin.endswith("/") else base_origin
    path = route if route.startswith("/") else f"/{route}"
    return f"{base}{path}"


def is_allowed(url: str, allowed: Sequence[str]) -> bool:
    parsed = urlparse(url)
    origin = f"{parsed.scheme}://{parsed.netloc}"
    return any(entry and (origin == entry or url.startswith(entry)) for entry in allowed)


def _guard(url: str, allowed_origins: Sequence[str]) -> str | None:
    # A non-empty allowlist replaces the public-host check.
    if any(allowed_origins):
        if not is_allowed(url, allowed_origins):
            return f"target URL is not in the allowed origins: {url}"
        return None
    if not is_public_target(url):
        return "target URL resolves to non-public or invalid host"
    return None


def fetch_page(url: str, timeout: int, allowed_origins: Sequence[str] = ()) -> dict[str, Any]:
    result: dict[str, Any] = {
        "url": url,
        "status_code": None,
        "final_url": url,
        "content_type": None,
        "text": None,
        "redirect_hops": 0,
        "response_ms": None,
        "error": None,
    }
    started = time.perf_counter()
    current_url = url
    redirect_hops = 0
    resp: requests.Response | None = None
    try:
        while True:
            problem = _guard(current_url, allowed_origins)
            if problem:
                result["error"] = problem
                return result
            resp = requests.get(current_url, headers=HEADERS, timeout=timeout, allow_redirects=False)
            if 300 <= resp.status_code < 400:
                location = (resp.headers.get("Location") or "").strip()
                if not location:
                    break
                if redirect_hops >= MAX_REDIRECT_HOPS:
                    result["error"] = f"Too many redirects (>{MAX_REDIRECT_HOPS})"
                    return result
                try:
                    current_url = normalize_url(urljoin(current_url, location))
                except ValueError as exc:
                    result["error"] = f"Invalid redirect URL: {exc}"
                    return result
                redirect_hops += 1
                continue
            break
    except requests.exceptions.RequestException as exc:
        result["error"] = str(exc)
        return result
    if resp is None:
        result["error"] = "No response returned"
        return result
    result["status_code"] = resp.status_code
    result["final_url"] = current_url
    result["content_type"] = resp.headers.get("Content-Type") or DEFAULT_CONTENT_TYPE
    result["text"] = resp.text
    result["redirect_hops"] = redirect_hops
    result["response_ms"] = round((time.perf_counter() - started) * 1000, 2)
    return result


def fetch_failed_finding() -> Finding:
    return Finding(id="fetch-failed", severity=Severity.ERROR, message=FETCH_FAILED_MESSAGE)


def fetch_succeeded(fetched: dict[str, Any]) -> bool:
    status_code = int(fetched.get("status_code") or 0)
    return not fetched.get("error") and 200 <= status_code < 300


def audit_url(url: str, timeout: int, allowed_origins: Sequence[str] = ()) -> tuple[dict[str, Any], list[Finding]]:
    """Fetch ``url`` and audit its body.

    Transport errors, guard violations and non-2xx statuses all collapse to a
    single ``fetch-failed`` finding; the fetch is not retried.
    """

    fetched = fetch_page(url, timeout, allowed_origins)
    if not fetch_succeeded(fetched):
        return fetched, [fetch_failed_finding()]
    return fetched, run_seo_a11y_audit(fetched["text"] or "")
