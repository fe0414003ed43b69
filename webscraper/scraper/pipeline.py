"""The scrape pipeline: validate → robots → wait → fetch → extract.

Each stage completes (or raises) before the next starts.  Nothing here writes
to the console; progress and warnings go to the ``notify`` and ``warn``
callables supplied by the caller.
"""

from __future__ import annotations

from typing import Callable, Optional
from urllib.parse import urlsplit

import httpx

from webscraper.config import settings
from webscraper.scraper.errors import InvalidUrlError, RobotsDisallowedError
from webscraper.scraper.extractor import compile_selector, extract
from webscraper.scraper.fetcher import fetch_page
from webscraper.scraper.models import OutputFormat, RobotsDecision, ScrapeRequest, ScrapeResult
from webscraper.scraper.rate_limit import wait
from webscraper.scraper.robots import check_allowed

Notify = Callable[[str], None]

_SCHEMES = ("http", "https")
# Characters never valid in a host name.  IPv6 brackets and the port are
# already stripped by urlsplit.
_FORBIDDEN_HOST_CHARS = set(" #/<>?@\\^|%\"{}`")


def _ignore(_message: str) -> None:
    pass


def validate_url(url: str) -> str:
    """Return *url* stripped, or raise :class:`InvalidUrlError`."""
    candidate = (url or "").strip()
    try:
        parts = urlsplit(candidate)
        # Accessing .port validates the port number.
        parts.port
    except ValueError as exc:
        raise InvalidUrlError(url, str(exc)) from exc
    if parts.scheme.lower() not in _SCHEMES:
        raise InvalidUrlError(url, "expected an absolute http:// or https:// URL")
    if not parts.hostname:
        raise InvalidUrlError(url, "missing host")
    bad = sorted({
        ch for ch in parts.hostname
        if ch in _FORBIDDEN_HOST_CHARS or ch.isspace() or not ch.isprintable()
    })
    if bad:
        raise InvalidUrlError(url, f"invalid character(s) in host: {''.join(bad)!r}")
    try:
        httpx.URL(candidate)
    except httpx.InvalidURL as exc:
        raise InvalidUrlError(url, str(exc)) from exc
    return candidate


def build_request(
    url: str,
    selector: str,
    output_format: OutputFormat | str = OutputFormat.TEXT,
    delay_ms: Optional[int] = None,
    user_agent: Optional[str] = None,
    ignore_robots: bool = False,
) -> ScrapeRequest:
    """Validate the inputs and freeze them into a :class:`ScrapeRequest`.

    Raises:
        InvalidUrlError: *url* is not an absolute http(s) URL.
        InvalidSelectorError: *selector* does not compile.
        ValueError: *delay_ms* is negative or *output_format* is unknown.
    """
    url = validate_url(url)
    compile_selector(selector)
    if delay_ms is None:
        delay_ms = settings.default_delay_ms
    if delay_ms < 0:
        raise ValueError(f"delay must be non-negative, got {delay_ms}")
    return ScrapeRequest(
        url=url,
        selector=selector,
        output_format=OutputFormat(output_format),
        delay_ms=delay_ms,
        user_agent=user_agent or settings.default_user_agent,
        ignore_robots=ignore_robots,
    )


def check_robots(
    request: ScrapeRequest,
    notify: Notify = _ignore,
    warn: Notify = _ignore,
) -> RobotsDecision:
    """Run the robots.txt stage, raising when the target is disallowed."""
    if request.ignore_robots:
        return RobotsDecision(True, "robots.txt check skipped")

    decision = check_allowed(request.url, request.user_agent)
    if not decision.allowed:
        raise RobotsDisallowedError(request.url, decision.reason)
    if decision.reason:
        warn(decision.reason)
    else:
        notify("robots.txt check passed")
    return decision


def scrape(
    request: ScrapeRequest,
    notify: Optional[Notify] = None,
    warn: Optional[Notify] = None,
    sleep: Optional[Callable[[float], None]] = None,
) -> ScrapeResult:
    """Run the full pipeline for *request* and return its :class:`ScrapeResult`.

    *notify* receives progress lines, *warn* receives non-fatal problems
    (robots.txt unreachable, zero matches).  Raises the first
    :class:`~webscraper.scraper.errors.ScraperError` hit; no partial result is
    ever returned.
    """
    notify = notify or _ignore
    warn = warn or _ignore

    check_robots(request, notify, warn)
    wait(request.delay_ms, sleep=sleep)

    notify(f"Fetching: {request.url}")
    page = fetch_page(request.url, request.user_agent)
    notify(f"HTTP {page.status_code}, applying selector {request.selector!r}")

    elements = extract(page.html, request.selector)
    if not elements:
        warn(f"No elements found matching selector {request.selector!r} on {request.url}")

    return ScrapeResult.create(request, elements)
