"""Exception hierarchy for the scrape pipeline.

Every failure the pipeline can hit is a :class:`ScraperError`.  Each class
carries the process exit code the CLI maps it to, so the orchestrator only
needs a single ``except ScraperError`` clause.
"""

from __future__ import annotations


class ScraperError(Exception):
    """Base class for all pipeline failures."""

    exit_code: int = 1


# ---------------------------------------------------------------------------
# Input validation (raised before any network call)
# ---------------------------------------------------------------------------

class InvalidInputError(ScraperError):
    exit_code = 2


class InvalidUrlError(InvalidInputError):
    def __init__(self, url: str, detail: str = "") -> None:
        self.url = url
        message = f"Invalid URL format: {url}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class InvalidSelectorError(InvalidInputError):
    def __init__(self, selector: str, detail: str = "") -> None:
        self.selector = selector
        self.detail = detail
        message = f"Invalid CSS selector: {selector!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


# ---------------------------------------------------------------------------
# robots.txt
# ---------------------------------------------------------------------------

class RobotsDisallowedError(ScraperError):
    """robots.txt forbids the target path for the configured user agent."""

    exit_code = 3

    def __init__(self, url: str, reason: str | None = None) -> None:
        self.url = url
        self.reason = reason
        message = f"Access to {url} is disallowed by robots.txt"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


# ---------------------------------------------------------------------------
# Page fetch
# ---------------------------------------------------------------------------

class FetchError(ScraperError):
    """The page fetch did not produce a 2xx response."""


class NetworkError(FetchError):
    exit_code = 4

    def __init__(self, url: str, detail: str) -> None:
        self.url = url
        super().__init__(f"Network error while fetching {url}: {detail}")


class FetchTimeoutError(FetchError):
    exit_code = 5

    def __init__(self, url: str, timeout: float) -> None:
        self.url = url
        self.timeout = timeout
        super().__init__(f"Timed out after {timeout:g}s while fetching {url}")


class HttpStatusError(FetchError):
    """Non-2xx status.  The response body is kept for diagnostics."""

    exit_code = 6

    def __init__(self, url: str, status_code: int, reason: str = "", body: str = "") -> None:
        self.url = url
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(f"HTTP error: {status_code} - {reason or 'Unknown'} ({url})")
