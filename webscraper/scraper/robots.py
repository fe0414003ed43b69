"""robots.txt compliance check for the page about to be fetched.

The check is fail-open: when robots.txt cannot be retrieved (network error,
timeout, non-2xx status) the fetch is allowed and the decision carries a
reason the caller surfaces as a warning.
"""

from __future__ import annotations

from typing import List
from urllib.parse import urlsplit

import httpx
from protego import Protego

from webscraper.config import settings
from webscraper.scraper.models import RobotsDecision

# Records that take part in the allow/deny decision.  Anything else
# (Crawl-delay, Host, Request-rate, ...) is dropped before parsing so that it
# cannot split a run of User-agent lines into separate groups.
_KEPT_FIELDS = {"user-agent", "allow", "disallow", "sitemap"}


def robots_url(url: str) -> str:
    """Return the robots.txt URL for the origin of *url*."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}/robots.txt"


def _rule_lines(text: str) -> List[str]:
    lines = []
    for raw in text.splitlines():
        field = raw.split("#", 1)[0].split(":", 1)[0].strip().lower()
        if field in _KEPT_FIELDS:
            lines.append(raw)
    return lines


class RobotsRules:
    """Parsed robots.txt content.

    Matching follows RFC 9309 via ``protego``: the group naming the user
    agent's product token is used, else the ``*`` group; the longest matching
    path pattern wins and ``Allow`` wins a tie.
    """

    def __init__(self, parser: Protego) -> None:
        self._parser = parser

    @classmethod
    def parse(cls, text: str) -> RobotsRules:
        return cls(Protego.parse("\n".join(_rule_lines(text))))

    @property
    def sitemaps(self) -> List[str]:
        return list(self._parser.sitemaps)

    def can_fetch(self, url: str, user_agent: str) -> bool:
        return self._parser.can_fetch(url, user_agent)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def check_allowed(url: str, user_agent: str, timeout: float | None = None) -> RobotsDecision:
    """Fetch robots.txt for *url*'s origin and decide whether *url* may be fetched."""
    if timeout is None:
        timeout = settings.robots_timeout
    location = robots_url(url)

    try:
        with httpx.Client(
            headers={"User-Agent": user_agent},
            timeout=timeout,
            follow_redirects=True,
        ) as client:
            response = client.get(location)
    except httpx.TimeoutException:
        return RobotsDecision(True, f"Timed out fetching {location}, proceeding anyway")
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        return RobotsDecision(True, f"Could not fetch {location} ({exc}), proceeding anyway")

    if not response.is_success:
        return RobotsDecision(
            True,
            f"{location} returned HTTP {response.status_code}, proceeding anyway",
        )

    if RobotsRules.parse(response.text).can_fetch(url, user_agent):
        return RobotsDecision(True)
    path = urlsplit(url).path or "/"
    return RobotsDecision(False, f"{location} disallows {path} for {user_agent}")
