"""HTTP fetcher for the single page request."""

from __future__ import annotations

import httpx

from webscraper.config import settings
from webscraper.scraper.errors import FetchTimeoutError, HttpStatusError, NetworkError
from webscraper.scraper.models import RawPage


def fetch_page(url: str, user_agent: str, timeout: float | None = None) -> RawPage:
    """Fetch *url* once and return a :class:`RawPage`.

    No retries are attempted.  Redirects are followed and the returned page
    keeps the URL that was requested.

    Raises:
        FetchTimeoutError: If the request exceeds *timeout* seconds.
        NetworkError: On DNS, connection or protocol failures.
        HttpStatusError: If the final response is outside 200-299.
    """
    if timeout is None:
        timeout = settings.request_timeout

    try:
        with httpx.Client(
            headers={"User-Agent": user_agent},
            timeout=timeout,
            follow_redirects=True,
        ) as client:
            response = client.get(url)
            html = response.text
    except httpx.TimeoutException as exc:
        raise FetchTimeoutError(url, timeout) from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise NetworkError(url, str(exc) or type(exc).__name__) from exc

    if not response.is_success:
        raise HttpStatusError(
            url,
            response.status_code,
            reason=response.reason_phrase,
            body=html,
        )

    return RawPage(url=url, html=html, status_code=response.status_code)
