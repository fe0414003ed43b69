"""Tests for request validation and the end-to-end scrape pipeline.

Every HTTP call goes through ``respx``; any request without a matching route
fails the test, which is how the "no network call" guarantees are checked.
"""

from __future__ import annotations

from datetime import datetime
from unittest.mock import MagicMock, patch

import httpx
import pytest
import respx

from webscraper.scraper.errors import (
    FetchTimeoutError,
    HttpStatusError,
    InvalidSelectorError,
    InvalidUrlError,
    RobotsDisallowedError,
)
from webscraper.scraper.models import MatchedElement, OutputFormat, ScrapeRequest
from webscraper.scraper.pipeline import build_request, check_robots, scrape, validate_url
from webscraper.scraper.rate_limit import wait

_PAGE = '<html><body><h1 class="a">Hi</h1><h1>Bye</h1></body></html>'


def _request(**overrides) -> ScrapeRequest:
    values = dict(
        url="https://example.com/page",
        selector="h1",
        delay_ms=0,
        user_agent="webscraper-tests/1.0",
    )
    values.update(overrides)
    return build_request(**values)


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------

class TestValidateUrl:
    @pytest.mark.parametrize(
        "url",
        ["https://example.com", "http://localhost:8080/a?b=c", "  https://example.com/x  "],
    )
    def test_accepts_absolute_http_urls(self, url: str) -> None:
        assert validate_url(url) == url.strip()

    @pytest.mark.parametrize(
        "url",
        [
            "example.com",
            "/relative/path",
            "ftp://example.com/file",
            "https://",
            "",
            "http://host:99999/",
            "http://exa mple.com/",
            "https://exa<mple>.com/",
            "https://exa%20mple.com/",
        ],
    )
    def test_rejects_invalid_urls(self, url: str) -> None:
        with pytest.raises(InvalidUrlError):
            validate_url(url)

    def test_accepts_ipv6_and_idn_hosts(self) -> None:
        assert validate_url("http://[::1]:8080/") == "http://[::1]:8080/"
        assert validate_url("https://bücher.example/") == "https://bücher.example/"

    def test_invalid_host_never_reaches_network(self) -> None:
        with respx.mock:
            with pytest.raises(InvalidUrlError) as excinfo:
                build_request("http://exa mple.com/", "h1")
            assert respx.calls.call_count == 0
        assert excinfo.value.exit_code == 2


class TestBuildRequest:
    def test_defaults_from_settings(self) -> None:
        request = build_request("https://example.com", "p")
        assert request.delay_ms == 1000
        assert request.user_agent == "webscraper/0.1.0 (Python)"
        assert request.output_format is OutputFormat.TEXT
        assert request.ignore_robots is False

    def test_format_string_is_coerced(self) -> None:
        assert build_request("https://example.com", "p", output_format="json").output_format is OutputFormat.JSON

    def test_request_is_immutable(self) -> None:
        request = build_request("https://example.com", "p")
        with pytest.raises(AttributeError):
            request.url = "https://other.example.com"  # type: ignore[misc]

    def test_invalid_selector_rejected_before_network(self) -> None:
        with respx.mock:
            with pytest.raises(InvalidSelectorError):
                build_request("https://example.com", ":::")
            assert respx.calls.call_count == 0

    def test_negative_delay_rejected(self) -> None:
        with pytest.raises(ValueError):
            build_request("https://example.com", "p", delay_ms=-1)


# ---------------------------------------------------------------------------
# Rate limiter
# ---------------------------------------------------------------------------

class TestWait:
    def test_sleeps_exact_duration(self) -> None:
        sleep = MagicMock()
        wait(1500, sleep=sleep)
        sleep.assert_called_once_with(1.5)

    def test_zero_does_not_sleep(self) -> None:
        sleep = MagicMock()
        wait(0, sleep=sleep)
        sleep.assert_not_called()

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError):
            wait(-5, sleep=MagicMock())

    def test_defaults_to_time_sleep(self) -> None:
        with patch("time.sleep") as mock_sleep:
            wait(250)
        mock_sleep.assert_called_once_with(0.25)


# ---------------------------------------------------------------------------
# Robots stage
# ---------------------------------------------------------------------------

class TestCheckRobots:
    def test_ignore_robots_makes_no_request(self) -> None:
        with respx.mock:
            decision = check_robots(_request(ignore_robots=True))
            assert respx.calls.call_count == 0
        assert decision.allowed is True

    def test_disallow_raises(self) -> None:
        with respx.mock:
            respx.get("https://example.com/robots.txt").mock(
                return_value=httpx.Response(200, text="User-agent: *\nDisallow: /page\n")
            )
            with pytest.raises(RobotsDisallowedError) as excinfo:
                check_robots(_request())

        assert excinfo.value.exit_code == 3
        assert "disallows /page" in str(excinfo.value)

    def test_unreachable_robots_warns(self) -> None:
        warnings: list[str] = []
        with respx.mock:
            respx.get("https://example.com/robots.txt").mock(side_effect=httpx.ConnectError)
            decision = check_robots(_request(), warn=warnings.append)

        assert decision.allowed is True
        assert len(warnings) == 1


# ---------------------------------------------------------------------------
# Full pipeline
# ---------------------------------------------------------------------------

class TestScrape:
    def test_happy_path(self) -> None:
        progress: list[str] = []
        with respx.mock:
            respx.get("https://example.com/robots.txt").mock(
                return_value=httpx.Response(200, text="User-agent: *\nAllow: /\n")
            )
            respx.get("https://example.com/page").mock(
                return_value=httpx.Response(200, text=_PAGE)
            )
            result = scrape(_request(), notify=progress.append)

        assert result.url == "https://example.com/page"
        assert result.selector == "h1"
        assert result.results == [
            MatchedElement(text="Hi", attributes={"class": "a"}),
            MatchedElement(text="Bye", attributes={}),
        ]
        assert datetime.fromisoformat(result.timestamp).tzinfo is not None
        assert "robots.txt check passed" in progress
        assert "Fetching: https://example.com/page" in progress

    def test_robots_checked_before_page_fetch(self) -> None:
        with respx.mock:
            robots = respx.get("https://example.com/robots.txt").mock(
                return_value=httpx.Response(404)
            )
            page = respx.get("https://example.com/page").mock(
                return_value=httpx.Response(200, text=_PAGE)
            )
            scrape(_request())

        assert robots.called and page.called
        assert respx.calls[0].request.url.path == "/robots.txt"
        assert respx.calls[1].request.url.path == "/page"

    def test_ignore_robots_fetches_page_only(self) -> None:
        with respx.mock:
            respx.get("https://example.com/page").mock(
                return_value=httpx.Response(200, text=_PAGE)
            )
            result = scrape(_request(ignore_robots=True))
            assert respx.calls.call_count == 1

        assert len(result.results) == 2

    def test_delay_applied_before_fetch(self) -> None:
        sleep = MagicMock()
        with respx.mock:
            respx.get("https://example.com/page").mock(
                return_value=httpx.Response(200, text=_PAGE)
            )
            scrape(_request(ignore_robots=True, delay_ms=2000), sleep=sleep)

        sleep.assert_called_once_with(2.0)

    def test_disallowed_page_is_never_fetched(self) -> None:
        with respx.mock(assert_all_called=False) as respx_mock:
            respx_mock.get("https://example.com/robots.txt").mock(
                return_value=httpx.Response(200, text="User-agent: *\nDisallow: /\n")
            )
            page = respx_mock.get("https://example.com/page").mock(
                return_value=httpx.Response(200, text=_PAGE)
            )
            with pytest.raises(RobotsDisallowedError):
                scrape(_request())

        assert not page.called

    def test_zero_matches_is_success_with_warning(self) -> None:
        warnings: list[str] = []
        with respx.mock:
            respx.get("https://example.com/page").mock(
                return_value=httpx.Response(200, text=_PAGE)
            )
            result = scrape(_request(selector="table", ignore_robots=True), warn=warnings.append)

        assert result.results == []
        assert warnings and "No elements found" in warnings[0]

    def test_timeout_produces_no_result(self) -> None:
        with respx.mock:
            respx.get("https://example.com/page").mock(side_effect=httpx.ReadTimeout)
            with pytest.raises(FetchTimeoutError):
                scrape(_request(ignore_robots=True))

    def test_http_status_error_propagates(self) -> None:
        with respx.mock:
            respx.get("https://example.com/page").mock(return_value=httpx.Response(500))
            with pytest.raises(HttpStatusError) as excinfo:
                scrape(_request(ignore_robots=True))

        assert excinfo.value.exit_code == 6
