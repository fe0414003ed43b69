"""Scraper package — robots check, fetch & selector extraction."""

from webscraper.scraper.extractor import compile_selector, extract
from webscraper.scraper.fetcher import fetch_page
from webscraper.scraper.models import (
    MatchedElement,
    OutputFormat,
    RawPage,
    RobotsDecision,
    ScrapeRequest,
    ScrapeResult,
)
from webscraper.scraper.pipeline import build_request, scrape
from webscraper.scraper.robots import check_allowed

__all__ = [
    "build_request",
    "scrape",
    "check_allowed",
    "fetch_page",
    "compile_selector",
    "extract",
    "MatchedElement",
    "OutputFormat",
    "RawPage",
    "RobotsDecision",
    "ScrapeRequest",
    "ScrapeResult",
]
