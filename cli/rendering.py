"""Utilities for rendering scrape results in the CLI.

Both renderers are pure functions of a :class:`ScrapeResult`; printing is left
to the caller.
"""

from __future__ import annotations

import json
from typing import List

from webscraper.scraper.models import MatchedElement, OutputFormat, ScrapeResult


def _render_element(index: int, element: MatchedElement) -> List[str]:
    lines = [f"--- Element {index} ---", f"Text: {element.text}"]
    if element.attributes:
        lines.append("Attributes:")
        for key, value in element.attributes.items():
            lines.append(f"  {key}: {value}")
    return lines


def render_text(result: ScrapeResult) -> str:
    """Render *result* as a human-readable report.

    Args:
        result: The matches to render.

    Returns:
        A header block followed by one numbered section per element.
    """
    lines = [
        "=== Web Scraping Results ===",
        f"URL: {result.url}",
        f"Selector: {result.selector}",
        f"Timestamp: {result.timestamp}",
        f"Found {len(result.results)} element(s):",
    ]
    for i, element in enumerate(result.results, start=1):
        lines.append("")
        lines.extend(_render_element(i, element))
    return "\n".join(lines)


def render_json(result: ScrapeResult) -> str:
    """Render *result* as a pretty-printed JSON document."""
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)


def render(result: ScrapeResult, output_format: OutputFormat) -> str:
    if OutputFormat(output_format) is OutputFormat.JSON:
        return render_json(result)
    return render_text(result)
