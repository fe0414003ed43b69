"""Data models for the scrape pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


@dataclass(frozen=True)
class ScrapeRequest:
    """Everything one invocation needs.  Built once, never mutated."""

    url: str
    selector: str
    output_format: OutputFormat = OutputFormat.TEXT
    delay_ms: int = 1000
    user_agent: str = ""
    ignore_robots: bool = False


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch."""

    url: str
    html: str
    status_code: int


@dataclass
class MatchedElement:
    """One DOM node matched by the selector."""

    text: str
    attributes: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "attributes": dict(self.attributes)}


@dataclass
class ScrapeResult:
    """Matches for one request, in document order."""

    url: str
    selector: str
    results: List[MatchedElement] = field(default_factory=list)
    timestamp: str = ""

    @classmethod
    def create(cls, request: ScrapeRequest, results: List[MatchedElement]) -> ScrapeResult:
        """Assemble a result stamped with the current UTC time."""
        return cls(
            url=request.url,
            selector=request.selector,
            results=list(results),
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "selector": self.selector,
            "results": [element.to_dict() for element in self.results],
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class RobotsDecision:
    allowed: bool
    reason: Optional[str] = None
