"""Centralised settings for the webscraper tool.

All runtime defaults are resolved here in one place.  The tool reads no
environment variables; every value can be overridden per invocation through a
CLI flag, or in tests with ``monkeypatch.setattr``.
"""

from __future__ import annotations

from dataclasses import dataclass

__version__ = "0.1.0"


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Request identity
    # ------------------------------------------------------------------
    default_user_agent: str = f"webscraper/{__version__} (Python)"

    # ------------------------------------------------------------------
    # Courtesy delay before the page fetch
    # ------------------------------------------------------------------
    default_delay_ms: int = 1000

    # ------------------------------------------------------------------
    # Timeouts (seconds)
    # ------------------------------------------------------------------
    request_timeout: float = 30.0
    robots_timeout: float = 10.0


# Module-level singleton — import this everywhere:
#   from webscraper.config import settings
settings = Settings()
