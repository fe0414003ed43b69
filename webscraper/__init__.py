"""webscraper: fetch one page, apply one CSS selector, print the matches."""

from webscraper.config import __version__

__all__ = ["__version__"]
