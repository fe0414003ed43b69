"""Selector engine: runs one CSS selector over an HTML document."""

from __future__ import annotations

from typing import List

import soupsieve
from bs4 import BeautifulSoup
from bs4.element import Tag

from webscraper.scraper.errors import InvalidSelectorError
from webscraper.scraper.models import MatchedElement


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _parse_html(html: str) -> BeautifulSoup:
    """Parse *html* with the HTML5 tree-construction algorithm.

    Malformed markup is recovered the way a browser does it: open ``<p>``
    elements are closed implicitly, ``<tbody>`` is inserted and the document
    always has an ``<html>`` root.  A repeated attribute name keeps its first
    value.  ``class`` and friends stay plain strings instead of token lists.
    """
    return BeautifulSoup(html, "html5lib", multi_valued_attributes=None)


def _element_text(tag: Tag) -> str:
    """Concatenate every descendant text node, trimmed at the element edges."""
    return "".join(tag.strings).strip()


def _element_attributes(tag: Tag) -> dict[str, str]:
    return {name: str(value) for name, value in tag.attrs.items()}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def compile_selector(selector: str) -> soupsieve.SoupSieve:
    """Compile *selector*, raising :class:`InvalidSelectorError` on bad syntax."""
    if not selector or not selector.strip():
        raise InvalidSelectorError(selector, "selector is empty")
    try:
        return soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as exc:
        raise InvalidSelectorError(selector, str(exc)) from exc
    except NotImplementedError as exc:
        # Pseudo-elements such as ``::before`` are not supported.
        raise InvalidSelectorError(selector, str(exc)) from exc


def extract(html: str, selector: str) -> List[MatchedElement]:
    """Return every element of *html* matching *selector*, in document order.

    The selector is compiled before the document is parsed, so an invalid
    selector never leads to a partial match.  No match is not an error: the
    result is simply an empty list.
    """
    compiled = compile_selector(selector)
    soup = _parse_html(html)
    return [
        MatchedElement(text=_element_text(tag), attributes=_element_attributes(tag))
        for tag in compiled.select(soup)
    ]
