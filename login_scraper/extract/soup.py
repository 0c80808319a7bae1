"""Lenient HTML parsing shared by the token and table extractors."""

import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

_BS4_PARSER = "lxml"


def make_soup(html: str) -> BeautifulSoup:
    """
    Parse *html* with the lxml backend, which recovers from unclosed tags
    and invalid nesting instead of failing.  bs4's "this looks like a URL /
    filename" warnings are silenced; short or odd bodies are still parsed.
    """
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
        return BeautifulSoup(html or "", _BS4_PARSER)
