"""Errors raised while scraping the table of contents and chapters."""

from __future__ import annotations


class ScraperError(Exception):
    """Base class for every scraper failure."""


class StructuralParseError(ScraperError):
    """The index page does not have the expected table of contents layout."""


class FetchFailure(ScraperError):
    """A page could not be retrieved.

    Attributes:
        url: Address of the page that failed.
    """

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"Failed to fetch {url}: {message}")
        self.url = url


class ContentNotFound(ScraperError):
    """A chapter page has no content article."""
