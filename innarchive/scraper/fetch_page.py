"""Fetch pages over HTTP, keeping a local copy of the index page."""

from __future__ import annotations

import logging

import requests  # type: ignore[import-untyped]

from innarchive.config import ScraperConfig

from .errors import FetchFailure

logger = logging.getLogger(__name__)


def fetch_url(url: str, timeout: float = 30) -> str:
    """Download ``url`` and return the response body.

    Args:
        url: Address of the page.
        timeout: Request timeout in seconds.

    Returns:
        Body of the response decoded as UTF-8.

    Throws:
        FetchFailure: On network errors and non-success status codes.
    """

    logger.debug("GET %s", url)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise FetchFailure(url, str(exc)) from exc

    # Pages are UTF-8 even when the server omits the charset.
    response.encoding = "utf-8"
    return response.text


def fetch_index_page(config: ScraperConfig, force_live: bool = False) -> str:
    """Return the HTML of the site root, using the local copy when possible.

    Args:
        config: Scraper settings.
        force_live: Download the page even when a cached copy exists.

    Returns:
        Raw HTML of the root page.
    """

    cache_file = config.index_cache_path

    if force_live or not cache_file.exists():
        html = fetch_url(config.base_url, config.timeout)

        # Overwrite any earlier copy with the fresh page.
        cache_file.parent.mkdir(parents=True, exist_ok=True)
        cache_file.write_text(html, encoding="utf-8")
        logger.debug("Stored index page in %s", cache_file)
        return html

    logger.debug("Using cached index page %s", cache_file)
    return cache_file.read_text(encoding="utf-8")
