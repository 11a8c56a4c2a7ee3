from pathlib import Path
from unittest.mock import Mock, patch

import pytest
import requests  # type: ignore[import-untyped]

from innarchive import scraper
from innarchive.config import ScraperConfig


def test_fetch_index_page_uses_cache(config: ScraperConfig) -> None:
    """Fetches the index from the network only once and caches the HTML."""

    html = "<html><body>index</body></html>"
    response = Mock(text=html)

    with patch("requests.get", return_value=response) as mock_get:
        result = scraper.fetch_index_page(config)
        mock_get.assert_called_once_with("https://example.com/", timeout=5)

    assert result == html
    assert config.index_cache_path.read_text(encoding="utf-8") == html

    with patch("requests.get", return_value=response) as mock_get:
        assert scraper.fetch_index_page(config) == html
        mock_get.assert_not_called()


def test_fetch_index_page_live_overwrites(config: ScraperConfig) -> None:
    """A live fetch replaces the cached copy."""

    config.index_cache_path.write_text("old", encoding="utf-8")

    with patch("requests.get", return_value=Mock(text="new")) as mock_get:
        assert scraper.fetch_index_page(config, force_live=True) == "new"
        assert mock_get.called

    assert config.index_cache_path.read_text(encoding="utf-8") == "new"


def test_fetch_index_page_creates_parent(tmp_path: Path) -> None:
    """The directory of the index cache is created when missing."""

    config = ScraperConfig(index_cache_path=tmp_path / "a" / "index.html")
    with patch("requests.get", return_value=Mock(text="x")):
        scraper.fetch_index_page(config)

    assert (tmp_path / "a" / "index.html").exists()


def test_fetch_url_wraps_http_errors() -> None:
    """Non-success statuses surface as ``FetchFailure``."""

    response = Mock(text="")
    response.raise_for_status.side_effect = requests.HTTPError("404")

    with patch("requests.get", return_value=response):
        with pytest.raises(scraper.FetchFailure) as info:
            scraper.fetch_url("https://example.com/missing")

    assert info.value.url == "https://example.com/missing"


def test_fetch_url_wraps_connection_errors() -> None:
    """Network errors surface as ``FetchFailure``."""

    with patch("requests.get", side_effect=requests.ConnectionError("down")):
        with pytest.raises(scraper.FetchFailure):
            scraper.fetch_url("https://example.com/")


def _response(body: bytes, content_type: str) -> requests.Response:
    """Build a response the way requests' adapter does for ``body``."""

    response = requests.Response()
    response.status_code = 200
    response._content = body
    response.headers["Content-Type"] = content_type
    response.encoding = requests.utils.get_encoding_from_headers(
        response.headers
    )
    return response


def test_fetch_url_decodes_utf8_without_charset() -> None:
    """A body sent without a charset is still decoded as UTF-8."""

    text = "<html><body>Erin’s café</body></html>"
    response = _response(text.encode("utf-8"), "text/html")
    # requests falls back to ISO-8859-1 for text/* without a charset.
    assert response.encoding == "ISO-8859-1"

    with patch("requests.get", return_value=response):
        assert scraper.fetch_url("https://example.com/") == text


def test_fetch_index_page_caches_utf8(config: ScraperConfig) -> None:
    """The cached index keeps non-ASCII characters intact."""

    text = "<p>Ryoka’s run</p>"
    response = _response(text.encode("utf-8"), "text/html")

    with patch("requests.get", return_value=response):
        scraper.fetch_index_page(config)

    assert config.index_cache_path.read_text(encoding="utf-8") == text
