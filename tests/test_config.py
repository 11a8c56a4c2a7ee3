"""Tests for scraper configuration."""

from pathlib import Path

import attrs
import pytest

from innarchive.config import ScraperConfig


def test_defaults() -> None:
    config = ScraperConfig()
    assert config.base_url == "https://wanderinginn.com/"
    assert config.index_cache_path == Path("index.cached.html")
    assert config.chapter_cache_dir == Path("chapters")
    assert config.volume_output_dir == Path("volumes")
    assert config.max_delay_ms == 1250


def test_paths_are_converted() -> None:
    config = ScraperConfig(chapter_cache_dir="cache")  # type: ignore[arg-type]
    assert config.chapter_cache_dir == Path("cache")


def test_config_is_frozen() -> None:
    with pytest.raises(attrs.exceptions.FrozenInstanceError):
        ScraperConfig().max_delay_ms = 0  # type: ignore[misc]


@pytest.mark.parametrize(
    "field, value", [("max_delay_ms", -1), ("max_workers", 0)]
)
def test_invalid_values(field: str, value: int) -> None:
    with pytest.raises(ValueError):
        ScraperConfig(**{field: value})
