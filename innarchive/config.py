"""Runtime configuration for the scraper components."""

from __future__ import annotations

from pathlib import Path

from attrs import define, field

DEFAULT_BASE_URL = "https://wanderinginn.com/"
DEFAULT_SITE_TITLE = "The Wandering Inn"
DEFAULT_MAX_DELAY_MS = 1250


@define(slots=True, frozen=True)
class ScraperConfig:
    """Settings shared by the fetcher, cache store and assembler.

    Attributes:
        base_url: Root page of the site; its sidebar holds the table of
            contents.
        index_cache_path: File holding the last fetched root page.
        chapter_cache_dir: Directory with one sub-directory per volume and
            one HTML fragment per chapter.
        volume_output_dir: Directory receiving the assembled volumes.
        max_delay_ms: Upper bound (exclusive) of the random pause taken
            before each live chapter request.
        timeout: Timeout in seconds for every HTTP request.
        max_workers: Number of threads used while assembling a volume.
        site_title: Prefix of the title of each assembled document.
    """

    base_url: str = DEFAULT_BASE_URL
    index_cache_path: Path = field(
        default=Path("index.cached.html"), converter=Path
    )
    chapter_cache_dir: Path = field(default=Path("chapters"), converter=Path)
    volume_output_dir: Path = field(default=Path("volumes"), converter=Path)
    max_delay_ms: int = field(default=DEFAULT_MAX_DELAY_MS)
    timeout: float = 30
    max_workers: int = field(default=8)
    site_title: str = DEFAULT_SITE_TITLE

    @max_delay_ms.validator
    def _check_delay(self, attribute: object, value: int) -> None:
        if value < 0:
            raise ValueError("max_delay_ms must not be negative")

    @max_workers.validator
    def _check_workers(self, attribute: object, value: int) -> None:
        if value < 1:
            raise ValueError("max_workers must be at least 1")
