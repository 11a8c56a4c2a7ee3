"""Fetch chapter pages and keep their content on disk."""

from __future__ import annotations

import copy
import logging
import threading
from pathlib import Path
from typing import Any, Callable

from bs4 import BeautifulSoup

from innarchive.config import ScraperConfig

from .chapter import Chapter
from .errors import ContentNotFound
from .fetch_page import fetch_url
from .utils import random_delay, unique_path_component
from .volume import Volume

logger = logging.getLogger(__name__)

ARTICLE_SELECTOR = "#content article"
CHAPTER_CLASS = "chapter"

def extract_fragment(html: str) -> str:
    """Return the readable part of a chapter page.

    The first article of the content region is copied, tagged with the
    ``chapter`` class and wrapped in a ``div``.

    Args:
        html: Raw HTML of the chapter page.

    Returns:
        Serialized fragment.

    Throws:
        ContentNotFound: When the page has no content article.
    """

    soup = BeautifulSoup(html, "html.parser")
    article: Any = soup.select_one(ARTICLE_SELECTOR)
    if article is None:
        raise ContentNotFound(f"No element matches {ARTICLE_SELECTOR!r}")

    # Work on a detached copy so the parsed page stays untouched.
    clone: Any = copy.copy(article)
    classes = list(clone.get("class") or [])
    if CHAPTER_CLASS not in classes:
        classes.append(CHAPTER_CLASS)
    clone["class"] = classes

    wrapper = soup.new_tag("div")
    wrapper.append(clone)
    return str(wrapper)


class ChapterCache:
    """Fetch-or-load access to chapter fragments stored on disk.

    Attributes:
        config: Scraper settings.
        delay: Callable pausing before each live request; receives the
            maximum delay in milliseconds.
    """

    def __init__(
        self,
        config: ScraperConfig,
        delay: Callable[[int], Any] = random_delay,
    ) -> None:
        self.config = config
        self.delay = delay
        self._locks: dict[Path, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def volume_dir(self, volume: Volume) -> Path:
        """Return the directory holding the chapters of ``volume``."""

        return self.config.chapter_cache_dir / unique_path_component(
            volume.title, default="volume"
        )

    def chapter_path(self, volume: Volume, chapter: Chapter) -> Path:
        """Return the cache file of ``chapter``."""

        name = unique_path_component(
            chapter.title, default=f"chapter-{chapter.id}"
        )
        return self.volume_dir(volume) / f"{name}.html"

    def _lock_for(self, key: Path) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    def get_chapter(
        self,
        volume: Volume,
        chapter: Chapter,
        use_cache_if_available: bool = True,
    ) -> str:
        """Return the fragment of ``chapter``, downloading it when needed.

        Args:
            volume: Volume the chapter belongs to.
            chapter: Chapter to load.
            use_cache_if_available: Read the cached file when it exists
                instead of contacting the site.

        Returns:
            Serialized fragment, or an empty string when the page has no
            content article. Nothing is cached in that case.
        """

        # Titles that resolve to the same file share one lock.
        path = self.chapter_path(volume, chapter)
        with self._lock_for(path):
            return self._get_chapter(volume, chapter, use_cache_if_available)

    def _get_chapter(
        self, volume: Volume, chapter: Chapter, use_cache_if_available: bool
    ) -> str:
        self.volume_dir(volume).mkdir(parents=True, exist_ok=True)
        path = self.chapter_path(volume, chapter)

        if use_cache_if_available and path.exists():
            return path.read_text(encoding="utf-8")

        self.delay(self.config.max_delay_ms)
        logger.info("fetching: %s %s", path, chapter.url)
        html = fetch_url(chapter.url, self.config.timeout)

        try:
            fragment = extract_fragment(html)
        except ContentNotFound as exc:
            # Leave the cache empty so the next run retries the chapter.
            logger.warning("Could not fetch %s: %s", chapter.url, exc)
            return ""

        path.write_text(fragment, encoding="utf-8")
        logger.info("Saved content for Chapter: %s", chapter.title)
        return fragment
