"""Combine the cached chapters of a volume into one document."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from innarchive.config import DEFAULT_SITE_TITLE, ScraperConfig

from .chapter_cache import ChapterCache
from .types import FragmentList
from .utils import unique_path_component
from .volume import Volume

logger = logging.getLogger(__name__)


def render_volume(
    title: str, fragments: FragmentList, site_title: str = DEFAULT_SITE_TITLE
) -> str:
    """Wrap chapter fragments in a minimal HTML document."""

    body = "\n".join(fragments)
    return (
        f"<html>\n<title>{site_title} - {title}</title>\n"
        f"<body>\n{body}\n</body>\n</html>"
    )


def assemble_volume(
    cache: ChapterCache,
    volume: Volume,
    site_title: str | None = None,
) -> str:
    """Return the HTML document for ``volume``.

    Chapters missing from the cache are downloaded, several at a time.
    Fragments keep the order of the table of contents.

    Args:
        cache: Chapter cache to read from.
        volume: Volume to assemble.
        site_title: Prefix of the document title; defaults to the
            configured site title.

    Returns:
        Complete HTML document.
    """

    config = cache.config
    with ThreadPoolExecutor(max_workers=config.max_workers) as ex:
        futures = [
            ex.submit(cache.get_chapter, volume, chapter, True)
            for chapter in volume.chapters
        ]
        fragments = [future.result() for future in futures]

    return render_volume(
        volume.title, fragments, site_title or config.site_title
    )


def volume_path(config: ScraperConfig, volume: Volume) -> Path:
    """Return the output file of ``volume``."""

    name = unique_path_component(volume.title, default="volume")
    return config.volume_output_dir / f"{name}.html"


def write_volume(config: ScraperConfig, volume: Volume, html: str) -> Path:
    """Write an assembled volume, replacing any earlier file.

    Args:
        config: Scraper settings.
        volume: Volume the document belongs to.
        html: Document produced by ``assemble_volume``.

    Returns:
        Path of the written file.
    """

    path = volume_path(config, volume)
    path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Saving: %s", volume.title)
    path.write_text(html, encoding="utf-8")
    return path
