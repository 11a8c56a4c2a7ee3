"""Run the complete scrape: table of contents, prefetch, assembly."""

from __future__ import annotations

from pathlib import Path

from innarchive.config import ScraperConfig

from .assemble import assemble_volume, write_volume
from .chapter_cache import ChapterCache
from .parse_toc import load_volumes
from .prefetch import prefetch_all


def run_pipeline(
    config: ScraperConfig,
    force_live: bool = False,
    refetch_all: bool = False,
    cache: ChapterCache | None = None,
) -> list[Path]:
    """Download every chapter and write one document per volume.

    Args:
        config: Scraper settings.
        force_live: Download the index page even when it is cached.
        refetch_all: Download chapters even when they are cached.
        cache: Chapter cache to use; built from ``config`` when omitted.

    Returns:
        Paths of the written volume documents.
    """

    cache = cache or ChapterCache(config)
    volumes = load_volumes(config, force_live)
    prefetch_all(cache, volumes, refetch_all)

    written: list[Path] = []
    for volume in volumes:
        html = assemble_volume(cache, volume)
        written.append(write_volume(config, volume, html))
    return written
