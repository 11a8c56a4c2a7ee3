"""Populate the chapter cache one request at a time."""

from __future__ import annotations

import logging
import sys

from tqdm import tqdm  # type: ignore

from .chapter_cache import ChapterCache
from .types import VolumeList

logger = logging.getLogger(__name__)


def prefetch_all(
    cache: ChapterCache, volumes: VolumeList, refetch_all: bool = False
) -> None:
    """Load every chapter of every volume into the cache, sequentially.

    Each chapter, including its pause and download, completes before the
    next one starts. Any fetch or write error aborts the walk.

    Args:
        cache: Chapter cache to populate.
        volumes: Volumes in table of contents order.
        refetch_all: Download chapters even when they are already cached.
    """

    pairs = [
        (volume, chapter) for volume in volumes for chapter in volume.chapters
    ]
    logger.debug("Prefetching %d chapters", len(pairs))

    for volume, chapter in tqdm(
        pairs, desc="Chapters", unit="ch", disable=not sys.stderr.isatty()
    ):
        cache.get_chapter(volume, chapter, not refetch_all)
