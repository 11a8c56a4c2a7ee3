"""Scraper package for the table of contents and chapter archive."""

from .assemble import assemble_volume, write_volume
from .chapter import Chapter
from .chapter_cache import ChapterCache, extract_fragment
from .errors import (
    ContentNotFound,
    FetchFailure,
    ScraperError,
    StructuralParseError,
)
from .fetch_page import fetch_index_page, fetch_url
from .parse_toc import extract_volumes, load_volumes
from .pipeline import run_pipeline
from .prefetch import prefetch_all
from .volume import Volume

__all__ = [
    "Chapter",
    "ChapterCache",
    "ContentNotFound",
    "FetchFailure",
    "ScraperError",
    "StructuralParseError",
    "Volume",
    "assemble_volume",
    "extract_fragment",
    "extract_volumes",
    "fetch_index_page",
    "fetch_url",
    "load_volumes",
    "prefetch_all",
    "run_pipeline",
    "write_volume",
]
