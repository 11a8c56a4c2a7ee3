"""Extract volumes and chapters from the sidebar of the index page."""

from __future__ import annotations

import enum
import logging
from typing import Any

from bs4 import BeautifulSoup, Tag

from innarchive.config import ScraperConfig

from .chapter import Chapter
from .errors import StructuralParseError
from .fetch_page import fetch_index_page
from .types import ChapterList, VolumeList
from .utils import fix_url
from .volume import Volume

logger = logging.getLogger(__name__)

TOC_PREFIX = "table of contents"


class _State(enum.Enum):
    """Position within the title / links paragraph alternation."""

    EXPECT_TITLE = enum.auto()
    EXPECT_CHAPTERS = enum.auto()


def _find_toc_section(soup: BeautifulSoup) -> Tag:
    """Return the sidebar section holding the table of contents."""

    matches = [
        aside
        for aside in soup.select("#secondary aside")
        if "".join(t.get_text() for t in aside.select(".widget-title"))
        .lower()
        .startswith(TOC_PREFIX)
    ]
    if len(matches) != 1:
        raise StructuralParseError("Could not find table of contents")
    return matches[0]


def _parse_chapters(paragraph: Tag) -> ChapterList:
    """Build one chapter per link placed directly inside ``paragraph``."""

    links: Any = paragraph.find_all("a", recursive=False)
    return [
        Chapter(
            id=index,
            title=link.get_text().strip(),
            url=fix_url(link.get("href") or ""),
        )
        for index, link in enumerate(links)
    ]


def extract_volumes(html: str) -> VolumeList:
    """Parse the index page into an ordered list of volumes.

    The table of contents alternates a paragraph holding the volume title
    with a paragraph holding the links to its chapters.

    Args:
        html: Raw HTML of the site root.

    Returns:
        Volumes in document order, each with its chapters.

    Throws:
        StructuralParseError: When the table of contents is missing,
            duplicated, or ends with a title that has no chapter list.
    """

    soup = BeautifulSoup(html, "html.parser")
    section = _find_toc_section(soup)

    volumes: VolumeList = []
    state = _State.EXPECT_TITLE
    for widget in section.select(".textwidget"):
        for paragraph in widget.find_all("p", recursive=False):
            if state is _State.EXPECT_TITLE:
                volumes.append(Volume(title=paragraph.get_text().strip()))
                state = _State.EXPECT_CHAPTERS
            else:
                volumes[-1].chapters = _parse_chapters(paragraph)
                state = _State.EXPECT_TITLE

    # A dangling title means the alternation was broken.
    if state is _State.EXPECT_CHAPTERS:
        raise StructuralParseError(
            f"Volume {volumes[-1].title!r} has no chapter list"
        )
    return volumes


def load_volumes(
    config: ScraperConfig, force_live: bool = False
) -> VolumeList:
    """Fetch the index page and extract its table of contents.

    Args:
        config: Scraper settings.
        force_live: Ignore the cached copy of the index page.

    Returns:
        Volumes listed on the index page.
    """

    volumes = extract_volumes(fetch_index_page(config, force_live))
    logger.info(
        "Found %d volumes with %d chapters",
        len(volumes),
        sum(len(v.chapters) for v in volumes),
    )
    return volumes
