"""Common type aliases for scraper structures."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .chapter import Chapter  # noqa: F401
    from .volume import Volume  # noqa: F401


ChapterList = list["Chapter"]
VolumeList = list["Volume"]
FragmentList = list[str]
