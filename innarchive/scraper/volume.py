"""Named group of chapters."""

from __future__ import annotations

from attrs import define, field

from .types import ChapterList


@define(slots=True)
class Volume:
    """Named group of chapters.

    Attributes:
        title: Volume heading, such as "Volume 1".
        chapters: Chapters in the order the table of contents lists them.
    """

    title: str
    chapters: ChapterList = field(factory=list, repr=False)
