"""Single installment listed in the table of contents."""

from __future__ import annotations

from attrs import define


@define(slots=True, frozen=True)
class Chapter:
    """Single installment listed in the table of contents.

    Attributes:
        id: Zero-based position of the chapter within its volume.
        title: Link text, such as "1.00".
        url: Absolute address of the chapter page.
    """

    id: int
    title: str
    url: str
