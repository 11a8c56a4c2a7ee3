"""Helpers shared by the scraper modules."""

from __future__ import annotations

import hashlib
import random
import re
import time

MAX_COMPONENT_LEN = 120
DIGEST_LEN = 8

_WINDOWS_RESERVED_NAMES = {
    "CON",
    "PRN",
    "AUX",
    "NUL",
    *(f"COM{i}" for i in range(1, 10)),
    *(f"LPT{i}" for i in range(1, 10)),
}


def fix_url(url: str) -> str:
    """Give protocol-relative URLs an explicit ``https:`` scheme.

    Args:
        url: Link target as found in the page.

    Returns:
        ``url`` prefixed with ``https:`` when it starts with ``//``, the
        unchanged ``url`` otherwise. Relative paths are not resolved.
    """

    if url.startswith("//"):
        return "https:" + url
    return url


def safe_path_component(
    name: str, default: str = "untitled", max_length: int = MAX_COMPONENT_LEN
) -> str:
    """Turn a title into a single, harmless file or directory name.

    Args:
        name: Volume or chapter title taken from the page.
        default: Name used when nothing usable remains.
        max_length: Maximum length of the result.

    Returns:
        A name without path separators or reserved characters that cannot
        point outside of its parent directory.
    """

    # Replace separators and characters rejected by common filesystems.
    cleaned = re.sub(r'[\\/:*?"<>|\x00-\x1f]+', "_", name)
    cleaned = re.sub(r"\s+", " ", cleaned).strip(" .")

    if max_length > 0 and len(cleaned) > max_length:
        cleaned = cleaned[:max_length].rstrip(" .")

    if not cleaned:
        cleaned = default
    if cleaned.upper() in _WINDOWS_RESERVED_NAMES:
        cleaned = f"_{cleaned}"
    return cleaned


def unique_path_component(
    name: str, default: str = "untitled", max_length: int = MAX_COMPONENT_LEN
) -> str:
    """Turn a title into a file name that no other title maps to.

    Titles that are already safe are kept as they are. Any other title is
    sanitized and suffixed with a short digest of the original, so two
    titles differing only in removed or truncated characters stay apart.

    Args:
        name: Volume or chapter title taken from the page.
        default: Name used when nothing usable remains.
        max_length: Maximum length of the result.

    Returns:
        A harmless name of at most ``max_length`` characters.
    """

    cleaned = safe_path_component(name, default, max_length - DIGEST_LEN - 1)
    if cleaned == name:
        return cleaned

    digest = hashlib.sha1(name.encode("utf-8")).hexdigest()[:DIGEST_LEN]
    return f"{cleaned}-{digest}"


def random_delay(max_ms: int) -> float:
    """Sleep for a random duration in ``[0, max_ms)`` milliseconds.

    Args:
        max_ms: Exclusive upper bound of the pause.

    Returns:
        The number of seconds slept.
    """

    seconds = random.random() * max_ms / 1000
    if seconds > 0:
        time.sleep(seconds)
    return seconds
