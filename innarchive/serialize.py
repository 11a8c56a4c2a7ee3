"""Serialize the table of contents to JSON or YAML."""

from __future__ import annotations

try:
    import orjson  # type: ignore[import-not-found]
except ImportError:  # pragma: no cover - optional dependency
    orjson = None  # type: ignore[assignment]

import json
from typing import Any

import yaml  # type: ignore[import-untyped]
from attrs import asdict

from innarchive.scraper.types import VolumeList

FORMATS = ("json", "yaml")


def volumes_to_data(volumes: VolumeList) -> list[dict[str, Any]]:
    """Convert volumes and their chapters to plain dictionaries."""

    return [asdict(volume) for volume in volumes]


def json_dumps(data: object) -> str:
    """Serialize data to a JSON string.

    Args:
        data: Data structure to serialize.

    Returns:
        JSON representation of ``data``.
    """

    if orjson is not None:
        return orjson.dumps(data).decode()
    return json.dumps(data, ensure_ascii=False)


def dumps_volumes(volumes: VolumeList, fmt: str = "json") -> str:
    """Render ``volumes`` in the requested format.

    Args:
        volumes: Extracted table of contents.
        fmt: Either ``json`` or ``yaml``.

    Returns:
        Serialized table of contents.
    """

    data = volumes_to_data(volumes)
    if fmt == "json":
        return json_dumps(data)
    if fmt == "yaml":
        return yaml.safe_dump(data, allow_unicode=True, sort_keys=False)
    raise ValueError(f"Unsupported format: {fmt}")
