"""Shared fixtures for scraper tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from innarchive.config import ScraperConfig
from innarchive.scraper import Chapter, ChapterCache, Volume

INDEX_HTML = """
<html><body>
<div id="secondary">
  <aside class="widget"><h3 class="widget-title">Search</h3></aside>
  <aside class="widget">
    <h3 class="widget-title">Table of Contents</h3>
    <div class="textwidget">
      <p> Volume 1 </p>
      <p><a href="//wanderinginn.com/2016/07/27/1-00/">1.00</a>
         <a href="https://wanderinginn.com/2016/07/27/1-01/"> 1.01 </a></p>
      <p>Volume 2</p>
      <p><a href="/2017/03/03/2-00/">2.00</a></p>
    </div>
  </aside>
</div>
</body></html>
"""


def chapter_page(body: str) -> str:
    """Return a chapter page whose content article holds ``body``."""

    return (
        '<html><body><div id="content">'
        f'<article class="post">{body}</article>'
        "</div></body></html>"
    )


@pytest.fixture
def config(tmp_path: Path) -> ScraperConfig:
    """Configuration writing every file below ``tmp_path``."""

    return ScraperConfig(
        base_url="https://example.com/",
        index_cache_path=tmp_path / "index.cached.html",
        chapter_cache_dir=tmp_path / "chapters",
        volume_output_dir=tmp_path / "volumes",
        max_delay_ms=0,
        timeout=5,
        max_workers=2,
    )


@pytest.fixture
def cache(config: ScraperConfig) -> ChapterCache:
    """Chapter cache that never sleeps."""

    return ChapterCache(config, delay=lambda ms: 0.0)


@pytest.fixture
def make_volume() -> Callable[..., Volume]:
    """Factory building a volume with chapters named after ``titles``."""

    def factory(title: str = "Volume 1", *titles: str) -> Volume:
        chapters = [
            Chapter(id=i, title=t, url=f"https://example.com/{t}")
            for i, t in enumerate(titles)
        ]
        return Volume(title=title, chapters=chapters)

    return factory
