import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from innarchive import scraper
from innarchive.config import DEFAULT_BASE_URL, ScraperConfig
from innarchive.serialize import FORMATS, dumps_volumes

try:
    __version__ = version("innarchive")
except PackageNotFoundError:
    __version__ = "0.0.1-dev"

logger = logging.getLogger(__name__)


def _configure_logging(
    debug: bool, trace: bool, log_file: Optional[str]
) -> None:
    """Set up the root logger.

    Args:
        debug: Toggle debug logging.
        trace: Toggle trace logging.
        log_file: Optional path to the log file.
    """
    if trace:
        level = 1
    elif debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        filename=log_file,
        level=level,
        format="[%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if trace:
        logging.debug("Trace mode is on")
    if debug:
        logging.debug("Debug mode is on")


def _config(ctx: click.Context) -> ScraperConfig:
    return ctx.obj["config"]


def _abort(exc: Exception) -> click.ClickException:
    """Log the traceback of ``exc`` and wrap it for click.

    The traceback is only shown with ``--debug`` or ``--trace``.
    """

    logger.debug("Aborting after %s", type(exc).__name__, exc_info=exc)
    return click.ClickException(str(exc))


@click.group(invoke_without_command=True)
@click.option("--debug/--no-debug", default=False)
@click.option("--trace/--no-trace", default=False)
@click.option(
    "--log-file",
    type=click.Path(file_okay=True, dir_okay=False),
    envvar="INNARCHIVE_LOG_FILE",
)
@click.option(
    "--base-url",
    default=DEFAULT_BASE_URL,
    show_default=True,
    envvar="INNARCHIVE_BASE_URL",
    help="Root page holding the table of contents.",
)
@click.option(
    "--index-cache",
    type=click.Path(file_okay=True, dir_okay=False),
    default="index.cached.html",
    show_default=True,
    envvar="INNARCHIVE_INDEX_CACHE",
    help="File caching the root page.",
)
@click.option(
    "--chapter-dir",
    type=click.Path(file_okay=False, dir_okay=True),
    default="chapters",
    show_default=True,
    envvar="INNARCHIVE_CHAPTER_DIR",
    help="Directory for the chapter cache.",
)
@click.option(
    "--volume-dir",
    type=click.Path(file_okay=False, dir_okay=True),
    default="volumes",
    show_default=True,
    envvar="INNARCHIVE_VOLUME_DIR",
    help="Directory for the assembled volumes.",
)
@click.option(
    "--max-delay-ms",
    type=click.IntRange(min=0),
    default=1250,
    show_default=True,
    envvar="INNARCHIVE_MAX_DELAY_MS",
    help="Upper bound of the random pause before each chapter request.",
)
@click.option(
    "--timeout",
    type=float,
    default=30,
    show_default=True,
    envvar="INNARCHIVE_TIMEOUT",
    help="HTTP timeout in seconds.",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=8,
    show_default=True,
    envvar="INNARCHIVE_WORKERS",
    help="Threads used while assembling a volume.",
)
@click.version_option(__version__, prog_name="innarchive")
@click.pass_context
def cli(
    ctx: click.Context,
    debug: bool,
    trace: bool,
    log_file: Optional[str],
    base_url: str,
    index_cache: str,
    chapter_dir: str,
    volume_dir: str,
    max_delay_ms: int,
    timeout: float,
    workers: int,
) -> None:
    """Archive The Wandering Inn into one HTML file per volume.

    Without a subcommand the whole pipeline runs: load the table of
    contents, cache every chapter, then write every volume.
    """
    load_dotenv()
    _configure_logging(debug, trace, log_file)

    ctx.ensure_object(dict)
    ctx.obj["config"] = ScraperConfig(
        base_url=base_url,
        index_cache_path=Path(index_cache),
        chapter_cache_dir=Path(chapter_dir),
        volume_output_dir=Path(volume_dir),
        max_delay_ms=max_delay_ms,
        timeout=timeout,
        max_workers=workers,
    )

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@cli.command()
@click.option("--live", is_flag=True, help="Download the index page again.")
@click.option(
    "--refetch-all", is_flag=True, help="Download cached chapters again."
)
@click.pass_context
def run(
    ctx: click.Context, live: bool = False, refetch_all: bool = False
) -> None:
    """Cache every chapter and write every volume."""

    try:
        paths = scraper.run_pipeline(
            _config(ctx), force_live=live, refetch_all=refetch_all
        )
    except scraper.ScraperError as exc:
        raise _abort(exc) from exc
    click.echo(f"Wrote {len(paths)} volumes")


@cli.command()
@click.option("--live", is_flag=True, help="Download the index page again.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(FORMATS),
    default="json",
    show_default=True,
    help="Output format.",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(file_okay=True, dir_okay=False),
    default=None,
    help="Write output to FILE instead of the console.",
)
@click.pass_context
def toc(
    ctx: click.Context,
    live: bool = False,
    output_format: str = "json",
    output_path: Optional[str] = None,
) -> None:
    """Print the table of contents."""

    try:
        volumes = scraper.load_volumes(_config(ctx), force_live=live)
    except scraper.ScraperError as exc:
        raise _abort(exc) from exc

    content = dumps_volumes(volumes, output_format)
    if output_path:
        Path(output_path).write_text(content, encoding="utf-8")
    else:
        click.echo(content)


@cli.command()
@click.option("--live", is_flag=True, help="Download the index page again.")
@click.option(
    "--refetch-all", is_flag=True, help="Download cached chapters again."
)
@click.pass_context
def prefetch(
    ctx: click.Context, live: bool = False, refetch_all: bool = False
) -> None:
    """Fill the chapter cache without writing volumes."""

    config = _config(ctx)
    try:
        volumes = scraper.load_volumes(config, force_live=live)
        cache = scraper.ChapterCache(config)
        scraper.prefetch_all(cache, volumes, refetch_all)
    except scraper.ScraperError as exc:
        raise _abort(exc) from exc


@cli.command()
@click.option(
    "--volume",
    "titles",
    multiple=True,
    help="Title of a volume to write; repeat for several. Default: all.",
)
@click.pass_context
def assemble(ctx: click.Context, titles: tuple[str, ...] = ()) -> None:
    """Write volumes from the chapter cache, fetching missing chapters."""

    config = _config(ctx)
    try:
        volumes = scraper.load_volumes(config)
    except scraper.ScraperError as exc:
        raise _abort(exc) from exc

    # Keep only the requested volumes, rejecting unknown titles.
    if titles:
        by_title = {volume.title: volume for volume in volumes}
        unknown = [title for title in titles if title not in by_title]
        if unknown:
            raise click.UsageError(f"Unknown volume: {', '.join(unknown)}")
        volumes = [by_title[title] for title in titles]

    cache = scraper.ChapterCache(config)
    try:
        for volume in volumes:
            html = scraper.assemble_volume(cache, volume)
            path = scraper.write_volume(config, volume, html)
            click.echo(str(path))
    except scraper.ScraperError as exc:
        raise _abort(exc) from exc
