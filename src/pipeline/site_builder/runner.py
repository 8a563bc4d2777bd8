"""Headless site build runner.

Runs the full build for one site root:

1. data extraction (CSV/JSON sources to Markdown files), unless skipped;
2. template store preload;
3. content pipeline (one page per Markdown file);
4. paginated home listing;
5. taxonomy listings.

Usage Examples
--------------
Programmatic build of the site in the current directory::

    from src.pipeline.site_builder.runner import run_from_config
    exit_code = run_from_config()

Explicit root and configuration file::

    from pathlib import Path
    run_from_config(root=Path("my-site"), config_file=Path("my-site/site.config.json"))
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from rich.console import Console

from src.exceptions import AppError, ConfigurationError

from ..content import ContentPipeline
from ..data_extractor import DataExtractor
from ..listing import collect_tag_buckets, generate_index_pages, generate_tag_pages
from ..templating import TemplateRenderer, TemplateStore
from .config import SiteConfig, load_site_config
from .report import BuildReport, StageError, render_build_summary

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INCOMPLETE = 1
EXIT_CONFIG_ERROR = 2


async def _run_listing_stage(
    report: BuildReport, stage: str, func: Callable[..., list[Path]], *args: Any
) -> list[Path]:
    """Run one listing stage on a worker thread, recording a failure instead of raising."""
    try:
        return await asyncio.to_thread(func, *args)
    except (AppError, OSError) as error:
        logger.error(f"{stage} stopped: {error}", exc_info=True)
        report.stage_errors.append(StageError(stage=stage, message=str(error)))
        return []


async def build_site(config: SiteConfig) -> BuildReport:
    """Build the site described by ``config``.

    Failures of single files, sources and listing stages are recorded in
    the report; the remaining stages still run.

    Returns
    -------
    BuildReport
        Counters, skipped entries and recorded errors of the build.

    Raises
    ------
    OSError
        If the output directory cannot be created.
    """
    start = time.perf_counter()
    report = BuildReport()

    if config.skip_extract:
        logger.info("Data extraction skipped")
    else:
        extraction = await DataExtractor(config).extract()
        report.extracted_files = extraction.files
        report.source_errors = extraction.errors

    store = TemplateStore(
        config.layouts_dir,
        config.partials_dir,
        layout_filter=config.layout_filter,
        partial_filter=config.partial_filter,
    )
    store.preload()
    renderer = TemplateRenderer(store, recursive_partials=config.recursive_partials)

    pipeline = ContentPipeline(
        config.content_dir,
        config.output_dir,
        renderer,
        title_from_filename=config.title_from_filename,
        max_concurrency=config.max_concurrency,
    )
    content = await pipeline.process_all()
    report.posts_created = content.posts_created
    report.skipped = content.skipped
    report.file_errors = content.errors
    report.post_timings = content.timings

    report.index_pages = await _run_listing_stage(
        report,
        "Index pages",
        generate_index_pages,
        renderer,
        content.posts,
        config.posts_per_page,
        config.output_dir,
    )
    buckets = collect_tag_buckets(content.posts, config.taxonomies)
    report.tag_pages = await _run_listing_stage(
        report,
        "Tag pages",
        generate_tag_pages,
        renderer,
        buckets,
        config.posts_per_page,
        config.output_dir,
    )

    report.total_seconds = time.perf_counter() - start
    logger.info(
        f"Site build finished: {report.posts_created} post(s), "
        f"{len(report.skipped)} skipped, {report.error_count} error(s) "
        f"in {report.total_seconds:.2f} seconds"
    )
    return report


def exit_code(report: BuildReport) -> int:
    """Return ``0`` for a clean build and ``1`` when anything was skipped or failed."""
    return EXIT_OK if report.clean else EXIT_INCOMPLETE


def run_from_config(
    root: Path | None = None,
    config_file: Path | None = None,
    *,
    skip_extract: bool = False,
    console: Console | None = None,
) -> int:
    """Load configuration, build the site and print the build statistics.

    Parameters
    ----------
    root : Path | None, optional
        Site root; defaults to the current working directory.
    config_file : Path | None, optional
        Explicit JSON configuration file.
    skip_extract : bool, optional
        Skip the data extraction stage.
    console : rich.console.Console | None, optional
        Console receiving the summary tables.

    Returns
    -------
    int
        ``0`` on a clean build, ``1`` when entries were skipped, errors were
        recorded or the build stopped, ``2`` on a configuration error.
    """
    site_root = Path(root) if root is not None else Path.cwd()
    try:
        config = load_site_config(site_root, config_file)
    except ConfigurationError as error:
        logger.error(f"Configuration error: {error}")
        return EXIT_CONFIG_ERROR
    if skip_extract:
        config.skip_extract = True

    try:
        report = asyncio.run(build_site(config))
    except ConfigurationError as error:
        logger.error(f"Configuration error: {error}")
        return EXIT_CONFIG_ERROR
    except (AppError, OSError):
        logger.exception("Site build failed")
        return EXIT_INCOMPLETE
    render_build_summary(report, console)
    return exit_code(report)


__all__ = ["build_site", "exit_code", "run_from_config"]
