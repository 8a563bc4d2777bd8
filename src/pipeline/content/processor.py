"""ContentPipeline: Markdown files to rendered HTML pages.

This module discovers Markdown files in the content directory (and one level
of subdirectories), parses their front matter, converts the body to HTML,
renders the ``single`` layout wrapped in the ``base`` layout and writes one
page per file under the output directory, mirroring the input subdirectory.

Files are read, parsed and converted concurrently on worker threads. Slug
assignment and the resulting post order follow discovery order, so the
output is the same on every run. A failure on one file is logged and
recorded; the rest of the batch continues.

Examples
--------
>>> import asyncio
>>> from pathlib import Path
>>> from src.pipeline.templating import TemplateRenderer, TemplateStore
>>> store = TemplateStore(Path("prebuild/layouts"), Path("partials"))
>>> pipeline = ContentPipeline(Path("content"), Path("public"), TemplateRenderer(store))
>>> # result = asyncio.run(pipeline.process_all())
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar

from src.config import MAX_CONCURRENT_TASKS, SINGLE_LAYOUT

from ..templating import TemplateRenderer
from .file_handler import find_markdown_files, write_html_output
from .front_matter import split_front_matter
from .markdown_render import markdown_to_html
from .models import ContentResult, FileError, Post, SkippedEntry
from .slugs import avoid_listing_names, ensure_unique_slug, sanitize_slug, title_from_filename

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ParsedDocument:
    """A Markdown file after front matter parsing and Markdown conversion."""

    source: Path
    title: str
    slug_source: str
    content_html: str
    front_matter: dict[str, Any] = field(default_factory=dict)
    elapsed: float = 0.0


class ContentPipeline:
    """Render every Markdown file of a content directory into HTML pages.

    Parameters
    ----------
    content_dir : Path
        Directory holding the Markdown input.
    output_dir : Path
        Directory receiving the generated pages.
    renderer : TemplateRenderer
        Renderer bound to the template store holding ``single`` and ``base``.
    title_from_filename : bool, optional
        Derive a title from the filename when front matter has none, instead
        of skipping the file.
    max_concurrency : int, optional
        Upper bound on files processed at the same time.
    """

    def __init__(
        self,
        content_dir: Path,
        output_dir: Path,
        renderer: TemplateRenderer,
        *,
        title_from_filename: bool = False,
        max_concurrency: int = MAX_CONCURRENT_TASKS,
    ) -> None:
        self.content_dir = Path(content_dir)
        self.output_dir = Path(output_dir)
        self.renderer = renderer
        self.title_from_filename = title_from_filename
        self.max_concurrency = max(1, int(max_concurrency))

    def parse_file(self, relative_path: Path) -> ParsedDocument | SkippedEntry:
        """Read and parse one Markdown file.

        Parameters
        ----------
        relative_path : Path
            File path relative to the content directory.

        Returns
        -------
        ParsedDocument | SkippedEntry
            The parsed document, or a skip record when no title resolves.

        Raises
        ------
        OSError
            If the file cannot be read.
        src.exceptions.FrontMatterError
            If the front matter block is invalid.
        """
        start = time.perf_counter()
        raw_text = (self.content_dir / relative_path).read_text(encoding="utf-8")
        front_matter, body = split_front_matter(raw_text)
        raw_title = front_matter.get("title")
        title = str(raw_title).strip() if raw_title is not None else ""
        if not title and self.title_from_filename:
            title = title_from_filename(relative_path.stem)
        if not title:
            link_guess = relative_path.with_suffix(".html").as_posix()
            logger.warning("Skipping %s: no title in front matter", relative_path)
            return SkippedEntry(
                title_guess=relative_path.stem,
                link_guess=link_guess,
                reason="missing title",
                source=relative_path,
            )
        slug_source = front_matter.get("slug") or title
        return ParsedDocument(
            source=relative_path,
            title=title,
            slug_source=str(slug_source),
            content_html=markdown_to_html(body),
            front_matter=front_matter,
            elapsed=time.perf_counter() - start,
        )

    def render_post(self, document: ParsedDocument, slug: str, url: str) -> str:
        """Render the ``single`` layout for ``document`` and wrap it in ``base``."""
        page_context = dict(document.front_matter)
        page_context.update({"title": document.title, "slug": slug, "url": url})
        single_context = dict(page_context)
        single_context["content"] = document.content_html
        single_html = self.renderer.render_layout(SINGLE_LAYOUT, single_context)
        return self.renderer.render_with_base(single_html, page_context)

    def write_post(self, document: ParsedDocument, slug: str) -> tuple[Post, float]:
        """Render and write ``document`` as ``<subdir>/<slug>.html``.

        Returns
        -------
        tuple[Post, float]
            The post record and the total seconds spent on this file.
        """
        start = time.perf_counter()
        url = (document.source.parent / f"{slug}.html").as_posix()
        html = self.render_post(document, slug, url)
        write_html_output(html, self.output_dir / url)
        elapsed = document.elapsed + time.perf_counter() - start
        logger.info("Generated: %s in %.4f seconds", url, elapsed)
        post = Post(
            title=document.title,
            slug=slug,
            url=url,
            source=document.source,
            front_matter=document.front_matter,
        )
        return post, elapsed

    async def process_all(self) -> ContentResult:
        """Process every discovered Markdown file.

        Returns
        -------
        ContentResult
            Posts in discovery order, skipped entries, per-file errors and
            per-post timings.
        """
        result = ContentResult()
        files = find_markdown_files(self.content_dir)
        if not files:
            logger.warning(
                f"No markdown files found in content directory: {self.content_dir.resolve()}"
            )
            return result
        self.output_dir.mkdir(parents=True, exist_ok=True)
        semaphore = asyncio.Semaphore(self.max_concurrency)

        parsed = await asyncio.gather(
            *(self._run_guarded(semaphore, path, self.parse_file, path) for path in files)
        )

        assignments: list[tuple[ParsedDocument, str]] = []
        slugs_by_dir: dict[Path, set[str]] = {}
        for outcome in parsed:
            if isinstance(outcome, FileError):
                result.errors.append(outcome)
                continue
            if isinstance(outcome, SkippedEntry):
                result.skipped.append(outcome)
                continue
            directory = outcome.source.parent
            slug = sanitize_slug(outcome.slug_source)
            if directory == Path("."):
                # Home listing pages live in the output root.
                slug = avoid_listing_names(slug)
            slug = ensure_unique_slug(slug, slugs_by_dir.setdefault(directory, set()))
            assignments.append((outcome, slug))

        written = await asyncio.gather(
            *(
                self._run_guarded(semaphore, document.source, self.write_post, document, slug)
                for document, slug in assignments
            )
        )
        for outcome in written:
            if isinstance(outcome, FileError):
                result.errors.append(outcome)
                continue
            post, elapsed = outcome
            result.posts.append(post)
            result.timings.append(elapsed)
        return result

    async def _run_guarded(
        self,
        semaphore: asyncio.Semaphore,
        source: Path,
        func: Callable[..., T],
        *args: Any,
    ) -> T | FileError:
        """Run ``func`` on a worker thread, turning failures into ``FileError``."""
        async with semaphore:
            try:
                return await asyncio.to_thread(func, *args)
            except Exception as error:
                logger.error(f"Error processing file {source}: {error}", exc_info=True)
                return FileError(source=source, message=str(error))
