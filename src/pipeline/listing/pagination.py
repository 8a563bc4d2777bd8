"""Paginated index pages.

Posts are split into fixed-size pages. Each page renders the ``list``
layout with its slice of posts, feeds the result into the ``index`` layout
together with navigation values and wraps everything in ``base``.

Page one is written as ``index.html``; page ``N`` as ``index-N.html``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from src.config import HOME_TITLE, INDEX_LAYOUT, LIST_LAYOUT
from src.exceptions import ConfigurationError

from ..content import Post, write_html_output
from ..templating import TemplateRenderer

logger = logging.getLogger(__name__)


@dataclass
class Page:
    """One page of a paginated listing.

    Attributes
    ----------
    number : int
        1-based page number.
    total_pages : int
        Number of pages in the listing.
    items : list
        Items shown on this page.
    """

    number: int
    total_pages: int
    items: list[Any] = field(default_factory=list)

    @property
    def prev_page(self) -> int | None:
        return self.number - 1 if self.number > 1 else None

    @property
    def next_page(self) -> int | None:
        return self.number + 1 if self.number < self.total_pages else None


def paginate(items: Sequence[Any], page_size: int) -> list[Page]:
    """Split ``items`` into pages of at most ``page_size`` entries.

    Raises
    ------
    src.exceptions.ConfigurationError
        If ``page_size`` is smaller than one.

    Examples
    --------
    >>> [len(p.items) for p in paginate(list(range(25)), 10)]
    [10, 10, 5]
    >>> paginate([], 10)
    []
    """
    if page_size < 1:
        raise ConfigurationError(
            "Posts per page must be at least 1", context={"page_size": page_size}
        )
    total_pages = math.ceil(len(items) / page_size)
    return [
        Page(
            number=number,
            total_pages=total_pages,
            items=list(items[(number - 1) * page_size : number * page_size]),
        )
        for number in range(1, total_pages + 1)
    ]


def index_page_name(number: int) -> str:
    """Return the file name of home listing page ``number``."""
    return "index.html" if number == 1 else f"index-{number}.html"


def tag_page_name(number: int) -> str:
    """Return the file name of tag listing page ``number``."""
    return "index.html" if number == 1 else f"page-{number}.html"


def pagination_context(page: Page, page_name: Callable[[int], str]) -> dict[str, Any]:
    """Build the navigation values exposed to listing layouts."""
    prev_page, next_page = page.prev_page, page.next_page
    return {
        "currentPage": page.number,
        "totalPages": page.total_pages,
        "prevPage": prev_page,
        "nextPage": next_page,
        "prevUrl": page_name(prev_page) if prev_page else None,
        "nextUrl": page_name(next_page) if next_page else None,
        "hasPagination": page.total_pages > 1,
    }


def render_listing_page(
    renderer: TemplateRenderer,
    page: Page,
    *,
    page_name: Callable[[int], str],
    title: str,
    layout: str = INDEX_LAYOUT,
    extra: dict[str, Any] | None = None,
    root_path: str = "",
) -> str:
    """Render one listing page: ``list`` into ``layout`` into ``base``.

    ``root_path`` leads from the page's directory back to the site root.
    It prefixes every post ``url`` and is exposed as ``rootPath``.
    """
    posts = []
    for post in page.items:
        post_context = post.to_context()
        post_context["url"] = root_path + post.url
        posts.append(post_context)
    list_html = renderer.render_layout(LIST_LAYOUT, {"posts": posts, "rootPath": root_path})
    context: dict[str, Any] = {
        "list": list_html,
        "posts": posts,
        "title": title,
        "rootPath": root_path,
    }
    context.update(pagination_context(page, page_name))
    if extra:
        context.update(extra)
    page_html = renderer.render_layout(layout, context)
    return renderer.render_with_base(
        page_html, {**(extra or {}), "title": title, "rootPath": root_path}
    )


def generate_index_pages(
    renderer: TemplateRenderer,
    posts: Sequence[Post],
    page_size: int,
    output_dir: Path,
) -> list[Path]:
    """Write the paginated home listing.

    Parameters
    ----------
    renderer : TemplateRenderer
        Renderer bound to the layouts store.
    posts : Sequence[Post]
        Posts in listing order.
    page_size : int
        Posts per page.
    output_dir : Path
        Site output directory.

    Returns
    -------
    list[Path]
        Written files. With no posts a single empty ``index.html`` is written.
    """
    pages = paginate(posts, page_size) or [Page(number=1, total_pages=1)]
    written: list[Path] = []
    for page in pages:
        title = HOME_TITLE if page.number == 1 else f"Page {page.number}"
        html = render_listing_page(
            renderer, page, page_name=index_page_name, title=title
        )
        output_file = Path(output_dir) / index_page_name(page.number)
        write_html_output(html, output_file)
        logger.info(f"Generated page {page.number}/{page.total_pages}: {output_file}")
        written.append(output_file)
    return written
