"""Taxonomy pages (tags, categories, ...).

Each post may list values for one or more taxonomies in its front matter,
either as a YAML list or as a comma separated string. Values are grouped by
their sanitized form, so every ``(taxonomy, sanitized value)`` pair gets
its own paginated listing under ``tags/<taxonomy>/<value>/``.
"""

from __future__ import annotations

import logging
import urllib.parse
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from src.config import INDEX_LAYOUT, TAG_ELLIPSIS, TAG_LAYOUT, TAG_MAX_LENGTH, TAGS_OUTPUT_SUBDIR

from ..content import Post, write_html_output
from ..templating import TemplateRenderer
from .pagination import Page, paginate, render_listing_page, tag_page_name

logger = logging.getLogger(__name__)

TagKey = tuple[str, str]

# Tag pages are written to tags/<taxonomy>/<value>/.
TAG_ROOT_PATH = "../" * 3


def sanitize_tag_value(value: str, max_length: int = TAG_MAX_LENGTH) -> str:
    """Turn a tag value into a URL path segment.

    Values longer than ``max_length`` are cut and suffixed with ``...``.
    The result is lowercased, spaces become hyphens and everything else is
    percent-encoded.

    Examples
    --------
    >>> sanitize_tag_value("Machine Learning")
    'machine-learning'
    >>> sanitize_tag_value("C++")
    'c%2B%2B'
    """
    value = str(value).strip()
    if len(value) > max_length:
        value = value[:max_length] + TAG_ELLIPSIS
    value = value.lower().replace(" ", "-")
    return urllib.parse.quote(value, safe="")


def _tag_values(raw: Any) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        candidates: Iterable[Any] = raw.split(",")
    elif isinstance(raw, (list, tuple)):
        candidates = raw
    else:
        candidates = [raw]
    values = []
    for candidate in candidates:
        text = str(candidate).strip()
        if text and text not in values:
            values.append(text)
    return values


@dataclass
class TagBucket:
    """Posts sharing one taxonomy value.

    ``name`` is the first spelling seen; later spellings that sanitize to the
    same path segment ("Python", "python") join this bucket.
    """

    name: str
    posts: list[Post] = field(default_factory=list)


def collect_tag_buckets(
    posts: Sequence[Post], taxonomies: Sequence[str]
) -> dict[TagKey, TagBucket]:
    """Group posts by ``(taxonomy, sanitized value)``.

    Bucket order and the post order inside each bucket follow ``posts``. A
    post lands in a bucket at most once.

    Examples
    --------
    >>> post = Post("A", "a", "a.html", Path("a.md"), {"tags": "X, y"})
    >>> list(collect_tag_buckets([post], ["tags"]))
    [('tags', 'x'), ('tags', 'y')]
    """
    buckets: dict[TagKey, TagBucket] = {}
    for post in posts:
        for taxonomy in taxonomies:
            for value in _tag_values(post.front_matter.get(taxonomy)):
                bucket = buckets.setdefault(
                    (taxonomy, sanitize_tag_value(value)), TagBucket(name=value)
                )
                if not bucket.posts or bucket.posts[-1] is not post:
                    bucket.posts.append(post)
    return buckets


def generate_tag_pages(
    renderer: TemplateRenderer,
    buckets: dict[TagKey, TagBucket],
    page_size: int,
    output_dir: Path,
) -> list[Path]:
    """Write paginated listing pages for every taxonomy bucket.

    The ``tag`` layout is used when it exists; otherwise ``index``. Pages
    sit three directories below the site root, so post links are prefixed
    with ``../../../``.

    Returns
    -------
    list[Path]
        Written files in bucket order.
    """
    layout = INDEX_LAYOUT
    if renderer.store is not None and renderer.store.layout(TAG_LAYOUT):
        layout = TAG_LAYOUT
    written: list[Path] = []
    for (taxonomy, segment), bucket in buckets.items():
        directory = (
            Path(output_dir) / TAGS_OUTPUT_SUBDIR / sanitize_tag_value(taxonomy) / segment
        )
        pages: list[Page] = paginate(bucket.posts, page_size)
        for page in pages:
            html = render_listing_page(
                renderer,
                page,
                page_name=tag_page_name,
                title=bucket.name,
                layout=layout,
                extra={"tagType": taxonomy, "tagName": bucket.name},
                root_path=TAG_ROOT_PATH,
            )
            output_file = directory / tag_page_name(page.number)
            write_html_output(html, output_file)
            written.append(output_file)
        logger.info(f"Generated {len(pages)} page(s) for {taxonomy}: {bucket.name}")
    return written
