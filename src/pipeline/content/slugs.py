"""Slug sanitization and collision handling.

Slugs are URL- and filename-safe identifiers derived from titles. The same
helpers are used by the content pipeline and by the data extractor.
"""

from __future__ import annotations

import re
import unicodedata

from src.config import DEFAULT_SLUG, LISTING_SLUG_SUFFIX, SLUG_MAX_LENGTH, SLUG_SEPARATOR

_DISALLOWED_RE = re.compile(r"[^a-z0-9\s-]")
_LISTING_PAGE_RE = re.compile(r"index(?:-\d+)?")
_SEPARATOR_RUN_RE = re.compile(r"[\s-]+")


def sanitize_slug(
    value: object,
    max_length: int = SLUG_MAX_LENGTH,
    separator: str = SLUG_SEPARATOR,
) -> str:
    """Return a lowercase, hyphen-separated slug for ``value``.

    Accented letters are folded to ASCII, characters outside ``[a-z0-9]``,
    whitespace and hyphens are dropped, whitespace/hyphen runs collapse to
    one separator, the result is truncated to ``max_length`` and trimmed of
    separators. An empty result falls back to ``DEFAULT_SLUG``. Applying the
    function twice gives the same result as applying it once.

    Examples
    --------
    >>> sanitize_slug("My First Blog Post!")
    'my-first-blog-post'
    >>> sanitize_slug("  --Café  au lait-- ")
    'cafe-au-lait'
    >>> sanitize_slug("???")
    'post'
    """
    if value is None:
        return DEFAULT_SLUG
    text = unicodedata.normalize("NFKD", str(value))
    text = text.encode("ascii", "ignore").decode("ascii")
    slug = text.lower().strip()
    slug = _DISALLOWED_RE.sub("", slug)
    slug = _SEPARATOR_RUN_RE.sub(separator, slug)
    slug = slug[:max_length]
    slug = slug.strip(separator)
    return slug or DEFAULT_SLUG


def ensure_unique_slug(slug: str, existing: set[str]) -> str:
    """Return ``slug`` or the first free ``slug-N`` and record it in ``existing``.

    Examples
    --------
    >>> seen: set[str] = set()
    >>> ensure_unique_slug("hello-world", seen), ensure_unique_slug("hello-world", seen)
    ('hello-world', 'hello-world-1')
    """
    candidate = slug
    counter = 1
    while candidate in existing:
        candidate = f"{slug}{SLUG_SEPARATOR}{counter}"
        counter += 1
    existing.add(candidate)
    return candidate


def avoid_listing_names(slug: str) -> str:
    """Move ``slug`` off the home listing file names ``index`` and ``index-N``.

    Examples
    --------
    >>> avoid_listing_names("index-2"), avoid_listing_names("indexing")
    ('index-2-post', 'indexing')
    """
    if _LISTING_PAGE_RE.fullmatch(slug):
        return f"{slug}{SLUG_SEPARATOR}{LISTING_SLUG_SUFFIX}"
    return slug


def title_from_filename(stem: str) -> str:
    """Turn a filename stem such as ``"my-first_post"`` into ``"My first post"``."""
    words = re.sub(r"[-_]+", " ", stem).strip()
    return words[:1].upper() + words[1:]
