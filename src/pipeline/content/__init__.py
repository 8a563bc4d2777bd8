"""Content pipeline package.

Exposes front matter parsing, Markdown conversion, slug helpers and the
:class:`ContentPipeline` that turns Markdown files into rendered pages.
"""

from .file_handler import find_markdown_files, write_html_output
from .front_matter import dump_front_matter, split_front_matter
from .markdown_render import clean_html_output, markdown_to_html
from .models import ContentResult, FileError, Post, SkippedEntry
from .processor import ContentPipeline, ParsedDocument
from .slugs import avoid_listing_names, ensure_unique_slug, sanitize_slug, title_from_filename

__all__ = [
    "ContentPipeline",
    "ContentResult",
    "FileError",
    "ParsedDocument",
    "Post",
    "SkippedEntry",
    "avoid_listing_names",
    "clean_html_output",
    "dump_front_matter",
    "ensure_unique_slug",
    "find_markdown_files",
    "markdown_to_html",
    "sanitize_slug",
    "split_front_matter",
    "title_from_filename",
    "write_html_output",
]
