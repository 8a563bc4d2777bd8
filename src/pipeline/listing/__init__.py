"""Listing pages: the paginated home index and taxonomy pages."""

from .pagination import (
    Page,
    generate_index_pages,
    index_page_name,
    paginate,
    pagination_context,
    render_listing_page,
    tag_page_name,
)
from .tags import TagBucket, collect_tag_buckets, generate_tag_pages, sanitize_tag_value

__all__ = [
    "Page",
    "TagBucket",
    "collect_tag_buckets",
    "generate_index_pages",
    "generate_tag_pages",
    "index_page_name",
    "paginate",
    "pagination_context",
    "render_listing_page",
    "sanitize_tag_value",
    "tag_page_name",
]
