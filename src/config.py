"""Global configuration constants for the project.

Defines default paths, filenames and limits used across the site pipeline.
Runtime overrides are resolved by ``src.pipeline.site_builder.config``.
"""

from __future__ import annotations

from pathlib import Path

# Project directories
PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
SRC_DIR: Path = PROJECT_ROOT / "src"
LOG_DIR: Path = PROJECT_ROOT / "logs"

# Site directories (relative to the site root)
CONTENT_DIR_NAME: str = "content"
LAYOUTS_DIR_NAME: str = "prebuild/layouts"
PARTIALS_DIR_NAME: str = "partials"
OUTPUT_DIR_NAME: str = "public"
DATA_DIR_NAME: str = "prebuild/data"
SITE_CONFIG_FILENAME: str = "site.config.json"

# Template files
TEMPLATE_SUFFIX: str = ".html"
MARKDOWN_SUFFIX: str = ".md"
BASE_LAYOUT: str = "base"
SINGLE_LAYOUT: str = "single"
LIST_LAYOUT: str = "list"
INDEX_LAYOUT: str = "index"
TAG_LAYOUT: str = "tag"
MAX_PARTIAL_DEPTH: int = 10

# Markdown conversion
MARKDOWN_EXTRAS: list[str] = [
    "tables",
    "fenced-code-blocks",
    "strike",
    "footnotes",
    "header-ids",
]

# Slugs and tags
SLUG_MAX_LENGTH: int = 50
SLUG_SEPARATOR: str = "-"
DEFAULT_SLUG: str = "post"
LISTING_SLUG_SUFFIX: str = "post"
TAG_MAX_LENGTH: int = 50
TAG_ELLIPSIS: str = "..."
TAGS_OUTPUT_SUBDIR: str = "tags"
DEFAULT_TAXONOMIES: list[str] = ["tags", "categories"]

# Pagination
DEFAULT_POSTS_PER_PAGE: int = 10
HOME_TITLE: str = "Home"

# Data extraction defaults
UNTITLED_TITLE: str = "Untitled"
TITLE_FIELDS: list[str] = ["title", "Title", "name", "Name"]
BODY_FIELDS: list[str] = ["content", "Content", "body", "Body", "Plot", "plot", "description"]
FETCH_TIMEOUT_SECONDS: int = 30
FETCH_MAX_RETRIES: int = 0
FETCH_BACKOFF_FACTOR: float = 2.0
FETCH_TARGET_RPM: int = 600
MAX_CONCURRENT_TASKS: int = 8

# CLI defaults and logging
LOG_FILENAME_GENERATE_SITE: str = "generate_site.log"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ENV_PREFIX: str = "SSG_"
