"""Site configuration loader.

:func:`load_site_config` builds a :class:`SiteConfig` from three layers,
later layers winning:

1. defaults from :mod:`src.config`;
2. an optional JSON file (``site.config.json`` in the site root)::

       {
         "layouts": {"include": [], "exclude": []},
         "partials": {"include": [], "exclude": []},
         "csv": {"include": ["movies.csv"]},
         "json": {"include": ["https://example.com/posts.json"]},
         "pagination": {"postsPerPage": 10},
         "taxonomies": ["tags", "categories"]
       }

3. ``SSG_*`` environment variables, after loading ``<root>/.env`` with
   python-dotenv.

Examples
--------
>>> from pathlib import Path
>>> cfg = load_site_config(Path("."))  # doctest: +SKIP
>>> cfg.posts_per_page  # doctest: +SKIP
10
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar

from dotenv import load_dotenv

from src.config import (
    CONTENT_DIR_NAME,
    DATA_DIR_NAME,
    DEFAULT_POSTS_PER_PAGE,
    DEFAULT_TAXONOMIES,
    ENV_PREFIX,
    FETCH_BACKOFF_FACTOR,
    FETCH_MAX_RETRIES,
    FETCH_TARGET_RPM,
    FETCH_TIMEOUT_SECONDS,
    LAYOUTS_DIR_NAME,
    MAX_CONCURRENT_TASKS,
    OUTPUT_DIR_NAME,
    PARTIALS_DIR_NAME,
    SITE_CONFIG_FILENAME,
)
from src.exceptions import ConfigurationError

from ..templating import NameFilter

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class SiteConfig:
    """Resolved configuration of one site build.

    Attributes
    ----------
    root : Path
        Site root; directory settings below are resolved against it.
    content_dir, layouts_dir, partials_dir, output_dir, data_dir : Path
        Input, template, output and data source directories.
    layout_filter, partial_filter : NameFilter
        Include/exclude lists applied by the template store.
    csv_sources, json_sources : list[str]
        Data sources for the extraction stage (URLs or local paths).
    posts_per_page : int
        Page size of the home and taxonomy listings.
    taxonomies : list[str]
        Front matter keys that produce taxonomy pages.
    recursive_partials : bool
        Render partial content instead of inserting it verbatim.
    title_from_filename : bool
        Derive missing titles from file names instead of skipping the file.
    max_concurrency : int
        Upper bound on concurrent file and source tasks.
    fetch_timeout, fetch_max_retries, fetch_backoff_factor, fetch_target_rpm
        Remote source fetch settings.
    skip_extract : bool
        Do not run the data extraction stage.
    """

    root: Path
    content_dir: Path
    layouts_dir: Path
    partials_dir: Path
    output_dir: Path
    data_dir: Path
    layout_filter: NameFilter = field(default_factory=NameFilter)
    partial_filter: NameFilter = field(default_factory=NameFilter)
    csv_sources: list[str] = field(default_factory=list)
    json_sources: list[str] = field(default_factory=list)
    posts_per_page: int = DEFAULT_POSTS_PER_PAGE
    taxonomies: list[str] = field(default_factory=lambda: list(DEFAULT_TAXONOMIES))
    recursive_partials: bool = True
    title_from_filename: bool = False
    max_concurrency: int = MAX_CONCURRENT_TASKS
    fetch_timeout: float = FETCH_TIMEOUT_SECONDS
    fetch_max_retries: int = FETCH_MAX_RETRIES
    fetch_backoff_factor: float = FETCH_BACKOFF_FACTOR
    fetch_target_rpm: int = FETCH_TARGET_RPM
    skip_extract: bool = False

    @classmethod
    def for_root(cls, root: Path) -> SiteConfig:
        """Return the default configuration for a site rooted at ``root``."""
        root = Path(root)
        return cls(
            root=root,
            content_dir=root / CONTENT_DIR_NAME,
            layouts_dir=root / LAYOUTS_DIR_NAME,
            partials_dir=root / PARTIALS_DIR_NAME,
            output_dir=root / OUTPUT_DIR_NAME,
            data_dir=root / DATA_DIR_NAME,
        )


def _string_list(value: Any, key: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ConfigurationError(f"'{key}' must be a list of strings", context={"key": key})


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"'{key}' must be an object", context={"key": key})
    return section


def _convert(raw: Any, convert: Callable[[Any], T], key: str) -> T:
    try:
        return convert(raw)
    except (TypeError, ValueError) as error:
        raise ConfigurationError(
            f"Invalid value for {key}: {raw!r}", context={"key": key}
        ) from error


def _to_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {raw!r}")


def read_config_file(path: Path) -> dict[str, Any]:
    """Read the JSON site configuration file.

    Raises
    ------
    src.exceptions.ConfigurationError
        If the file cannot be read, is not JSON or is not a JSON object.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as error:
        raise ConfigurationError(
            f"Cannot read config file {path}: {error}", context={"path": str(path)}
        ) from error
    except json.JSONDecodeError as error:
        raise ConfigurationError(
            f"Config file {path} is not valid JSON: {error}", context={"path": str(path)}
        ) from error
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {path} must contain a JSON object", context={"path": str(path)}
        )
    return data


def apply_file_settings(config: SiteConfig, data: dict[str, Any]) -> None:
    """Apply settings from a parsed JSON configuration to ``config``."""
    layouts = _section(data, "layouts")
    partials = _section(data, "partials")
    config.layout_filter = NameFilter.from_lists(
        _string_list(layouts.get("include"), "layouts.include"),
        _string_list(layouts.get("exclude"), "layouts.exclude"),
    )
    config.partial_filter = NameFilter.from_lists(
        _string_list(partials.get("include"), "partials.include"),
        _string_list(partials.get("exclude"), "partials.exclude"),
    )
    config.csv_sources = _string_list(_section(data, "csv").get("include"), "csv.include")
    config.json_sources = _string_list(
        _section(data, "json").get("include"), "json.include"
    )
    pagination = _section(data, "pagination")
    if "postsPerPage" in pagination:
        config.posts_per_page = _convert(
            pagination["postsPerPage"], int, "pagination.postsPerPage"
        )
    if "taxonomies" in data:
        config.taxonomies = _string_list(data["taxonomies"], "taxonomies")
    if "recursivePartials" in data:
        config.recursive_partials = _convert(
            data["recursivePartials"], _to_bool, "recursivePartials"
        )
    if "titleFromFilename" in data:
        config.title_from_filename = _convert(
            data["titleFromFilename"], _to_bool, "titleFromFilename"
        )


# (attribute, environment suffix, converter)
_ENV_OVERRIDES: list[tuple[str, str, Callable[[Any], Any]]] = [
    ("posts_per_page", "POSTS_PER_PAGE", int),
    ("recursive_partials", "RECURSIVE_PARTIALS", _to_bool),
    ("title_from_filename", "TITLE_FROM_FILENAME", _to_bool),
    ("max_concurrency", "MAX_CONCURRENCY", int),
    ("fetch_timeout", "FETCH_TIMEOUT", float),
    ("fetch_max_retries", "FETCH_MAX_RETRIES", int),
    ("fetch_backoff_factor", "FETCH_BACKOFF_FACTOR", float),
    ("fetch_target_rpm", "FETCH_TARGET_RPM", int),
]

_ENV_DIRECTORIES: list[tuple[str, str]] = [
    ("content_dir", "CONTENT_DIR"),
    ("layouts_dir", "LAYOUTS_DIR"),
    ("partials_dir", "PARTIALS_DIR"),
    ("output_dir", "OUTPUT_DIR"),
    ("data_dir", "DATA_DIR"),
]


def apply_env_overrides(config: SiteConfig) -> None:
    """Apply ``SSG_*`` environment variables to ``config``."""
    for attribute, suffix, convert in _ENV_OVERRIDES:
        name = f"{ENV_PREFIX}{suffix}"
        raw = os.getenv(name)
        if raw is not None and raw.strip():
            setattr(config, attribute, _convert(raw.strip(), convert, name))
    for attribute, suffix in _ENV_DIRECTORIES:
        raw = os.getenv(f"{ENV_PREFIX}{suffix}")
        if raw:
            setattr(config, attribute, config.root / raw)
    taxonomies = os.getenv(f"{ENV_PREFIX}TAXONOMIES")
    if taxonomies is not None:
        config.taxonomies = _string_list(taxonomies, f"{ENV_PREFIX}TAXONOMIES")


def validate_config(config: SiteConfig) -> None:
    """Reject values the build cannot run with.

    Raises
    ------
    src.exceptions.ConfigurationError
        On a non-positive page size or concurrency, or negative retries.
    """
    if config.posts_per_page < 1:
        raise ConfigurationError(
            "postsPerPage must be at least 1",
            context={"posts_per_page": config.posts_per_page},
        )
    if config.max_concurrency < 1:
        raise ConfigurationError(
            "max_concurrency must be at least 1",
            context={"max_concurrency": config.max_concurrency},
        )
    if config.fetch_max_retries < 0:
        raise ConfigurationError(
            "fetch_max_retries cannot be negative",
            context={"fetch_max_retries": config.fetch_max_retries},
        )
    if config.fetch_timeout <= 0 or config.fetch_target_rpm < 1:
        raise ConfigurationError("Fetch timeout and target rpm must be positive")


def load_site_config(root: Path, config_file: Path | None = None) -> SiteConfig:
    """Load the configuration of the site rooted at ``root``.

    Parameters
    ----------
    root : Path
        Site root directory.
    config_file : Path | None, optional
        Explicit JSON configuration file. When omitted,
        ``<root>/site.config.json`` is used if it exists.

    Returns
    -------
    SiteConfig
        Validated configuration.

    Raises
    ------
    src.exceptions.ConfigurationError
        If an explicit config file is missing or any value is invalid.
    """
    root = Path(root)
    env_path = root / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=True)

    config = SiteConfig.for_root(root)
    if config_file is not None:
        config_path = Path(config_file)
        if not config_path.is_absolute() and not config_path.exists():
            config_path = root / config_path
        if not config_path.exists():
            raise ConfigurationError(
                f"Config file not found: {config_file}",
                context={"path": str(config_file)},
            )
    else:
        config_path = root / SITE_CONFIG_FILENAME

    if config_path.exists():
        logger.info(f"Loading site configuration from {config_path}")
        apply_file_settings(config, read_config_file(config_path))
    apply_env_overrides(config)
    validate_config(config)
    return config
