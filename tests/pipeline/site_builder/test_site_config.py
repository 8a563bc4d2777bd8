"""Tests for site configuration loading: defaults, JSON file, .env and env vars."""

import json
from pathlib import Path

import pytest

from src.exceptions import ConfigurationError
from src.pipeline.site_builder import SiteConfig, load_site_config

SSG_VARS = [
    "SSG_POSTS_PER_PAGE",
    "SSG_RECURSIVE_PARTIALS",
    "SSG_TITLE_FROM_FILENAME",
    "SSG_MAX_CONCURRENCY",
    "SSG_FETCH_TIMEOUT",
    "SSG_FETCH_MAX_RETRIES",
    "SSG_FETCH_BACKOFF_FACTOR",
    "SSG_FETCH_TARGET_RPM",
    "SSG_CONTENT_DIR",
    "SSG_LAYOUTS_DIR",
    "SSG_PARTIALS_DIR",
    "SSG_OUTPUT_DIR",
    "SSG_DATA_DIR",
    "SSG_TAXONOMIES",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in SSG_VARS:
        monkeypatch.delenv(name, raising=False)


def write_config(root: Path, data, name: str = "site.config.json") -> Path:
    path = root / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_defaults(tmp_path: Path):
    cfg = load_site_config(tmp_path)
    assert cfg == SiteConfig.for_root(tmp_path)
    assert cfg.content_dir == tmp_path / "content"
    assert cfg.layouts_dir == tmp_path / "prebuild" / "layouts"
    assert cfg.partials_dir == tmp_path / "partials"
    assert cfg.output_dir == tmp_path / "public"
    assert cfg.posts_per_page == 10
    assert cfg.taxonomies == ["tags", "categories"]
    assert cfg.recursive_partials is True
    assert cfg.title_from_filename is False
    assert cfg.fetch_max_retries == 0


def test_json_file_settings(tmp_path: Path):
    write_config(
        tmp_path,
        {
            "layouts": {"include": [], "exclude": ["list"]},
            "partials": {"include": ["header"], "exclude": []},
            "csv": {"include": ["movies.csv"]},
            "json": {"include": ["https://example.com/posts.json"]},
            "pagination": {"postsPerPage": 5},
            "taxonomies": ["tags"],
            "recursivePartials": False,
        },
    )
    cfg = load_site_config(tmp_path)
    assert not cfg.layout_filter.allows("list")
    assert cfg.partial_filter.include == ("header",)
    assert cfg.csv_sources == ["movies.csv"]
    assert cfg.json_sources == ["https://example.com/posts.json"]
    assert cfg.posts_per_page == 5
    assert cfg.taxonomies == ["tags"]
    assert cfg.recursive_partials is False


def test_explicit_config_file(tmp_path: Path):
    path = write_config(tmp_path, {"pagination": {"postsPerPage": 3}}, name="other.json")
    assert load_site_config(tmp_path, path).posts_per_page == 3


def test_env_overrides_file(tmp_path: Path, monkeypatch):
    write_config(tmp_path, {"pagination": {"postsPerPage": 5}})
    monkeypatch.setenv("SSG_POSTS_PER_PAGE", "7")
    monkeypatch.setenv("SSG_TITLE_FROM_FILENAME", "yes")
    monkeypatch.setenv("SSG_OUTPUT_DIR", "dist")
    monkeypatch.setenv("SSG_TAXONOMIES", "tags, series")
    cfg = load_site_config(tmp_path)
    assert cfg.posts_per_page == 7
    assert cfg.title_from_filename is True
    assert cfg.output_dir == tmp_path / "dist"
    assert cfg.taxonomies == ["tags", "series"]


def test_dotenv_file_is_loaded(tmp_path: Path, monkeypatch):
    # Registered first so monkeypatch restores the variable after the test.
    monkeypatch.setenv("SSG_MAX_CONCURRENCY", "1")
    (tmp_path / ".env").write_text("SSG_MAX_CONCURRENCY=3\n", encoding="utf-8")
    assert load_site_config(tmp_path).max_concurrency == 3


@pytest.mark.parametrize(
    "data",
    [
        {"pagination": {"postsPerPage": 0}},
        {"pagination": {"postsPerPage": "many"}},
        {"layouts": ["base"]},
        {"csv": {"include": [1, 2]}},
        ["not", "an", "object"],
    ],
)
def test_invalid_file_values_raise(tmp_path: Path, data):
    write_config(tmp_path, data)
    with pytest.raises(ConfigurationError):
        load_site_config(tmp_path)


def test_invalid_json_raises(tmp_path: Path):
    (tmp_path / "site.config.json").write_text("{oops", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_site_config(tmp_path)


def test_missing_explicit_file_raises(tmp_path: Path):
    with pytest.raises(ConfigurationError):
        load_site_config(tmp_path, tmp_path / "missing.json")


def test_invalid_env_value_raises(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("SSG_RECURSIVE_PARTIALS", "maybe")
    with pytest.raises(ConfigurationError):
        load_site_config(tmp_path)
