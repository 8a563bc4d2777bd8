"""Tests for TemplateStore loading, caching and include/exclude filters."""

import logging
from pathlib import Path

from src.pipeline.templating import NameFilter, TemplateKind, TemplateStore


def make_dirs(tmp_path: Path) -> tuple[Path, Path]:
    layouts = tmp_path / "layouts"
    partials = tmp_path / "partials"
    layouts.mkdir()
    partials.mkdir()
    (layouts / "base.html").write_text("BASE {{ content }}", encoding="utf-8")
    (layouts / "single.html").write_text("SINGLE", encoding="utf-8")
    (layouts / "list.html").write_text("LIST", encoding="utf-8")
    (partials / "header.html").write_text("HEADER", encoding="utf-8")
    (partials / "notes.txt").write_text("not a template", encoding="utf-8")
    return layouts, partials


def test_missing_template_is_empty(tmp_path: Path):
    layouts, partials = make_dirs(tmp_path)
    store = TemplateStore(layouts, partials)
    assert store.layout("nope") == ""
    assert store.partial("nope") == ""


def test_lazy_load_reads_and_caches(tmp_path: Path):
    layouts, partials = make_dirs(tmp_path)
    store = TemplateStore(layouts, partials)
    assert store.layout("single") == "SINGLE"
    (layouts / "single.html").write_text("CHANGED", encoding="utf-8")
    assert store.layout("single") == "SINGLE"
    assert store.cached_names(TemplateKind.LAYOUT) == ["single"]


def test_preload_applies_filters(tmp_path: Path, caplog):
    layouts, partials = make_dirs(tmp_path)
    store = TemplateStore(
        layouts,
        partials,
        layout_filter=NameFilter.from_lists(exclude=["list"]),
        partial_filter=NameFilter.from_lists(include=["footer"]),
    )
    with caplog.at_level(logging.INFO):
        report = store.preload()
    assert report.loaded[TemplateKind.LAYOUT] == ["base", "single"]
    assert report.skipped[TemplateKind.LAYOUT] == ["list"]
    assert report.loaded[TemplateKind.PARTIAL] == []
    assert report.skipped[TemplateKind.PARTIAL] == ["header"]
    assert "Preloaded layout: base" in caplog.text
    assert "Skipped layout: list" in caplog.text
    # Filtered names never resolve, even lazily.
    assert store.layout("list") == ""
    assert store.partial("header") == ""


def test_preload_with_missing_directories(tmp_path: Path):
    store = TemplateStore(tmp_path / "none", tmp_path / "also-none")
    report = store.preload()
    assert report.loaded == {TemplateKind.LAYOUT: [], TemplateKind.PARTIAL: []}
    assert store.layout("base") == ""


def test_name_filter_rules():
    assert NameFilter().allows("anything")
    assert NameFilter(include=("base",)).allows("base")
    assert not NameFilter(include=("base",)).allows("single")
    assert not NameFilter(include=("base",), exclude=("base",)).allows("base")


def test_path_for(tmp_path: Path):
    store = TemplateStore(tmp_path / "l", tmp_path / "p")
    assert store.path_for(TemplateKind.PARTIAL, "nav") == tmp_path / "p" / "nav.html"
