"""Tests for BuildReport counters, exit codes and the rich summary."""

import io
from pathlib import Path

import pytest
from rich.console import Console

from src.exceptions import ExternalServiceError
from src.pipeline.content import FileError, SkippedEntry
from src.pipeline.data_extractor import SourceError
from src.pipeline.site_builder import BuildReport, StageError, exit_code, render_build_summary


def make_console() -> Console:
    return Console(file=io.StringIO(), record=True, width=120)


def test_clean_report():
    report = BuildReport(posts_created=2, post_timings=[0.001, 0.003])
    assert report.clean
    assert exit_code(report) == 0
    assert report.average_post_ms == pytest.approx(2.0)


def test_skips_and_errors_make_exit_code_one():
    skipped = BuildReport(skipped=[SkippedEntry("a", "a.html", "missing title")])
    assert exit_code(skipped) == 1
    errored = BuildReport(file_errors=[FileError(Path("b.md"), "boom")])
    assert errored.error_count == 1
    assert exit_code(errored) == 1


def test_render_build_summary_tables():
    report = BuildReport(
        posts_created=3,
        skipped=[SkippedEntry("draft-notes", "draft-notes.html", "missing title")],
        source_errors=[SourceError("https://x/a.csv", ExternalServiceError("Failed"))],
        index_pages=[Path("index.html")],
    )
    console = make_console()
    render_build_summary(report, console)
    text = console.export_text()
    assert "Build Statistics" in text
    assert "Posts created" in text
    assert "Skipped Entries" in text
    assert "draft-notes.html" in text
    assert "https://x/a.csv" in text


def test_render_build_summary_clean_has_no_extra_tables():
    console = make_console()
    render_build_summary(BuildReport(posts_created=1), console)
    text = console.export_text()
    assert "Build Statistics" in text
    assert "Skipped Entries" not in text


def test_stage_errors_are_counted_and_listed():
    report = BuildReport(
        posts_created=1,
        stage_errors=[StageError("Index pages", "TEMPLATE_RENDER_ERROR: cycle")],
    )
    assert report.error_count == 1
    assert exit_code(report) == 1
    console = make_console()
    render_build_summary(report, console)
    assert "TEMPLATE_RENDER_ERROR: cycle" in console.export_text()
