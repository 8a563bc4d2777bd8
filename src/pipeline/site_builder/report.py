"""Build statistics and their console rendering with rich."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console
from rich.table import Table

from ..content import FileError, SkippedEntry
from ..data_extractor import SourceError


@dataclass(frozen=True)
class StageError:
    """A listing stage that stopped before writing all of its pages."""

    stage: str
    message: str


@dataclass
class BuildReport:
    """Counters and records collected during one site build."""

    posts_created: int = 0
    skipped: list[SkippedEntry] = field(default_factory=list)
    file_errors: list[FileError] = field(default_factory=list)
    source_errors: list[SourceError] = field(default_factory=list)
    stage_errors: list[StageError] = field(default_factory=list)
    index_pages: list[Path] = field(default_factory=list)
    tag_pages: list[Path] = field(default_factory=list)
    extracted_files: list[Path] = field(default_factory=list)
    total_seconds: float = 0.0
    post_timings: list[float] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.file_errors) + len(self.source_errors) + len(self.stage_errors)

    @property
    def average_post_ms(self) -> float:
        """Mean time spent per rendered post, in milliseconds."""
        if not self.post_timings:
            return 0.0
        return sum(self.post_timings) / len(self.post_timings) * 1000

    @property
    def clean(self) -> bool:
        """True when nothing was skipped and nothing failed."""
        return not self.skipped and self.error_count == 0


def build_statistics_table(report: BuildReport) -> Table:
    """Return the "Build Statistics" table for ``report``."""
    table = Table(title="Build Statistics")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Posts created", str(report.posts_created))
    table.add_row("Files skipped", str(len(report.skipped)))
    table.add_row("Errors", str(report.error_count))
    table.add_row("Index pages", str(len(report.index_pages)))
    table.add_row("Tag pages", str(len(report.tag_pages)))
    table.add_row("Extracted files", str(len(report.extracted_files)))
    table.add_row("Total time", f"{report.total_seconds:.2f} s")
    table.add_row("Average per post", f"{report.average_post_ms:.2f} ms")
    return table


def skipped_entries_table(report: BuildReport) -> Table:
    """Return a table listing skipped files with their title and link guesses."""
    table = Table(title="Skipped Entries")
    table.add_column("Title")
    table.add_column("Link")
    table.add_column("Reason")
    for entry in report.skipped:
        table.add_row(entry.title_guess, entry.link_guess, entry.reason)
    return table


def errors_table(report: BuildReport) -> Table:
    table = Table(title="Errors")
    table.add_column("Source")
    table.add_column("Message", style="red")
    for file_error in report.file_errors:
        table.add_row(str(file_error.source), file_error.message)
    for source_error in report.source_errors:
        table.add_row(source_error.source, source_error.message)
    for stage_error in report.stage_errors:
        table.add_row(stage_error.stage, stage_error.message)
    return table


def render_build_summary(report: BuildReport, console: Console | None = None) -> None:
    """Print the build statistics, then skipped entries and errors when present."""
    console = console or Console()
    console.print(build_statistics_table(report))
    if report.skipped:
        console.print(skipped_entries_table(report))
    if report.error_count:
        console.print(errors_table(report))
