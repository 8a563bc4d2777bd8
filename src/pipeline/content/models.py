"""Records produced by the content pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class Post:
    """One rendered Markdown file.

    Attributes
    ----------
    title : str
        Resolved post title.
    slug : str
        Unique slug within the post's output directory.
    url : str
        Output path relative to the site root, e.g. ``"blog/hello.html"``.
    source : Path
        Markdown file path relative to the content directory.
    front_matter : dict[str, Any]
        Metadata parsed from the file, passed through to templates.
    """

    title: str
    slug: str
    url: str
    source: Path
    front_matter: dict[str, Any] = field(default_factory=dict)

    def to_context(self) -> dict[str, Any]:
        """Return front matter plus the resolved ``title``, ``slug`` and ``url``."""
        context = dict(self.front_matter)
        context.update({"title": self.title, "slug": self.slug, "url": self.url})
        return context

    def ref(self) -> dict[str, str]:
        """Return the ``{title, url}`` reference used by listing pages."""
        return {"title": self.title, "url": self.url}


@dataclass(frozen=True)
class SkippedEntry:
    """A Markdown file that was deliberately not rendered."""

    title_guess: str
    link_guess: str
    reason: str
    source: Path | None = None


@dataclass(frozen=True)
class FileError:
    """A per-file failure that was logged and did not stop the batch."""

    source: Path
    message: str


@dataclass
class ContentResult:
    """Outcome of :meth:`ContentPipeline.process_all`."""

    posts: list[Post] = field(default_factory=list)
    skipped: list[SkippedEntry] = field(default_factory=list)
    errors: list[FileError] = field(default_factory=list)
    timings: list[float] = field(default_factory=list)

    @property
    def posts_created(self) -> int:
        return len(self.posts)
