"""Template store for named layouts and partials.

Layouts and partials are plain ``.html`` files in two directories. The store
is constructed once at startup, optionally preloaded, and then shared by the
renderer and the content pipeline. Lookups prefer the cache and fall back to
an on-demand disk read; a missing file is not an error and resolves to an
empty string, which the renderer treats as no-op content.

Examples
--------
>>> from pathlib import Path
>>> store = TemplateStore(Path("prebuild/layouts"), Path("partials"))
>>> report = store.preload()  # doctest: +SKIP
>>> store.layout("base")  # doctest: +SKIP
'<html>...'
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from src.config import TEMPLATE_SUFFIX

logger = logging.getLogger(__name__)


class TemplateKind(str, Enum):
    """Kinds of named templates, each backed by its own directory."""

    LAYOUT = "layout"
    PARTIAL = "partial"


@dataclass(frozen=True)
class NameFilter:
    """Include/exclude allow-list for template names.

    A name passes when ``include`` is empty or lists it, and ``exclude`` does
    not list it.

    Examples
    --------
    >>> NameFilter(include=("base",)).allows("base")
    True
    >>> NameFilter(exclude=("list",)).allows("list")
    False
    """

    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()

    @classmethod
    def from_lists(
        cls, include: Iterable[str] | None = None, exclude: Iterable[str] | None = None
    ) -> NameFilter:
        return cls(tuple(include or ()), tuple(exclude or ()))

    def allows(self, name: str) -> bool:
        return (not self.include or name in self.include) and name not in self.exclude


@dataclass
class PreloadReport:
    """Names cached or skipped by :meth:`TemplateStore.preload`."""

    loaded: dict[TemplateKind, list[str]] = field(
        default_factory=lambda: {kind: [] for kind in TemplateKind}
    )
    skipped: dict[TemplateKind, list[str]] = field(
        default_factory=lambda: {kind: [] for kind in TemplateKind}
    )


class TemplateStore:
    """Load and cache named layout and partial templates.

    Parameters
    ----------
    layouts_dir : Path
        Directory holding ``<name>.html`` layouts.
    partials_dir : Path
        Directory holding ``<name>.html`` partials.
    layout_filter, partial_filter : NameFilter, optional
        Allow-lists per kind. Names rejected by a filter resolve to ``""``.

    Notes
    -----
    Cache writes are guarded by a lock so concurrent lazy fills from worker
    threads are safe. After :meth:`preload` the store is read-mostly.
    """

    def __init__(
        self,
        layouts_dir: Path,
        partials_dir: Path,
        *,
        layout_filter: NameFilter | None = None,
        partial_filter: NameFilter | None = None,
    ) -> None:
        self._dirs = {
            TemplateKind.LAYOUT: Path(layouts_dir),
            TemplateKind.PARTIAL: Path(partials_dir),
        }
        self._filters = {
            TemplateKind.LAYOUT: layout_filter or NameFilter(),
            TemplateKind.PARTIAL: partial_filter or NameFilter(),
        }
        self._cache: dict[TemplateKind, dict[str, str]] = {
            kind: {} for kind in TemplateKind
        }
        self._lock = threading.Lock()

    def path_for(self, kind: TemplateKind, name: str) -> Path:
        """Return the file path a template name resolves to."""
        return self._dirs[TemplateKind(kind)] / f"{name}{TEMPLATE_SUFFIX}"

    def preload(self) -> PreloadReport:
        """Read every allowed template of both kinds into the cache.

        Missing directories are logged and treated as empty.

        Returns
        -------
        PreloadReport
            Loaded and skipped names per kind, in sorted order.
        """
        report = PreloadReport()
        for kind in TemplateKind:
            directory = self._dirs[kind]
            if not directory.is_dir():
                logger.warning("Template directory for %ss not found: %s", kind.value, directory)
                continue
            for path in sorted(directory.glob(f"*{TEMPLATE_SUFFIX}")):
                name = path.stem
                if not self._filters[kind].allows(name):
                    report.skipped[kind].append(name)
                    logger.info("Skipped %s: %s", kind.value, name)
                    continue
                content = path.read_text(encoding="utf-8")
                with self._lock:
                    self._cache[kind][name] = content
                report.loaded[kind].append(name)
                logger.info("Preloaded %s: %s", kind.value, name)
        return report

    def load(self, kind: TemplateKind, name: str) -> str:
        """Return the text of template ``name`` of the given kind.

        Parameters
        ----------
        kind : TemplateKind
            Layout or partial.
        name : str
            Template name without the ``.html`` suffix.

        Returns
        -------
        str
            Template text, or ``""`` when the file does not exist or the name
            is filtered out.

        Raises
        ------
        OSError
            If an existing template file cannot be read.
        """
        kind = TemplateKind(kind)
        cached = self._cache[kind].get(name)
        if cached is not None:
            return cached
        if not self._filters[kind].allows(name):
            logger.debug("%s %r is excluded by configuration", kind.value, name)
            return ""
        path = self.path_for(kind, name)
        if not path.is_file():
            logger.debug("%s %r not found at %s", kind.value, name, path)
            return ""
        content = path.read_text(encoding="utf-8")
        with self._lock:
            self._cache[kind].setdefault(name, content)
        return content

    def layout(self, name: str) -> str:
        return self.load(TemplateKind.LAYOUT, name)

    def partial(self, name: str) -> str:
        return self.load(TemplateKind.PARTIAL, name)

    def cached_names(self, kind: TemplateKind) -> list[str]:
        """Return the names currently cached for ``kind``."""
        return sorted(self._cache[TemplateKind(kind)])
