"""File handling utilities for the content pipeline.

This module knows how to find Markdown files and write generated pages.
It performs only file I/O and does not render anything.
"""

from __future__ import annotations

from pathlib import Path

from src.config import MARKDOWN_SUFFIX


def find_markdown_files(content_dir: Path) -> list[Path]:
    """Find Markdown files in ``content_dir`` and its direct subdirectories.

    Parameters
    ----------
    content_dir : Path
        Directory to search for ``*.md`` files. Nesting deeper than one
        directory level is ignored.

    Returns
    -------
    list[Path]
        Paths relative to ``content_dir``: top-level files first, then each
        subdirectory in name order, files sorted by name.
    """
    content_dir = Path(content_dir)
    if not content_dir.is_dir():
        return []
    files = sorted(
        p.relative_to(content_dir)
        for p in content_dir.glob(f"*{MARKDOWN_SUFFIX}")
        if p.is_file()
    )
    for subdir in sorted(p for p in content_dir.iterdir() if p.is_dir()):
        files.extend(
            sorted(
                p.relative_to(content_dir)
                for p in subdir.glob(f"*{MARKDOWN_SUFFIX}")
                if p.is_file()
            )
        )
    return files


def write_html_output(html_content: str, output_file: Path) -> None:
    """Write ``html_content`` to ``output_file``, creating parent directories.

    Raises
    ------
    OSError
        If the directory or file cannot be written.
    """
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(html_content, encoding="utf-8")
