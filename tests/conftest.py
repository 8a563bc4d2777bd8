"""Pytest configuration for test environment setup.

- Forces ``DISABLE_FILE_LOGS=1`` to avoid writing log files during tests.
- Ensures the project root is available on ``sys.path`` for imports.
- Provides a small site skeleton (layouts and partials) shared by tests.
"""

import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("DISABLE_FILE_LOGS", "1")  # Avoid creating log files during tests

# Ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

LAYOUTS = {
    "base": "<html><head><title>{{ title }}</title></head>"
    "<body>{{> header }}{{ content }}<footer>{{ currentYear }}</footer></body></html>",
    "single": "<article><h1>{{ title }}</h1>{{ content }}</article>",
    "list": "{{#each posts}}<li><a href=\"{{ url }}\">{{ title }}</a></li>{{/each}}",
    "index": "<ul>{{ list }}</ul>"
    "{{#if prevUrl}}<a class=\"prev\" href=\"{{ prevUrl }}\">Previous</a>{{/if}}"
    "{{#if nextUrl}}<a class=\"next\" href=\"{{ nextUrl }}\">Next</a>{{/if}}",
}

PARTIALS = {
    "header": "<header>{{ title }}</header>",
}


def write_templates(root: Path, layouts=None, partials=None) -> None:
    """Write layout and partial files under ``root`` in the default site layout."""
    layouts_dir = root / "prebuild" / "layouts"
    partials_dir = root / "partials"
    layouts_dir.mkdir(parents=True, exist_ok=True)
    partials_dir.mkdir(parents=True, exist_ok=True)
    for name, text in (LAYOUTS if layouts is None else layouts).items():
        (layouts_dir / f"{name}.html").write_text(text, encoding="utf-8")
    for name, text in (PARTIALS if partials is None else partials).items():
        (partials_dir / f"{name}.html").write_text(text, encoding="utf-8")


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """A site root with the default layouts and partials and an empty content dir."""
    write_templates(tmp_path)
    (tmp_path / "content").mkdir()
    return tmp_path


@pytest.fixture
def template_writer():
    """Return the helper that writes layout/partial files under a root."""
    return write_templates
