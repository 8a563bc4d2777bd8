"""Templating pipeline package.

Exposes the template store (named layouts and partials), the parser for the
mustache-style placeholder syntax and the renderer that evaluates parsed
templates against a context. Consumers import from this package rather than
from the submodules.

Examples
--------
>>> from src.pipeline.templating import TemplateRenderer, TemplateStore
>>> renderer = TemplateRenderer(TemplateStore(Path("prebuild/layouts"), Path("partials")))
>>> renderer.render("Hello {{ name }}", {"name": "world"})  # doctest: +SKIP
'Hello world'
"""

from .context import is_truthy, loop_items, merge_context, stringify
from .parser import extract_placeholders, parse
from .renderer import TemplateRenderer, render_template
from .store import NameFilter, PreloadReport, TemplateKind, TemplateStore

__all__ = [
    "NameFilter",
    "PreloadReport",
    "TemplateKind",
    "TemplateRenderer",
    "TemplateStore",
    "extract_placeholders",
    "is_truthy",
    "loop_items",
    "merge_context",
    "parse",
    "render_template",
    "stringify",
]
