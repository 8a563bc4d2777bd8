"""Template renderer evaluating parsed node sequences against a context.

The renderer covers four constructs: variables, partials, ``{{#each}}``
loops and ``{{#if}}`` conditionals. Rendering is a pure function of the
template, the context and the (read-mostly) template store.

Partial semantics
-----------------
With ``recursive_partials=True`` (the default) a partial is parsed and
rendered with the context active at its inclusion point, so variables,
loops, conditionals and nested partials inside partials resolve. With
``recursive_partials=False`` the partial text is inserted verbatim and
nothing inside it is processed.

No HTML escaping is performed: values are inserted as-is, so output is not
safe for untrusted content.

Examples
--------
>>> renderer = TemplateRenderer()
>>> renderer.render("{{#each posts}}<li>{{ title }}</li>{{/each}}",
...                 {"posts": [{"title": "A"}, {"title": "B"}]})
'<li>A</li><li>B</li>'
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Mapping
from typing import Any

from src.config import BASE_LAYOUT, MAX_PARTIAL_DEPTH
from src.exceptions import TemplateRenderError

from .context import is_truthy, loop_items, merge_context, stringify
from .nodes import Each, If, Node, Partial, Text, Variable
from .parser import parse
from .store import TemplateStore

logger = logging.getLogger(__name__)


class TemplateRenderer:
    """Render templates with partials resolved through a :class:`TemplateStore`.

    Parameters
    ----------
    store : TemplateStore | None, optional
        Source of partial templates. Without a store every partial renders
        as ``""``.
    recursive_partials : bool, optional
        Render partial content with the current context (default) or insert
        it verbatim.
    max_partial_depth : int, optional
        Maximum nesting of partial inclusions before rendering fails.
    """

    def __init__(
        self,
        store: TemplateStore | None = None,
        *,
        recursive_partials: bool = True,
        max_partial_depth: int = MAX_PARTIAL_DEPTH,
    ) -> None:
        self.store = store
        self.recursive_partials = recursive_partials
        self.max_partial_depth = max_partial_depth

    def render(self, template: str, context: Mapping[str, Any] | None = None) -> str:
        """Render ``template`` against ``context``.

        Parameters
        ----------
        template : str
            Template text using the placeholder syntax.
        context : Mapping[str, Any] | None
            Variable values. Missing names render as ``""``.

        Returns
        -------
        str
            The rendered text. An empty template renders to ``""``.

        Raises
        ------
        src.exceptions.TemplateRenderError
            If partial inclusions nest deeper than ``max_partial_depth``.
        """
        if not template:
            return ""
        return self._render_nodes(parse(template), dict(context or {}), 0)

    def render_layout(self, name: str, context: Mapping[str, Any] | None = None) -> str:
        """Render the named layout from the store; missing layouts render ``""``."""
        if self.store is None:
            return ""
        return self.render(self.store.layout(name), context)

    def render_with_base(
        self, content: str, context: Mapping[str, Any] | None = None
    ) -> str:
        """Wrap already-rendered ``content`` in the ``base`` layout.

        ``content`` and ``currentYear`` are added to (and override) the
        supplied context.
        """
        base_context = dict(context or {})
        base_context["content"] = content
        base_context["currentYear"] = dt.date.today().year
        return self.render_layout(BASE_LAYOUT, base_context)

    def _render_nodes(
        self, nodes: tuple[Node, ...], context: Mapping[str, Any], depth: int
    ) -> str:
        parts: list[str] = []
        for node in nodes:
            if isinstance(node, Text):
                parts.append(node.text)
            elif isinstance(node, Variable):
                parts.append(stringify(context.get(node.name)))
            elif isinstance(node, Partial):
                parts.append(self._render_partial(node.name, context, depth))
            elif isinstance(node, Each):
                for item in loop_items(context.get(node.collection)):
                    parts.append(
                        self._render_nodes(node.body, merge_context(context, item), depth)
                    )
            elif isinstance(node, If):
                if is_truthy(context.get(node.condition)):
                    parts.append(self._render_nodes(node.body, context, depth))
        return "".join(parts)

    def _render_partial(self, name: str, context: Mapping[str, Any], depth: int) -> str:
        if self.store is None:
            return ""
        content = self.store.partial(name)
        if not content:
            logger.debug("Partial %r is empty or missing", name)
            return ""
        if not self.recursive_partials:
            return content
        if depth >= self.max_partial_depth:
            raise TemplateRenderError(
                f"Partial {name!r} exceeds the maximum inclusion depth of "
                f"{self.max_partial_depth}",
                context={"partial": name, "depth": depth},
            )
        return self._render_nodes(parse(content), context, depth + 1)


def render_template(
    template: str,
    context: Mapping[str, Any] | None = None,
    store: TemplateStore | None = None,
) -> str:
    """Render ``template`` with a one-off :class:`TemplateRenderer`.

    Examples
    --------
    >>> render_template("{{#if draft}}DRAFT {{/if}}{{ title }}", {"title": "Hi"})
    'Hi'
    """
    return TemplateRenderer(store).render(template, context)
