"""Recursive-descent parser for the mustache-style placeholder syntax.

Recognized tags (names are ``\\w+``)::

    {{ name }}            variable
    {{> name }}           partial
    {{#each name}} ... {{/each}}
    {{#if name}} ... {{/if}}

Any other ``{{ ... }}`` text is kept as literal text, so templates without a
recognized tag parse to a single ``Text`` node and render unchanged.

Broken markup is handled in one of two ways. In lenient mode (the default)
an open tag without its close tag, or a close tag without its open tag, is
emitted as literal text. In strict mode the same input raises
:class:`src.exceptions.TemplateSyntaxError`.

Examples
--------
>>> parse("Hi {{ name }}!")
(Text(text='Hi '), Variable(name='name'), Text(text='!'))
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from src.exceptions import TemplateSyntaxError

from .nodes import Each, If, Node, Partial, Text, Variable

_TAG_RE = re.compile(
    r"\{\{\s*(?:"
    r">\s*(?P<partial>\w+)"
    r"|#(?P<open>each|if)\s+(?P<section>\w+)"
    r"|/(?P<close>each|if)"
    r"|(?P<variable>\w+)"
    r")\s*\}\}"
)


@dataclass(frozen=True)
class _Token:
    kind: str
    raw: str
    name: str = ""
    block: str = ""


def _tokenize(template: str) -> list[_Token]:
    tokens: list[_Token] = []
    pos = 0
    for match in _TAG_RE.finditer(template):
        start, end = match.span()
        if start > pos:
            tokens.append(_Token("text", template[pos:start]))
        raw = match.group(0)
        if match.group("partial"):
            tokens.append(_Token("partial", raw, name=match.group("partial")))
        elif match.group("open"):
            tokens.append(
                _Token("open", raw, name=match.group("section"), block=match.group("open"))
            )
        elif match.group("close"):
            tokens.append(_Token("close", raw, block=match.group("close")))
        else:
            tokens.append(_Token("variable", raw, name=match.group("variable")))
        pos = end
    if pos < len(template):
        tokens.append(_Token("text", template[pos:]))
    return tokens


class _Parser:
    """Build a node tree from a token list."""

    def __init__(self, tokens: list[_Token], strict: bool) -> None:
        self.tokens = tokens
        self.strict = strict
        self.pos = 0

    def parse(self) -> list[Node]:
        nodes, _ = self._parse_nodes([])
        return nodes

    def _parse_nodes(self, open_blocks: list[str]) -> tuple[list[Node], bool]:
        """Parse until the close tag of the innermost open block.

        Returns the parsed nodes and whether that close tag was found.
        """
        nodes: list[Node] = []
        while self.pos < len(self.tokens):
            token = self.tokens[self.pos]
            self.pos += 1
            if token.kind == "text":
                nodes.append(Text(token.raw))
            elif token.kind == "variable":
                nodes.append(Variable(token.name))
            elif token.kind == "partial":
                nodes.append(Partial(token.name))
            elif token.kind == "open":
                body, closed = self._parse_nodes(open_blocks + [token.block])
                if closed:
                    if token.block == "each":
                        nodes.append(Each(token.name, _merge_text(body)))
                    else:
                        nodes.append(If(token.name, _merge_text(body)))
                else:
                    if self.strict:
                        raise TemplateSyntaxError(
                            f"Unclosed {{{{#{token.block} {token.name}}}}} block",
                            context={"tag": token.raw},
                        )
                    nodes.append(Text(token.raw))
                    nodes.extend(body)
            else:
                if open_blocks and token.block == open_blocks[-1]:
                    return nodes, True
                if token.block in open_blocks:
                    # Belongs to an enclosing block; leave it for that level.
                    self.pos -= 1
                    return nodes, False
                if self.strict:
                    raise TemplateSyntaxError(
                        f"Unexpected {token.raw} without a matching open tag",
                        context={"tag": token.raw},
                    )
                nodes.append(Text(token.raw))
        return nodes, False


def _merge_text(nodes: list[Node]) -> tuple[Node, ...]:
    merged: list[Node] = []
    for node in nodes:
        if isinstance(node, Text) and merged and isinstance(merged[-1], Text):
            merged[-1] = Text(merged[-1].text + node.text)
        else:
            merged.append(node)
    return tuple(merged)


@lru_cache(maxsize=512)
def parse(template: str, strict: bool = False) -> tuple[Node, ...]:
    """Parse ``template`` into an immutable node sequence.

    Parameters
    ----------
    template : str
        Template text.
    strict : bool, optional
        Raise on unbalanced block tags instead of keeping them as text.

    Returns
    -------
    tuple[Node, ...]
        Top-level nodes. Adjacent text is merged.

    Raises
    ------
    src.exceptions.TemplateSyntaxError
        In strict mode, for unclosed or unexpected block tags.
    """
    if not template:
        return ()
    nodes = _Parser(_tokenize(template), strict).parse()
    return _merge_text(nodes)


def extract_placeholders(template: str) -> list[str]:
    """Return a sorted list of unique names referenced by ``template``.

    Variables, loop collections and conditions are included; partial names
    are not.

    Examples
    --------
    >>> extract_placeholders("{{#each posts}}{{ title }}{{/each}}{{ title }}")
    ['posts', 'title']
    """
    names: set[str] = set()

    def walk(nodes: tuple[Node, ...]) -> None:
        for node in nodes:
            if isinstance(node, Variable):
                names.add(node.name)
            elif isinstance(node, Each):
                names.add(node.collection)
                walk(node.body)
            elif isinstance(node, If):
                names.add(node.condition)
                walk(node.body)

    walk(parse(template))
    return sorted(names)
