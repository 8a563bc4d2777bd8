"""Node types produced by the template parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Variable:
    name: str


@dataclass(frozen=True)
class Partial:
    name: str


@dataclass(frozen=True)
class Each:
    collection: str
    body: tuple[Node, ...]


@dataclass(frozen=True)
class If:
    condition: str
    body: tuple[Node, ...]


Node = Union[Text, Variable, Partial, Each, If]
