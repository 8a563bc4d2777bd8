"""Context values and lookup rules for the template renderer.

A render context maps variable names to one of a small set of value shapes:
strings, booleans, numbers, ``None`` and lists of item mappings. Front matter
may carry other YAML scalars (dates, for instance); those are rendered through
their string form. All lookup misses render as an empty string.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Mapping, Sequence
from typing import Any, Union

ContextValue = Union[str, bool, int, float, None, Sequence[Mapping[str, Any]]]
Context = Mapping[str, Any]

# Key under which scalar loop items are exposed to the loop body.
SCALAR_ITEM_KEY = "value"


def is_truthy(value: Any) -> bool:
    """Return whether ``value`` enables a ``{{#if}}`` block.

    ``None``, ``False``, zero, empty strings and empty collections are falsy;
    everything else is truthy.

    Examples
    --------
    >>> is_truthy("yes"), is_truthy(""), is_truthy(0), is_truthy([])
    (True, False, False, False)
    """
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and value == 0:
        return False
    if isinstance(value, (str, Sequence, Mapping)) and len(value) == 0:
        return False
    return True


def _format_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    return str(value)


def stringify(value: Any) -> str:
    """Return the text inserted for a ``{{ name }}`` placeholder.

    Lists of scalars are joined with ``", "``; mapping items are skipped.

    Examples
    --------
    >>> stringify(None), stringify(True), stringify(10.0), stringify(["a", "b"])
    ('', 'true', '10', 'a, b')
    """
    if isinstance(value, Mapping):
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(
            _format_scalar(item) for item in value if not isinstance(item, Mapping)
        )
    return _format_scalar(value)


def loop_items(value: Any) -> list[Mapping[str, Any]]:
    """Return the per-iteration mappings for an ``{{#each}}`` collection.

    Anything that is not a list or tuple yields no iterations. Scalar items
    are wrapped as ``{"value": item}``.
    """
    if not isinstance(value, (list, tuple)):
        return []
    items: list[Mapping[str, Any]] = []
    for item in value:
        if isinstance(item, Mapping):
            items.append(item)
        else:
            items.append({SCALAR_ITEM_KEY: item})
    return items


def merge_context(parent: Context, item: Mapping[str, Any]) -> dict[str, Any]:
    """Merge one loop item over its parent context; item keys win."""
    merged = dict(parent)
    merged.update(item)
    return merged
