"""Front matter parsing and serialization for Markdown files.

A front matter block is a YAML mapping between a leading ``---`` line and a
closing ``---`` line at the very top of the file::

    ---
    title: "My First Blog Post"
    tags: [intro, meta]
    ---
    Body text...
"""

from __future__ import annotations

import re
from typing import Any

import yaml

from src.exceptions import FrontMatterError

_FRONT_MATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?P<meta>.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE
)


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split ``text`` into its front matter mapping and Markdown body.

    Parameters
    ----------
    text : str
        Raw file content.

    Returns
    -------
    tuple[dict[str, Any], str]
        Metadata (empty when there is no front matter block) and the body.

    Raises
    ------
    src.exceptions.FrontMatterError
        If the block is not valid YAML or does not hold a mapping.

    Examples
    --------
    >>> split_front_matter('---\\ntitle: "Hi"\\n---\\nBody\\n')
    ({'title': 'Hi'}, 'Body\\n')
    >>> split_front_matter("No metadata")
    ({}, 'No metadata')
    """
    text = text.lstrip("\ufeff")
    match = _FRONT_MATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        metadata = yaml.safe_load(match.group("meta"))
    except yaml.YAMLError as error:
        raise FrontMatterError(f"Invalid YAML front matter: {error}") from error
    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise FrontMatterError(
            "Front matter must be a key/value mapping",
            context={"type": type(metadata).__name__},
        )
    return {str(key): value for key, value in metadata.items()}, text[match.end():]


def dump_front_matter(metadata: dict[str, Any], body: str = "") -> str:
    """Serialize ``metadata`` as a front matter block followed by ``body``.

    Examples
    --------
    >>> dump_front_matter({"title": "Hi"}, "Body")
    '---\\ntitle: Hi\\n---\\n\\nBody\\n'
    """
    block = yaml.safe_dump(metadata, sort_keys=False, allow_unicode=True)
    text = f"---\n{block}---\n"
    if body:
        text += f"\n{body.rstrip()}\n"
    return text
