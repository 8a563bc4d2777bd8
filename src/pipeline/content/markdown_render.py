"""Markdown to HTML conversion for post bodies.

Bodies are converted with ``markdown2`` using the extras configured in
``src.config.MARKDOWN_EXTRAS`` (tables, fenced code blocks, strikethrough,
footnotes, header ids), then lightly normalized.

Example
-------
>>> markdown_to_html("# Welcome")
'<h1 id="welcome">Welcome</h1>'
"""

from __future__ import annotations

import re
from typing import cast

import markdown2

from src.config import MARKDOWN_EXTRAS


def clean_html_output(html_content: str) -> str:
    r"""Remove empty paragraphs and redundant line breaks from generated HTML.

    Parameters
    ----------
    html_content : str
        Raw HTML string.

    Returns
    -------
    str
        Cleaned HTML string.

    Raises
    ------
    TypeError
        If input is not str.

    Examples
    --------
    >>> clean_html_output("<p></p><h1>Hi</h1><p>&nbsp;</p><br><br>")
    '<h1>Hi</h1><br>'
    """
    if not isinstance(html_content, str):
        raise TypeError("Input must be a string.")
    html_content = re.sub(r"<p>\s*</p>", "", html_content)
    html_content = re.sub(r"<p>&nbsp;</p>", "", html_content)
    html_content = re.sub(r"<p><br\s*/?>\s*</p>", "", html_content)
    html_content = re.sub(r"(<br\s*/?>\s*){2,}", "<br>", html_content)
    html_content = re.sub(r"\n\s*\n\s*\n+", "\n\n", html_content)
    return html_content.strip()


def markdown_to_html(markdown_text: str) -> str:
    """Convert a Markdown body to cleaned HTML.

    Parameters
    ----------
    markdown_text : str
        Markdown source without front matter.

    Returns
    -------
    str
        HTML fragment; ``""`` for an empty body.
    """
    if not markdown_text.strip():
        return ""
    html = cast(str, markdown2.markdown(markdown_text, extras=MARKDOWN_EXTRAS))
    return clean_html_output(html)
