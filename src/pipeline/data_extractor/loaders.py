"""Parsing of CSV and JSON sources and mapping of records to Markdown files.

This module has no I/O of its own: it receives source text and returns
records, and turns a record into the text of a Markdown file with a front
matter block.

Examples
--------
>>> parse_csv("Title,Release Year\\nJaws,1975\\n")
[{'Title': 'Jaws', 'Release Year': '1975'}]
>>> title, text = record_to_markdown({"Title": "Jaws", "Plot": "A shark."})
>>> title
'Jaws'
"""

from __future__ import annotations

import io
import json
import logging
import re
from typing import Any

import pandas as pd

from src.config import BODY_FIELDS, TITLE_FIELDS, UNTITLED_TITLE
from src.exceptions import DataValidationError

from ..content import dump_front_matter

logger = logging.getLogger(__name__)

_KEY_SEPARATOR_RE = re.compile(r"[^0-9a-zA-Z]+")
_SCALAR_TYPES = (str, int, float, bool)


def parse_csv(text: str) -> list[dict[str, str]]:
    """Parse CSV text (header row first) into a list of string records.

    Missing cells become ``""``.

    Raises
    ------
    src.exceptions.DataValidationError
        If the text is empty or not parseable as CSV.
    """
    try:
        dataframe = pd.read_csv(io.StringIO(text), dtype=str).fillna("")
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as error:
        raise DataValidationError(f"Invalid CSV data: {error}") from error
    return [
        {str(key): value for key, value in row.items()}
        for row in dataframe.to_dict(orient="records")
    ]


def parse_json(text: str) -> list[dict[str, Any]]:
    """Parse JSON text into a list of records.

    A top-level object is treated as a single record. Non-object list items
    are skipped with a warning.

    Raises
    ------
    src.exceptions.DataValidationError
        If the text is not JSON or its top level is neither a list nor an
        object.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as error:
        raise DataValidationError(f"Invalid JSON data: {error}") from error
    if isinstance(data, dict):
        return [data]
    if not isinstance(data, list):
        raise DataValidationError(
            "JSON source must hold a list or an object",
            context={"type": type(data).__name__},
        )
    records = []
    for index, item in enumerate(data):
        if isinstance(item, dict):
            records.append(item)
        else:
            logger.warning(f"Skipping JSON item {index}: not an object")
    return records


def normalize_key(key: str) -> str:
    """Return ``key`` as a lowercase snake_case front matter key.

    Examples
    --------
    >>> normalize_key("Release Year")
    'release_year'
    >>> normalize_key("Origin/Ethnicity")
    'origin_ethnicity'
    """
    return _KEY_SEPARATOR_RE.sub("_", str(key)).strip("_").lower()


def _first_present(record: dict[str, Any], fields: list[str]) -> tuple[str | None, Any]:
    for name in fields:
        value = record.get(name)
        if value is not None and str(value).strip():
            return name, value
    return None, None


def map_record(record: dict[str, Any]) -> tuple[dict[str, Any], str]:
    """Map a source record to front matter metadata and a Markdown body.

    The title comes from the first non-empty title field, else the first
    entry of a ``titles`` list, else ``"Untitled"``. The body comes from the
    first non-empty body field. Every other scalar, non-empty field is kept
    under its normalized key. List and object fields cannot live in flat
    front matter; they are appended to the body as a fenced JSON block.

    Returns
    -------
    tuple[dict[str, Any], str]
        Metadata (``title`` first) and body text.
    """
    title_key, title = _first_present(record, TITLE_FIELDS)
    if title is None:
        titles = record.get("titles")
        if isinstance(titles, list) and titles:
            title_key, title = "titles", titles[0]
    title = str(title).strip() if title is not None else UNTITLED_TITLE
    body_key, body = _first_present(record, BODY_FIELDS)
    body_text = str(body).strip() if body is not None else ""

    metadata: dict[str, Any] = {"title": title}
    nested: dict[str, Any] = {}
    for key, value in record.items():
        if key in (title_key, body_key):
            continue
        if isinstance(value, (list, dict)):
            nested[key] = value
            continue
        if not isinstance(value, _SCALAR_TYPES):
            continue
        if isinstance(value, str) and not value.strip():
            continue
        normalized = normalize_key(key)
        if not normalized or normalized in metadata:
            continue
        metadata[normalized] = value
    if nested:
        logger.debug(f"Record {title!r}: nested fields {sorted(nested)} moved to the body")
        block = json.dumps(nested, indent=2, ensure_ascii=False, default=str)
        body_text = f"{body_text}\n\n```json\n{block}\n```".lstrip("\n")
    return metadata, body_text


def record_to_markdown(record: dict[str, Any]) -> tuple[str, str]:
    """Return the title and full Markdown text for ``record``."""
    metadata, body = map_record(record)
    return metadata["title"], dump_front_matter(metadata, body)
