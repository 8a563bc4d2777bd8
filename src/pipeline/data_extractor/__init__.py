"""Data extraction stage: CSV/JSON sources to Markdown content files."""

from .client import SourceFetcher
from .loaders import map_record, normalize_key, parse_csv, parse_json, record_to_markdown
from .processor import DataExtractor, ExtractionResult, SourceError

__all__ = [
    "DataExtractor",
    "ExtractionResult",
    "SourceError",
    "SourceFetcher",
    "map_record",
    "normalize_key",
    "parse_csv",
    "parse_json",
    "record_to_markdown",
]
