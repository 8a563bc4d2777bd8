"""DataExtractor: CSV and JSON sources to Markdown content files.

Sources listed in the configuration are fetched concurrently (bounded by a
semaphore and an ``AsyncLimiter``), parsed into records and written as
Markdown files with a YAML front matter block into the content directory.
Slugs are unique across all sources of one run and are assigned in
configuration order (CSV sources, then JSON sources) after fetching, so the
generated file names do not depend on network timing.

A source that cannot be fetched or parsed is logged and recorded; the other
sources continue.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import aiohttp
from aiolimiter import AsyncLimiter

from src.config import (
    CONTENT_DIR_NAME,
    FETCH_TARGET_RPM,
    MARKDOWN_SUFFIX,
    MAX_CONCURRENT_TASKS,
)
from src.exceptions import AppError, DataValidationError, ExternalServiceError

from ..content import ensure_unique_slug, sanitize_slug
from .client import SourceFetcher
from .loaders import parse_csv, parse_json, record_to_markdown

logger = logging.getLogger(__name__)

PARSERS = {"csv": parse_csv, "json": parse_json}


@dataclass(frozen=True)
class SourceError:
    """A data source (or one of its records) that failed."""

    source: str
    error: AppError

    @property
    def message(self) -> str:
        return str(self.error)


@dataclass
class ExtractionResult:
    """Outcome of :meth:`DataExtractor.extract`."""

    files: list[Path] = field(default_factory=list)
    errors: list[SourceError] = field(default_factory=list)


class DataExtractor:
    """Turn configured CSV and JSON sources into Markdown content files.

    Parameters
    ----------
    config : Any
        Object supplying ``csv_sources``, ``json_sources``, ``content_dir``,
        ``data_dir``, ``max_concurrency``, ``fetch_target_rpm`` and the
        fetch settings read by :class:`SourceFetcher`.
    """

    def __init__(self, config: Any) -> None:
        self.config = config
        self.fetcher = SourceFetcher(config)
        self.content_dir = Path(getattr(config, "content_dir", CONTENT_DIR_NAME))

    def sources(self) -> list[tuple[str, str]]:
        """Return ``(kind, location)`` pairs in configuration order."""
        csv_sources = getattr(self.config, "csv_sources", None) or []
        json_sources = getattr(self.config, "json_sources", None) or []
        return [("csv", str(s)) for s in csv_sources] + [
            ("json", str(s)) for s in json_sources
        ]

    async def load_source(
        self,
        session: aiohttp.ClientSession,
        kind: str,
        location: str,
        rate_limiter: AsyncLimiter,
        semaphore: asyncio.Semaphore,
    ) -> list[dict[str, Any]] | SourceError:
        """Fetch and parse one source.

        Returns
        -------
        list[dict[str, Any]] | SourceError
            Parsed records, or the recorded failure.
        """
        async with semaphore:
            if self.fetcher.is_remote(location):
                async with rate_limiter:
                    ok, text, error_info = await self.fetcher.fetch(session, location)
            else:
                ok, text, error_info = await self.fetcher.fetch(session, location)
        if not ok or text is None:
            error = ExternalServiceError(
                f"Failed to fetch {kind.upper()} from {location}",
                context=error_info or {},
            )
            logger.error(f"Error processing {kind} from {location}: {error_info}")
            return SourceError(source=location, error=error)
        try:
            records = PARSERS[kind](text)
        except DataValidationError as error:
            logger.error(f"Error processing {kind} from {location}: {error}")
            return SourceError(source=location, error=error)
        logger.info(f"Loaded {len(records)} record(s) from {location}")
        return records

    async def extract(self) -> ExtractionResult:
        """Fetch every configured source and write one Markdown file per record.

        Returns
        -------
        ExtractionResult
            Written files in source then record order, plus recorded errors.
        """
        result = ExtractionResult()
        sources = self.sources()
        if not sources:
            logger.info("No data sources configured; skipping extraction")
            return result
        self.content_dir.mkdir(parents=True, exist_ok=True)
        rate_limiter = AsyncLimiter(
            getattr(self.config, "fetch_target_rpm", FETCH_TARGET_RPM), 60
        )
        semaphore = asyncio.Semaphore(
            getattr(self.config, "max_concurrency", MAX_CONCURRENT_TASKS)
        )
        async with aiohttp.ClientSession() as session:
            outcomes = await asyncio.gather(
                *(
                    self.load_source(session, kind, location, rate_limiter, semaphore)
                    for kind, location in sources
                )
            )

        existing_slugs: set[str] = set()
        for (_, location), outcome in zip(sources, outcomes):
            if isinstance(outcome, SourceError):
                result.errors.append(outcome)
                continue
            for record in outcome:
                title, markdown_text = record_to_markdown(record)
                slug = ensure_unique_slug(sanitize_slug(title), existing_slugs)
                output_file = self.content_dir / f"{slug}{MARKDOWN_SUFFIX}"
                try:
                    output_file.write_text(markdown_text, encoding="utf-8")
                except OSError as error:
                    logger.error(f"Error creating Markdown file {output_file}: {error}")
                    result.errors.append(
                        SourceError(
                            source=location,
                            error=DataValidationError(
                                f"Could not write {output_file}: {error}",
                                context={"file": str(output_file)},
                            ),
                        )
                    )
                    continue
                result.files.append(output_file)
        logger.info(
            f"Extracted {len(result.files)} file(s) from {len(sources)} source(s), "
            f"{len(result.errors)} error(s)"
        )
        return result
