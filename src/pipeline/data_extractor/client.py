"""data_extractor.client module.

This module defines :class:`SourceFetcher`, the networking boundary of the
data extraction stage. It retrieves the raw text of one data source: a
remote ``http(s)`` URL through a shared ``aiohttp`` session, or a local file
resolved against the configured data directory.

The fetcher does not parse anything and does not raise on fetch failures.
It returns a ``(ok, text, error_info)`` tuple so that the calling processor
decides how a failed source is recorded.

Examples
--------
>>> class DummyConfig:
...     data_dir = "prebuild/data"
...     fetch_timeout = 5
...     fetch_max_retries = 0
>>> fetcher = SourceFetcher(DummyConfig())
>>> fetcher.is_remote("https://example.com/movies.csv")
True
>>> fetcher.is_remote("movies.csv")
False
"""

from __future__ import annotations

import asyncio
import logging
import urllib.parse
from pathlib import Path
from typing import Any

import aiohttp

from src.config import (
    DATA_DIR_NAME,
    FETCH_BACKOFF_FACTOR,
    FETCH_MAX_RETRIES,
    FETCH_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)

FetchResult = tuple[bool, str | None, dict[str, Any] | None]


class SourceFetcher:
    """Retrieve the raw text of CSV and JSON sources.

    Attributes
    ----------
    config : Any
        Object supplying ``data_dir``, ``fetch_timeout``,
        ``fetch_max_retries`` and ``fetch_backoff_factor``. Attributes are
        read with ``getattr`` and fall back to the defaults in
        :mod:`src.config`.
    """

    def __init__(self, config: Any) -> None:
        self.config = config

    @staticmethod
    def is_remote(location: str) -> bool:
        """Return True for ``http``/``https`` URLs."""
        return urllib.parse.urlparse(str(location)).scheme in ("http", "https")

    def resolve_local(self, location: str) -> Path:
        """Resolve a local source path; relative paths are taken from ``data_dir``."""
        path = Path(location)
        if path.is_absolute():
            return path
        return Path(getattr(self.config, "data_dir", DATA_DIR_NAME)) / path

    async def fetch(self, session: aiohttp.ClientSession, location: str) -> FetchResult:
        """Return the text of ``location``.

        Parameters
        ----------
        session : aiohttp.ClientSession
            Shared session used for remote sources. Not closed here.
        location : str
            URL or local path.

        Returns
        -------
        tuple[bool, str or None, dict or None]
            ``(True, text, None)`` on success, otherwise
            ``(False, None, error_info)`` where ``error_info`` carries an
            ``error_type`` or a ``status_code`` and a message.
        """
        if not self.is_remote(location):
            return await self._read_local(location)
        return await self._fetch_remote(session, location)

    async def _read_local(self, location: str) -> FetchResult:
        path = self.resolve_local(location)
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except OSError as error:
            return False, None, {"error_type": type(error).__name__, "message": str(error)}
        return True, text, None

    async def _fetch_remote(
        self, session: aiohttp.ClientSession, url: str
    ) -> FetchResult:
        max_retries = getattr(self.config, "fetch_max_retries", FETCH_MAX_RETRIES)
        backoff = getattr(self.config, "fetch_backoff_factor", FETCH_BACKOFF_FACTOR)
        timeout = aiohttp.ClientTimeout(
            total=getattr(self.config, "fetch_timeout", FETCH_TIMEOUT_SECONDS)
        )
        error_info: dict[str, Any] | None = None

        for attempt in range(max_retries + 1):
            try:
                async with session.get(url, timeout=timeout) as response:
                    status = response.status
                    text = await response.text()
                    if status == 200:
                        return True, text, None
                    error_info = {"status_code": status, "error_body": text[:200]}
            except aiohttp.ClientError as error:
                error_info = {"error_type": "ClientError", "message": str(error)}
            except TimeoutError:
                error_info = {"error_type": "TimeoutError", "message": f"Timed out fetching {url}"}

            if attempt < max_retries:
                logger.warning(f"Fetching {url} failed (attempt {attempt + 1}), retrying")
                await asyncio.sleep(backoff**attempt)
        return False, None, error_info
