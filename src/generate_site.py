"""Generate the static site.

Runs data extraction, renders every Markdown file in the content directory
into an HTML page, then writes the paginated home listing and taxonomy
pages. Prints build statistics when done.

Exit codes: ``0`` clean build, ``1`` entries skipped or errors recorded,
``2`` configuration error.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from src.config import LOG_DIR, LOG_FILENAME_GENERATE_SITE, LOG_FORMAT
from src.pipeline.site_builder import run_from_config

logger = logging.getLogger(__name__)


def configure_logging(log_level: str = "INFO", enable_file: bool = True) -> None:
    """Configure root logging with a console handler and an optional log file."""
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if enable_file:
        try:
            LOG_DIR.mkdir(exist_ok=True)
            handlers.insert(
                0,
                logging.FileHandler(LOG_DIR / LOG_FILENAME_GENERATE_SITE, mode="a"),
            )
        except OSError as error:
            logger.warning(f"File logging disabled: {error}")
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build a static site from Markdown content and HTML layouts."
    )
    parser.add_argument(
        "--root", type=Path, default=Path.cwd(), help="Site root directory."
    )
    parser.add_argument(
        "--config", type=Path, default=None, help="JSON site configuration file."
    )
    parser.add_argument("--log-level", type=str, default="INFO")
    parser.add_argument(
        "--skip-extract",
        action="store_true",
        help="Do not fetch CSV/JSON data sources before building.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entrypoint for site generation."""
    args = parse_arguments(argv)
    configure_logging(
        args.log_level, enable_file=not bool(os.environ.get("DISABLE_FILE_LOGS"))
    )
    code = run_from_config(args.root, args.config, skip_extract=args.skip_extract)
    sys.exit(code)


if __name__ == "__main__":
    main()
