"""Static Site Generator package.

This module serves as the root of the static site generator package, which
turns Markdown files with front matter into HTML pages through a small
mustache-style templating engine, then builds paged index and tag listings.
Optional CSV/JSON data sources can be turned into Markdown content before
the build runs.

Package Structure
-----------------
- `pipeline/templating/`:
    Template store (layouts and partials), parser and renderer.
- `pipeline/content/`:
    Front matter, Markdown conversion, slugs and the per-file content pipeline.
- `pipeline/listing/`:
    Pagination and per-tag listing pages.
- `pipeline/data_extractor/`:
    CSV/JSON sources fetched from URLs or local files into Markdown files.
- `pipeline/site_builder/`:
    Site configuration, build orchestration and build statistics.
- `config.py`: All configuration constants (paths, limits), as UPPER_SNAKE_CASE.
- `exceptions.py`: Project-specific exception classes.
- `generate_site.py`: Command-line entry point.

Examples
--------
>>> from src.pipeline.site_builder import run_from_config
>>> # report = run_from_config()  # builds the site in the current project root
"""
