"""End-to-end tests: a complete site built through ``run_from_config``."""

import io
import json
from pathlib import Path

import pytest
from rich.console import Console

from src.pipeline.site_builder import run_from_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ["SSG_POSTS_PER_PAGE", "SSG_OUTPUT_DIR", "SSG_CONTENT_DIR", "SSG_TAXONOMIES"]:
        monkeypatch.delenv(name, raising=False)


def quiet_console() -> Console:
    return Console(file=io.StringIO(), record=True, width=120)


def write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_full_build(site_root: Path):
    content = site_root / "content"
    write(
        content / "01-first.md",
        '---\ntitle: "My First Blog Post"\ntags: [intro]\n---\n# Welcome\n\nFirst post.\n',
    )
    write(content / "02-hello.md", "---\ntitle: Hello World\ntags: intro, misc\n---\nOne\n")
    write(content / "03-hello.md", "---\ntitle: Hello World\n---\nTwo\n")
    write(content / "04-untitled.md", "No front matter here.\n")

    console = quiet_console()
    code = run_from_config(site_root, console=console)

    public = site_root / "public"
    assert code == 1  # one file was skipped
    assert (public / "my-first-blog-post.html").is_file()
    assert (public / "hello-world.html").is_file()
    assert (public / "hello-world-1.html").is_file()
    assert not (public / "04-untitled.html").exists()

    index = (public / "index.html").read_text(encoding="utf-8")
    assert '<a href="my-first-blog-post.html">My First Blog Post</a>' in index
    assert index.index("my-first-blog-post.html") < index.index('"hello-world.html"')
    assert "<title>Home</title>" in index

    intro = (public / "tags" / "tags" / "intro" / "index.html").read_text(encoding="utf-8")
    assert 'href="../../../my-first-blog-post.html"' in intro
    assert 'href="../../../hello-world.html"' in intro
    assert (public / "tags" / "tags" / "misc" / "index.html").is_file()

    summary = console.export_text()
    assert "Build Statistics" in summary
    assert "04-untitled.html" in summary


def test_clean_build_exits_zero_and_paginates(site_root: Path):
    (site_root / "site.config.json").write_text(
        json.dumps({"pagination": {"postsPerPage": 2}}), encoding="utf-8"
    )
    for i in range(5):
        write(site_root / "content" / f"p{i}.md", f"---\ntitle: Post {i}\n---\nBody {i}\n")

    assert run_from_config(site_root, console=quiet_console()) == 0
    public = site_root / "public"
    assert [p.name for p in sorted(public.glob("index*.html"))] == [
        "index-2.html",
        "index-3.html",
        "index.html",
    ]


def test_data_sources_feed_the_build(site_root: Path):
    write(site_root / "prebuild" / "data" / "movies.csv", "Title,Plot\nJaws,A shark.\n")
    (site_root / "site.config.json").write_text(
        json.dumps({"csv": {"include": ["movies.csv"]}}), encoding="utf-8"
    )
    assert run_from_config(site_root, console=quiet_console()) == 0
    assert (site_root / "content" / "jaws.md").is_file()
    page = (site_root / "public" / "jaws.html").read_text(encoding="utf-8")
    assert "<p>A shark.</p>" in page


def test_skip_extract(site_root: Path):
    write(site_root / "prebuild" / "data" / "movies.csv", "Title,Plot\nJaws,A shark.\n")
    (site_root / "site.config.json").write_text(
        json.dumps({"csv": {"include": ["movies.csv"]}}), encoding="utf-8"
    )
    assert run_from_config(site_root, skip_extract=True, console=quiet_console()) == 0
    assert not (site_root / "content" / "jaws.md").exists()
    assert (site_root / "public" / "index.html").is_file()


def test_configuration_error_exits_two(site_root: Path):
    (site_root / "site.config.json").write_text(
        json.dumps({"pagination": {"postsPerPage": 0}}), encoding="utf-8"
    )
    assert run_from_config(site_root, console=quiet_console()) == 2
    assert not (site_root / "public").exists()


def test_partial_cycle_is_reported_with_statistics(site_root: Path, template_writer):
    template_writer(site_root, layouts={}, partials={"header": "{{> header }}"})
    write(site_root / "content" / "a.md", "---\ntitle: A\n---\n")
    console = quiet_console()
    assert run_from_config(site_root, console=console) == 1
    summary = console.export_text()
    assert "Build Statistics" in summary
    assert "Index pages" in summary and "a.md" in summary


def test_failed_index_stage_still_writes_tag_pages(site_root: Path, template_writer):
    template_writer(
        site_root,
        layouts={"index": "{{> boom }}", "tag": "<h2>{{ tagName }}</h2><ul>{{ list }}</ul>"},
        partials={"boom": "{{> boom }}"},
    )
    write(site_root / "content" / "a.md", "---\ntitle: A\ntags: [x]\n---\nBody\n")
    console = quiet_console()
    assert run_from_config(site_root, console=console) == 1

    public = site_root / "public"
    assert (public / "a.html").is_file()
    assert not (public / "index.html").exists()
    tag_page = (public / "tags" / "tags" / "x" / "index.html").read_text(encoding="utf-8")
    assert '<a href="../../../a.html">A</a>' in tag_page
    summary = console.export_text()
    assert "Build Statistics" in summary
    assert "'boom'" in summary
