"""Tests for the ``generate-site`` command-line entry point."""

import logging
from pathlib import Path

import pytest

import src.generate_site as cli


def test_parse_arguments_defaults():
    args = cli.parse_arguments([])
    assert args.root == Path.cwd()
    assert args.config is None
    assert args.log_level == "INFO"
    assert args.skip_extract is False


def test_parse_arguments_overrides(tmp_path: Path):
    args = cli.parse_arguments(
        ["--root", str(tmp_path), "--config", "x.json", "--log-level", "DEBUG", "--skip-extract"]
    )
    assert args.root == tmp_path
    assert args.config == Path("x.json")
    assert args.log_level == "DEBUG"
    assert args.skip_extract is True


def test_main_exits_with_build_code(monkeypatch, tmp_path: Path):
    calls = {}

    def fake_run(root, config_file, *, skip_extract):
        calls["args"] = (root, config_file, skip_extract)
        return 1

    monkeypatch.setenv("DISABLE_FILE_LOGS", "1")
    monkeypatch.setattr(cli, "run_from_config", fake_run)
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--root", str(tmp_path), "--skip-extract"])
    assert excinfo.value.code == 1
    assert calls["args"] == (tmp_path, None, True)


def test_configure_logging_console_only():
    cli.configure_logging("DEBUG", enable_file=False)
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert all(not isinstance(h, logging.FileHandler) for h in root.handlers)


def test_configure_logging_file_handler_error(monkeypatch):
    class BadFileHandler:
        def __init__(self, *args, **kwargs):
            raise OSError("read-only")

    monkeypatch.setattr(logging, "FileHandler", BadFileHandler)
    cli.configure_logging("INFO", enable_file=True)
    assert logging.getLogger().level == logging.INFO


def test_configure_logging_writes_file(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(cli, "LOG_DIR", tmp_path / "logs")
    cli.configure_logging("INFO", enable_file=True)
    logging.getLogger("src.test").info("hello log")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "hello log" in (tmp_path / "logs" / "generate_site.log").read_text(encoding="utf-8")
    cli.configure_logging("INFO", enable_file=False)
